from decimal import Decimal

from flight_services.price_alert.domain.value_object import (
    PRICE_HISTORY_CAPACITY,
    PriceHistory,
    PriceHistoryEntry,
)
from flight_services.shared.domain import IsoDateTime


def _entry(price: int) -> PriceHistoryEntry:
    return PriceHistoryEntry(
        date=IsoDateTime.from_string("2026-03-01T00:00:00Z"),
        price=Decimal(price),
        change=Decimal("0"),
        change_percent=Decimal("0"),
    )


class TestPriceHistory:
    """PriceHistory Value Object のテスト"""

    def test_append_returns_new_history(self):
        history = PriceHistory()
        appended = history.append(_entry(100))

        assert len(history) == 0
        assert len(appended) == 1
        assert appended.latest.price == Decimal("100")

    def test_oldest_entry_is_evicted_when_full(self):
        """上限を超えると最も古いエントリが破棄される"""
        history = PriceHistory()
        for price in range(PRICE_HISTORY_CAPACITY + 1):
            history = history.append(_entry(price))

        assert len(history) == PRICE_HISTORY_CAPACITY
        assert [e.price for e in history] == [
            Decimal(p) for p in range(1, PRICE_HISTORY_CAPACITY + 1)
        ]

    def test_oversized_input_is_truncated(self):
        history = PriceHistory(entries=tuple(_entry(p) for p in range(40)))
        assert len(history) == PRICE_HISTORY_CAPACITY
        assert history.entries[0].price == Decimal("10")
