from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from flight_services.shared.domain import IsoDateTime

PRICE_HISTORY_CAPACITY = 30


@dataclass(frozen=True)
class PriceHistoryEntry:
    """価格履歴の1件"""

    date: IsoDateTime
    price: Decimal
    change: Decimal
    change_percent: Decimal


@dataclass(frozen=True)
class PriceHistory:
    """価格履歴（古い順、最大30件）

    上限を超えて追加した場合は最も古いエントリから破棄する。
    """

    entries: tuple[PriceHistoryEntry, ...] = ()

    def __post_init__(self) -> None:
        if len(self.entries) > PRICE_HISTORY_CAPACITY:
            object.__setattr__(
                self, "entries", tuple(self.entries[-PRICE_HISTORY_CAPACITY:])
            )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PriceHistoryEntry]:
        return iter(self.entries)

    def append(self, entry: PriceHistoryEntry) -> PriceHistory:
        return PriceHistory(
            entries=(self.entries + (entry,))[-PRICE_HISTORY_CAPACITY:]
        )

    @property
    def latest(self) -> PriceHistoryEntry | None:
        return self.entries[-1] if self.entries else None
