import pytest

from flight_services.booking.domain.enum import BookingStatus
from flight_services.booking.domain.service import (
    TERMINAL_STATUSES,
    allowed_transitions,
    can_transition,
    is_terminal,
)


class TestStatusTransitions:
    """予約ステータス遷移表のテスト"""

    @pytest.mark.parametrize(
        ("from_status", "to_status"),
        [
            (BookingStatus.PENDING_PAYMENT, BookingStatus.CONFIRMED),
            (BookingStatus.PENDING_PAYMENT, BookingStatus.EXPIRED),
            (BookingStatus.PAYMENT_FAILED, BookingStatus.PENDING_PAYMENT),
            (BookingStatus.CONFIRMED, BookingStatus.TICKETED),
            (BookingStatus.TICKETED, BookingStatus.CHECKED_IN),
            (BookingStatus.CHECKED_IN, BookingStatus.BOARDING),
            (BookingStatus.BOARDING, BookingStatus.DEPARTED),
            (BookingStatus.DEPARTED, BookingStatus.COMPLETED),
            (BookingStatus.CANCELLED, BookingStatus.REFUNDED),
        ],
    )
    def test_allowed_transitions(self, from_status, to_status):
        assert can_transition(from_status, to_status) is True

    @pytest.mark.parametrize(
        ("from_status", "to_status"),
        [
            (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
            (BookingStatus.REFUNDED, BookingStatus.CANCELLED),
            (BookingStatus.EXPIRED, BookingStatus.PENDING_PAYMENT),
            (BookingStatus.CONFIRMED, BookingStatus.PENDING_PAYMENT),
            (BookingStatus.DEPARTED, BookingStatus.BOARDING),
            (BookingStatus.CONFIRMED, BookingStatus.CONFIRMED),
        ],
    )
    def test_rejected_transitions(self, from_status, to_status):
        assert can_transition(from_status, to_status) is False

    def test_every_status_has_an_entry(self):
        """すべてのステータスが遷移表に含まれる"""
        for status in BookingStatus:
            allowed_transitions(status)

    def test_terminal_statuses(self):
        """CANCELLED は終端だが REFUNDED への遷移のみ持つ"""
        assert TERMINAL_STATUSES == {
            BookingStatus.COMPLETED,
            BookingStatus.CANCELLED,
            BookingStatus.REFUNDED,
            BookingStatus.EXPIRED,
        }
        for status in (
            BookingStatus.COMPLETED,
            BookingStatus.REFUNDED,
            BookingStatus.EXPIRED,
        ):
            assert is_terminal(status)
            assert allowed_transitions(status) == frozenset()
        assert allowed_transitions(BookingStatus.CANCELLED) == {BookingStatus.REFUNDED}

    def test_unknown_status_raises_type_error(self):
        with pytest.raises(TypeError):
            can_transition("CONFIRMED", BookingStatus.TICKETED)
        with pytest.raises(TypeError):
            can_transition(BookingStatus.CONFIRMED, "TICKETED")
