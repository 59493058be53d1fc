from decimal import Decimal

import pytest

from flight_services.booking.domain.enum import (
    BookingStatus,
    ModificationType,
    RefundStatus,
)
from flight_services.booking.domain.service import (
    can_cancel,
    can_check_in,
    can_modify,
    transition,
)
from flight_services.shared.domain import InvalidTransitionException


class TestTransition:
    """transition のテスト"""

    def test_successful_transition_appends_one_modification(
        self, create_booking, customer, now
    ):
        """遷移に成功すると変更履歴が1件だけ追加される"""
        booking = create_booking(status=BookingStatus.CONFIRMED)

        result = transition(booking, BookingStatus.TICKETED, customer, now=now)

        assert result.success
        updated = result.unwrap()
        assert updated.status == BookingStatus.TICKETED
        assert len(updated.modifications) == len(booking.modifications) + 1

        modification = updated.modifications[-1]
        assert modification.type == ModificationType.STATUS_CHANGE
        assert modification.performed_by == customer
        assert modification.timestamp == now
        assert modification.description == (
            "Booking status changed from CONFIRMED to TICKETED"
        )
        assert modification.changes[0].field == "status"
        assert modification.changes[0].old_value == "CONFIRMED"
        assert modification.changes[0].new_value == "TICKETED"
        assert updated.updated_at == now

    def test_identity_is_preserved(self, create_booking, customer):
        """遷移しても id・予約番号・所有者は変わらない"""
        booking = create_booking(status=BookingStatus.PENDING_PAYMENT)

        updated = transition(booking, BookingStatus.CONFIRMED, customer).unwrap()
        updated = transition(updated, BookingStatus.TICKETED, customer).unwrap()

        assert updated.id == booking.id
        assert updated.booking_reference == booking.booking_reference
        assert updated.user_id == booking.user_id
        assert len(updated.modifications) == 2

    def test_original_snapshot_is_unchanged(self, create_booking, customer):
        booking = create_booking(status=BookingStatus.CONFIRMED)

        transition(booking, BookingStatus.CANCELLED, customer, "Change of plans")

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.modifications == ()
        assert booking.cancellation is None

    def test_illegal_transition_returns_failure(self, create_booking, customer):
        """遷移表にない遷移は InvalidTransitionException を返す"""
        booking = create_booking(status=BookingStatus.COMPLETED)

        result = transition(booking, BookingStatus.CANCELLED, customer)

        assert result.failed
        assert isinstance(result.error, InvalidTransitionException)
        assert result.error.from_status == BookingStatus.COMPLETED
        assert result.error.to_status == BookingStatus.CANCELLED

    def test_cancellation_records_refund(self, create_booking, customer, now, usd):
        """CANCELLED への遷移でキャンセル情報が記録される"""
        booking = create_booking(status=BookingStatus.CONFIRMED)

        result = transition(
            booking,
            BookingStatus.CANCELLED,
            customer,
            "Change of plans",
            cancellation_fees=usd(100),
            now=now,
        )

        updated = result.unwrap()
        assert updated.cancellation.reason == "Change of plans"
        assert updated.cancellation.cancelled_by == customer
        assert updated.cancellation.cancelled_at == now
        assert updated.cancellation.cancellation_fees == usd(100)
        assert updated.cancellation.refund_amount == usd(350)
        assert updated.cancellation.refund_status == RefundStatus.PENDING
        assert updated.modifications[-1].type == ModificationType.CANCELLATION
        assert updated.modifications[-1].description == (
            "Booking status changed from CONFIRMED to CANCELLED: Change of plans"
        )

    def test_cancellation_without_fees_refunds_total(self, create_booking, customer):
        """手数料なしのキャンセルは総額を払い戻す"""
        booking = create_booking(status=BookingStatus.TICKETED)

        updated = transition(booking, BookingStatus.CANCELLED, customer).unwrap()

        assert updated.cancellation.refund_amount == booking.pricing.total

    def test_refund_marks_refund_processed(self, create_booking, customer, system_actor):
        booking = create_booking(status=BookingStatus.CONFIRMED)
        cancelled = transition(booking, BookingStatus.CANCELLED, customer).unwrap()

        refunded = transition(cancelled, BookingStatus.REFUNDED, system_actor).unwrap()

        assert refunded.status == BookingStatus.REFUNDED
        assert refunded.cancellation.refund_status == RefundStatus.PROCESSED
        assert refunded.modifications[-1].type == ModificationType.REFUND
        assert len(refunded.modifications) == 2

    def test_unknown_target_raises_type_error(self, create_booking, customer):
        booking = create_booking()
        with pytest.raises(TypeError):
            transition(booking, "CANCELLED", customer)


class TestPredicates:
    """操作可否の述語のテスト"""

    @pytest.mark.parametrize("status", list(BookingStatus))
    def test_can_cancel_implies_cancel_transition_succeeds(
        self, create_booking, customer, status
    ):
        """can_cancel が True なら CANCELLED への遷移は成功する"""
        booking = create_booking(status=status)
        if can_cancel(booking):
            assert transition(booking, BookingStatus.CANCELLED, customer).success

    @pytest.mark.parametrize(
        ("status", "cancel", "check_in", "modify"),
        [
            (BookingStatus.PENDING_PAYMENT, True, False, False),
            (BookingStatus.CONFIRMED, True, True, True),
            (BookingStatus.TICKETED, True, True, True),
            (BookingStatus.CHECKED_IN, False, False, False),
            (BookingStatus.CANCELLED, False, False, False),
            (BookingStatus.COMPLETED, False, False, False),
        ],
    )
    def test_predicates(self, create_booking, status, cancel, check_in, modify):
        booking = create_booking(status=status)
        assert can_cancel(booking) is cancel
        assert can_check_in(booking) is check_in
        assert can_modify(booking) is modify

    def test_predicates_are_idempotent(self, create_booking):
        """述語は何度呼んでも同じ結果で、予約を変更しない"""
        booking = create_booking(status=BookingStatus.CONFIRMED)
        for predicate in (can_cancel, can_check_in, can_modify):
            assert predicate(booking) == predicate(booking)
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.modifications == ()


class TestRefund:
    def test_refund_is_never_negative(self, create_booking, customer, usd):
        """手数料が総額を超えても払い戻し額は 0"""
        booking = create_booking(base_price=Decimal("50"), taxes=Decimal("0"))

        updated = transition(
            booking,
            BookingStatus.CANCELLED,
            customer,
            cancellation_fees=usd(80),
        ).unwrap()

        assert updated.cancellation.refund_amount == usd(0)
