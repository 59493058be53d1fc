"""予約ライフサイクル

状態遷移と、呼び出し側が操作可否を判断するための述語を提供する。
すべて副作用のない関数で、I/O は行わない。
"""

from __future__ import annotations

from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import (
    BookingStatus,
    ModificationType,
    RefundStatus,
)
from flight_services.booking.domain.value_object import (
    Actor,
    BookingModification,
    Cancellation,
    FieldChange,
)
from flight_services.shared.domain import IsoDateTime, Money, Result
from flight_services.shared.domain.exception import InvalidTransitionException

from .refund_calculator import calculate_refund
from .status_transitions import can_transition

_CANCELLABLE_STATUSES = frozenset(
    {
        BookingStatus.PENDING_PAYMENT,
        BookingStatus.CONFIRMED,
        BookingStatus.TICKETED,
    }
)
_CHECK_IN_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.TICKETED})
_MODIFIABLE_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.TICKETED})


def can_cancel(booking: FlightBooking) -> bool:
    return booking.status in _CANCELLABLE_STATUSES


def can_check_in(booking: FlightBooking) -> bool:
    return booking.status in _CHECK_IN_STATUSES


def can_modify(booking: FlightBooking) -> bool:
    return booking.status in _MODIFIABLE_STATUSES


def transition(
    booking: FlightBooking,
    target_status: BookingStatus,
    actor: Actor,
    reason: str | None = None,
    *,
    cancellation_fees: Money | None = None,
    now: IsoDateTime | None = None,
) -> Result[FlightBooking, InvalidTransitionException]:
    """予約ステータスを遷移させる

    Args:
        booking: 現在の予約スナップショット（変更されない）
        target_status: 遷移先ステータス
        actor: 操作者（履歴に記録するのみ）
        reason: 任意の理由（キャンセル理由など）
        cancellation_fees: CANCELLED への遷移時に差し引く手数料（省略時 0）
        now: 記録する時刻（省略時は現在時刻）

    Returns:
        成功時は新しいスナップショット、遷移表にない場合は InvalidTransitionException
    """
    current_status = booking.status
    if not can_transition(current_status, target_status):
        return Result.failure(InvalidTransitionException(current_status, target_status))

    timestamp = now or IsoDateTime.now()
    modification = BookingModification(
        type=_modification_type_for(target_status),
        description=_describe(current_status, target_status, reason),
        timestamp=timestamp,
        performed_by=actor,
        changes=(
            FieldChange(
                field="status",
                old_value=current_status.value,
                new_value=target_status.value,
            ),
        ),
    )

    cancellation = booking.cancellation
    if target_status == BookingStatus.CANCELLED:
        fees = cancellation_fees or Money.zero(booking.pricing.currency)
        cancellation = Cancellation(
            reason=reason or "",
            cancelled_at=timestamp,
            cancelled_by=actor,
            refund_amount=calculate_refund(booking, fees),
            cancellation_fees=fees,
        )
    elif target_status == BookingStatus.REFUNDED and cancellation is not None:
        cancellation = cancellation.with_refund_status(RefundStatus.PROCESSED)

    return Result.ok(
        booking.evolve(
            status=target_status,
            modifications=booking.modifications + (modification,),
            cancellation=cancellation,
            updated_at=timestamp,
        )
    )


def _modification_type_for(target_status: BookingStatus) -> ModificationType:
    if target_status == BookingStatus.CANCELLED:
        return ModificationType.CANCELLATION
    if target_status == BookingStatus.REFUNDED:
        return ModificationType.REFUND
    return ModificationType.STATUS_CHANGE


def _describe(
    current_status: BookingStatus, target_status: BookingStatus, reason: str | None
) -> str:
    description = (
        f"Booking status changed from {current_status.value} to {target_status.value}"
    )
    if reason:
        description = f"{description}: {reason}"
    return description
