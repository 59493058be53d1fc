from flight_services.booking.applications.transition_booking import (
    TransitionBookingService,
)
from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import BookingStatus
from flight_services.booking.domain.policy import CancellationFeePolicy
from flight_services.booking.domain.repository import BookingRepository
from flight_services.booking.domain.value_object import Actor, BookingId
from flight_services.shared.domain import Result, UserId
from flight_services.shared.domain.exception import DomainException


class CancelBookingService:
    """予約キャンセルサービス

    キャンセル手数料をポリシーから取得し、CANCELLED への遷移を行う。
    """

    def __init__(
        self, repository: BookingRepository, fee_policy: CancellationFeePolicy
    ) -> None:
        self._transitions = TransitionBookingService(repository=repository)
        self._fee_policy = fee_policy

    def cancel(
        self,
        booking_id: BookingId,
        user_id: UserId,
        reason: str,
        actor: Actor,
    ) -> Result[FlightBooking, DomainException]:
        """予約をキャンセルする"""
        loaded = self._transitions.load(booking_id, user_id, actor)
        if loaded.failed:
            return loaded

        booking = loaded.unwrap()
        return self._transitions.apply(
            booking,
            BookingStatus.CANCELLED,
            actor,
            reason=reason,
            cancellation_fees=self._fee_policy.fees_for(booking),
        )
