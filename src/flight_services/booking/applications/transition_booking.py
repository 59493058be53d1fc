from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import ActorType, BookingStatus
from flight_services.booking.domain.repository import BookingRepository
from flight_services.booking.domain.service import transition
from flight_services.booking.domain.value_object import Actor, BookingId
from flight_services.shared.domain import Money, Result, UserId
from flight_services.shared.domain.exception import (
    DomainException,
    OptimisticLockException,
    ResourceNotFoundException,
    UnauthorizedException,
)
from flight_services.shared.utils import get_logger

logger = get_logger("booking")


class TransitionBookingService:
    """予約ステータス遷移サービス

    Repository から予約を取得し、遷移後のスナップショットを
    期待ステータス付きで更新する。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def execute(
        self,
        booking_id: BookingId,
        user_id: UserId,
        target_status: BookingStatus,
        actor: Actor,
        reason: str | None = None,
        cancellation_fees: Money | None = None,
    ) -> Result[FlightBooking, DomainException]:
        """予約ステータスを遷移させる"""
        loaded = self.load(booking_id, user_id, actor)
        if loaded.failed:
            return loaded

        return self.apply(
            loaded.unwrap(),
            target_status,
            actor,
            reason=reason,
            cancellation_fees=cancellation_fees,
        )

    def load(
        self, booking_id: BookingId, user_id: UserId, actor: Actor
    ) -> Result[FlightBooking, DomainException]:
        """予約を取得し、顧客による操作であれば所有者を確認する"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            return Result.failure(ResourceNotFoundException("booking", str(booking_id)))
        if actor.user_type == ActorType.CUSTOMER and not booking.is_owned_by(user_id):
            return Result.failure(UnauthorizedException("booking", str(booking_id)))
        return Result.ok(booking)

    def apply(
        self,
        booking: FlightBooking,
        target_status: BookingStatus,
        actor: Actor,
        reason: str | None = None,
        cancellation_fees: Money | None = None,
    ) -> Result[FlightBooking, DomainException]:
        """取得済みの予約に遷移を適用して永続化する"""
        expected_status = booking.status
        result = transition(
            booking,
            target_status,
            actor,
            reason,
            cancellation_fees=cancellation_fees,
        )
        if result.failed:
            logger.warning(
                "Rejected booking status transition",
                extra={
                    "booking_id": str(booking.id),
                    "from_status": expected_status.value,
                    "to_status": target_status.value,
                },
            )
            return result

        updated = result.unwrap()
        try:
            self._repository.update(updated, expected_status=expected_status)
        except OptimisticLockException as e:
            logger.warning(
                "Booking was modified concurrently",
                extra={
                    "booking_id": str(updated.id),
                    "expected_status": expected_status.value,
                },
            )
            return Result.failure(e)
        logger.info(
            "Booking status changed",
            extra={
                "booking_id": str(updated.id),
                "from_status": expected_status.value,
                "to_status": updated.status.value,
            },
        )
        return result
