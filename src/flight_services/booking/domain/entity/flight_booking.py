from __future__ import annotations

from typing import Any

from flight_services.booking.domain.enum import BookingStatus, TripType
from flight_services.booking.domain.value_object import (
    BookingId,
    BookingModification,
    BookingPricing,
    BookingReference,
    Cancellation,
    Passenger,
)
from flight_services.shared.domain import Entity, IsoDateTime, UserId
from flight_services.shared.domain.exception import BusinessRuleViolationException

# 搭乗者が未確定でも存在しうるステータス
_STATUSES_WITHOUT_PASSENGERS = frozenset(
    {
        BookingStatus.PENDING_PAYMENT,
        BookingStatus.PAYMENT_FAILED,
        BookingStatus.EXPIRED,
    }
)

_STATUSES_WITH_CANCELLATION = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.REFUNDED}
)


class FlightBooking(Entity[BookingId]):
    """フライト予約（スナップショット）

    状態を書き換えるメソッドは持たない。
    状態遷移は booking_lifecycle.transition が新しいスナップショットを返す形で行う。
    """

    def __init__(
        self,
        id: BookingId,
        booking_reference: BookingReference,
        user_id: UserId,
        trip_type: TripType,
        passengers: tuple[Passenger, ...],
        pricing: BookingPricing,
        created_at: IsoDateTime,
        status: BookingStatus = BookingStatus.PENDING_PAYMENT,
        modifications: tuple[BookingModification, ...] = (),
        cancellation: Cancellation | None = None,
        updated_at: IsoDateTime | None = None,
        expires_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)

        if not isinstance(status, BookingStatus):
            raise TypeError(f"Unknown booking status: {status!r}")

        self._booking_reference = booking_reference
        self._user_id = user_id
        self._trip_type = trip_type
        self._passengers = tuple(passengers)
        self._pricing = pricing
        self._status = status
        self._modifications = tuple(modifications)
        self._cancellation = cancellation
        self._created_at = created_at
        self._updated_at = updated_at or created_at
        self._expires_at = expires_at

        self._validate_passengers()
        self._validate_cancellation()

    def _validate_passengers(self) -> None:
        """確定以降の予約には搭乗者が1名以上必要"""
        if self._status not in _STATUSES_WITHOUT_PASSENGERS and not self._passengers:
            raise BusinessRuleViolationException(
                f"Booking in {self._status.value} must have at least one passenger"
            )

    def _validate_cancellation(self) -> None:
        """キャンセル情報は CANCELLED を経由した予約にのみ存在する"""
        if self._cancellation is not None and self._status not in _STATUSES_WITH_CANCELLATION:
            raise BusinessRuleViolationException(
                f"Booking in {self._status.value} cannot carry cancellation details"
            )

    @property
    def booking_reference(self) -> BookingReference:
        return self._booking_reference

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def trip_type(self) -> TripType:
        return self._trip_type

    @property
    def passengers(self) -> tuple[Passenger, ...]:
        return self._passengers

    @property
    def pricing(self) -> BookingPricing:
        return self._pricing

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def modifications(self) -> tuple[BookingModification, ...]:
        return self._modifications

    @property
    def cancellation(self) -> Cancellation | None:
        return self._cancellation

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    @property
    def expires_at(self) -> IsoDateTime | None:
        return self._expires_at

    def is_owned_by(self, user_id: UserId) -> bool:
        return self._user_id == user_id

    def is_payment_overdue(self, now: IsoDateTime) -> bool:
        """支払い期限切れかどうか"""
        return (
            self._status == BookingStatus.PENDING_PAYMENT
            and self._expires_at is not None
            and self._expires_at.is_before(now)
        )

    def evolve(self, **changes: Any) -> FlightBooking:
        """指定したフィールドのみ差し替えた新しいスナップショットを返す

        id と booking_reference と user_id は差し替えられない。
        """
        for immutable in ("id", "booking_reference", "user_id"):
            if immutable in changes:
                raise BusinessRuleViolationException(f"{immutable} is immutable")

        attributes = {
            "id": self.id,
            "booking_reference": self._booking_reference,
            "user_id": self._user_id,
            "trip_type": self._trip_type,
            "passengers": self._passengers,
            "pricing": self._pricing,
            "created_at": self._created_at,
            "status": self._status,
            "modifications": self._modifications,
            "cancellation": self._cancellation,
            "updated_at": self._updated_at,
            "expires_at": self._expires_at,
        }
        attributes.update(changes)
        return FlightBooking(**attributes)
