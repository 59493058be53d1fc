import os
from datetime import timedelta
from decimal import Decimal
from typing import Callable, NotRequired, TypedDict

from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import (
    BookingStatus,
    ModificationType,
    PassengerType,
    TripType,
)
from flight_services.booking.domain.value_object import (
    Actor,
    BookingAddOns,
    BookingDiscounts,
    BookingFees,
    BookingId,
    BookingModification,
    BookingPricing,
    BookingReference,
    Passenger,
    PromoCodeDiscount,
)
from flight_services.shared.domain import Currency, IsoDateTime, UserId
from flight_services.shared.domain.exception import (
    BusinessRuleViolationException,
    DuplicateResourceException,
)

MAX_REFERENCE_ATTEMPTS = 5
DEFAULT_PAYMENT_GRACE_MINUTES = 30


class PassengerDetails(TypedDict):
    """搭乗者の入力データ構造"""

    id: str
    type: str
    first_name: str
    last_name: str
    date_of_birth: NotRequired[str]
    nationality: NotRequired[str]
    seat_number: NotRequired[str]


class PricingDetails(TypedDict):
    """料金の入力データ構造"""

    base_price: Decimal
    taxes: Decimal
    currency: str
    fees: NotRequired[dict[str, Decimal]]
    add_ons: NotRequired[dict[str, Decimal]]
    promo_code: NotRequired[dict]
    loyalty_discount: NotRequired[Decimal]
    member_discount: NotRequired[Decimal]


class BookingDetails(TypedDict):
    """予約の入力データ構造"""

    trip_type: str
    passengers: list[PassengerDetails]
    pricing: PricingDetails


class BookingFactory:
    """フライト予約エンティティのファクトリ

    - ID と予約番号の採番（予約番号は重複時に再採番する）
    - プリミティブ型から Value Object への変換
    - 初期状態 (PENDING_PAYMENT) と作成履歴の設定
    """

    def __init__(
        self,
        reference_exists: Callable[[str], bool] | None = None,
        payment_grace: timedelta | None = None,
    ) -> None:
        self._reference_exists = reference_exists or (lambda _: False)
        self._payment_grace = payment_grace or timedelta(
            minutes=int(
                os.getenv("PAYMENT_GRACE_MINUTES", DEFAULT_PAYMENT_GRACE_MINUTES)
            )
        )

    def create(
        self,
        user_id: UserId,
        details: BookingDetails,
        actor: Actor | None = None,
        now: IsoDateTime | None = None,
    ) -> FlightBooking:
        """新規予約エンティティを生成する

        Returns:
            FlightBooking: 生成された予約エンティティ（PENDING_PAYMENT状態）
        """
        created_at = now or IsoDateTime.now()
        passengers = tuple(self._to_passenger(p) for p in details["passengers"])
        if not passengers:
            raise BusinessRuleViolationException(
                "A booking requires at least one passenger"
            )

        reference = self._generate_unique_reference()
        creator = actor or Actor.customer(user_id=str(user_id), name=str(user_id))

        return FlightBooking(
            id=BookingId.generate(),
            booking_reference=reference,
            user_id=user_id,
            trip_type=TripType(details["trip_type"]),
            passengers=passengers,
            pricing=self._to_pricing(details["pricing"]),
            status=BookingStatus.PENDING_PAYMENT,
            modifications=(
                BookingModification(
                    type=ModificationType.CREATION,
                    description=f"Booking {reference.formatted()} created",
                    timestamp=created_at,
                    performed_by=creator,
                ),
            ),
            created_at=created_at,
            expires_at=IsoDateTime(created_at.value + self._payment_grace),
        )

    def _generate_unique_reference(self) -> BookingReference:
        for _ in range(MAX_REFERENCE_ATTEMPTS):
            reference = BookingReference.generate()
            if not self._reference_exists(reference.value):
                return reference
        raise DuplicateResourceException("Could not generate unique booking reference")

    @staticmethod
    def _to_passenger(details: PassengerDetails) -> Passenger:
        return Passenger(
            id=details["id"],
            type=PassengerType(details["type"]),
            first_name=details["first_name"],
            last_name=details["last_name"],
            date_of_birth=details.get("date_of_birth"),
            nationality=details.get("nationality"),
            seat_number=details.get("seat_number"),
        )

    @staticmethod
    def _to_pricing(details: PricingDetails) -> BookingPricing:
        promo = details.get("promo_code")
        return BookingPricing(
            base_price=Decimal(str(details["base_price"])),
            taxes=Decimal(str(details["taxes"])),
            currency=Currency(details["currency"]),
            fees=BookingFees(
                **{k: Decimal(str(v)) for k, v in details.get("fees", {}).items()}
            ),
            add_ons=BookingAddOns(
                **{k: Decimal(str(v)) for k, v in details.get("add_ons", {}).items()}
            ),
            discounts=BookingDiscounts(
                promo_code=(
                    PromoCodeDiscount(
                        code=promo["code"],
                        discount=Decimal(str(promo["discount"])),
                        description=promo.get("description", ""),
                    )
                    if promo
                    else None
                ),
                loyalty_discount=Decimal(str(details.get("loyalty_discount", 0))),
                member_discount=Decimal(str(details.get("member_discount", 0))),
            ),
        )
