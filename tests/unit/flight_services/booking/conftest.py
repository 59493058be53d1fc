from decimal import Decimal

import pytest

from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import BookingStatus, PassengerType, TripType
from flight_services.booking.domain.value_object import (
    Actor,
    BookingFees,
    BookingId,
    BookingPricing,
    BookingReference,
    Passenger,
)
from flight_services.shared.domain import Currency, IsoDateTime, UserId


@pytest.fixture
def create_booking():
    """FlightBooking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: BookingStatus = BookingStatus.CONFIRMED,
        booking_id: str = "booking-1",
        reference: str = "ABC123",
        user_id: str = "user-123",
        base_price: Decimal = Decimal("400"),
        taxes: Decimal = Decimal("50"),
        booking_fee: Decimal = Decimal("0"),
        passengers: tuple[Passenger, ...] | None = None,
        expires_at: str | None = None,
    ) -> FlightBooking:
        return FlightBooking(
            id=BookingId(value=booking_id),
            booking_reference=BookingReference(value=reference),
            user_id=UserId(value=user_id),
            trip_type=TripType.ONE_WAY,
            passengers=(
                passengers
                if passengers is not None
                else (
                    Passenger(
                        id="pax-1",
                        type=PassengerType.ADULT,
                        first_name="Taro",
                        last_name="Yamada",
                    ),
                )
            ),
            pricing=BookingPricing(
                base_price=base_price,
                taxes=taxes,
                currency=Currency.usd(),
                fees=BookingFees(booking_fee=booking_fee),
            ),
            status=status,
            created_at=IsoDateTime.from_string("2026-02-01T00:00:00+00:00"),
            expires_at=IsoDateTime.from_string(expires_at) if expires_at else None,
        )

    return _factory


@pytest.fixture
def customer():
    return Actor.customer(user_id="user-123", name="Taro Yamada")


@pytest.fixture
def system_actor():
    return Actor.system()
