from datetime import timedelta
from decimal import Decimal

import pytest

from flight_services.booking.domain.enum import (
    ActorType,
    BookingStatus,
    ModificationType,
    PassengerType,
)
from flight_services.booking.domain.factory import BookingDetails, BookingFactory
from flight_services.booking.domain.value_object import BookingReference
from flight_services.shared.domain import (
    BusinessRuleViolationException,
    DuplicateResourceException,
)


@pytest.fixture
def booking_details() -> BookingDetails:
    return {
        "trip_type": "round-trip",
        "passengers": [
            {
                "id": "pax-1",
                "type": "adult",
                "first_name": "Hanako",
                "last_name": "Suzuki",
                "seat_number": "12A",
            }
        ],
        "pricing": {
            "base_price": Decimal("800"),
            "taxes": Decimal("120"),
            "currency": "USD",
            "fees": {"booking_fee": Decimal("15")},
            "promo_code": {"code": "WELCOME", "discount": Decimal("35")},
        },
    }


class TestBookingFactory:
    """BookingFactory のテスト"""

    def test_create_pending_booking(self, user_id, now, booking_details):
        """支払い待ちの予約が作成履歴付きで生成される"""
        factory = BookingFactory(payment_grace=timedelta(minutes=30))

        booking = factory.create(user_id, booking_details, now=now)

        assert booking.status == BookingStatus.PENDING_PAYMENT
        assert booking.user_id == user_id
        assert BookingReference.is_valid(booking.booking_reference.value)
        assert booking.passengers[0].type == PassengerType.ADULT
        assert booking.passengers[0].seat_number == "12A"
        assert booking.pricing.total.amount == Decimal("900")
        assert booking.expires_at.value == now.value + timedelta(minutes=30)

        assert len(booking.modifications) == 1
        creation = booking.modifications[0]
        assert creation.type == ModificationType.CREATION
        assert creation.performed_by.user_type == ActorType.CUSTOMER

    def test_payment_grace_from_environment(
        self, monkeypatch, user_id, now, booking_details
    ):
        monkeypatch.setenv("PAYMENT_GRACE_MINUTES", "10")

        booking = BookingFactory().create(user_id, booking_details, now=now)

        assert booking.expires_at.value == now.value + timedelta(minutes=10)

    def test_reference_is_regenerated_on_collision(self, user_id, booking_details):
        """予約番号が重複した場合は再採番する"""
        seen = []

        def reference_exists(reference: str) -> bool:
            seen.append(reference)
            return len(seen) < 3

        booking = BookingFactory(reference_exists=reference_exists).create(
            user_id, booking_details
        )

        assert len(seen) == 3
        assert booking.booking_reference.value == seen[-1]

    def test_gives_up_after_repeated_collisions(self, user_id, booking_details):
        factory = BookingFactory(reference_exists=lambda _: True)
        with pytest.raises(DuplicateResourceException):
            factory.create(user_id, booking_details)

    def test_requires_passengers(self, user_id, booking_details):
        booking_details["passengers"] = []
        with pytest.raises(BusinessRuleViolationException):
            BookingFactory().create(user_id, booking_details)
