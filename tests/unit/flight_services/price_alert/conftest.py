from datetime import date
from decimal import Decimal

import pytest

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import (
    AlertType,
    CabinClass,
    TripType,
)
from flight_services.price_alert.domain.value_object import AlertId, PassengerCounts
from flight_services.shared.domain import Currency, IsoDateTime, UserId


@pytest.fixture
def create_alert():
    """PriceAlert を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        alert_type: AlertType = AlertType.PRICE_BELOW,
        target_price: Decimal = Decimal("500"),
        current_price: Decimal | None = None,
        alert_id: str = "alert-1",
        user_id: str = "user-123",
        origin: str = "NRT",
        destination: str = "LAX",
        trip_type: TripType = TripType.ONE_WAY,
        departure_date: date = date(2026, 6, 1),
        is_active: bool = True,
        expires_at: str | None = None,
        created_at: str = "2026-02-01T00:00:00+00:00",
    ) -> PriceAlert:
        return PriceAlert(
            id=AlertId(value=alert_id),
            user_id=UserId(value=user_id),
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            trip_type=trip_type,
            passengers=PassengerCounts(adults=1),
            cabin_class=CabinClass.ECONOMY,
            target_price=target_price,
            currency=Currency.usd(),
            alert_type=alert_type,
            current_price=current_price,
            is_active=is_active,
            expires_at=IsoDateTime.from_string(expires_at) if expires_at else None,
            created_at=IsoDateTime.from_string(created_at),
        )

    return _factory


@pytest.fixture
def alert_details():
    """PriceAlertFactory への入力 Factory fixture"""

    def _factory(**overrides) -> dict:
        details = {
            "origin": "NRT",
            "destination": "LAX",
            "departure_date": "2026-06-01",
            "trip_type": "one-way",
            "target_price": Decimal("500"),
            "alert_type": "price-below",
            "passengers": {"adults": 1},
            "currency": "USD",
        }
        details.update(overrides)
        return details

    return _factory
