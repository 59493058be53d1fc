from datetime import date
from decimal import Decimal, InvalidOperation
from typing import NotRequired, TypedDict

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import (
    AlertFrequency,
    AlertType,
    CabinClass,
    TripType,
)
from flight_services.price_alert.domain.value_object import AlertId, PassengerCounts
from flight_services.shared.domain import Currency, IsoDateTime, Result, UserId
from flight_services.shared.domain.exception import ValidationException


class PassengerCountDetails(TypedDict):
    adults: int
    children: NotRequired[int]
    infants: NotRequired[int]


class AlertDetails(TypedDict):
    """価格アラート作成の入力データ構造"""

    origin: str
    destination: str
    departure_date: str
    trip_type: str
    target_price: Decimal
    alert_type: str
    return_date: NotRequired[str | None]
    passengers: NotRequired[PassengerCountDetails]
    cabin_class: NotRequired[str]
    currency: NotRequired[str]
    frequency: NotRequired[str]
    email_notifications: NotRequired[bool]
    push_notifications: NotRequired[bool]
    expires_at: NotRequired[str | None]


class PriceAlertFactory:
    """価格アラートエンティティのファクトリ

    入力値を先頭から順に検証し、最初に失敗したフィールドを
    ValidationException として Result で返す。
    """

    def create(
        self,
        owner_id: UserId,
        details: AlertDetails,
        *,
        today: date | None = None,
        now: IsoDateTime | None = None,
    ) -> Result[PriceAlert, ValidationException]:
        """新規価格アラートを生成する"""
        now = now or IsoDateTime.now()
        today = today or now.value.date()

        try:
            alert = self._build(owner_id, details, today, now)
        except ValidationException as e:
            return Result.failure(e)
        return Result.ok(alert)

    def _build(
        self,
        owner_id: UserId,
        details: AlertDetails,
        today: date,
        now: IsoDateTime,
    ) -> PriceAlert:
        origin = _required_code(details.get("origin"), "origin")
        destination = _required_code(details.get("destination"), "destination")

        departure_date = _parse_date(details.get("departure_date"), "departure_date")
        if departure_date is None:
            raise ValidationException("departure_date", "is required")
        if departure_date < today:
            raise ValidationException("departure_date", "cannot be in the past")

        trip_type = _parse_enum(TripType, details.get("trip_type"), "trip_type")
        return_date = _parse_date(details.get("return_date"), "return_date")
        if trip_type == TripType.ROUND_TRIP:
            if return_date is None:
                raise ValidationException(
                    "return_date", "is required for round-trip alerts"
                )
            if return_date <= departure_date:
                raise ValidationException(
                    "return_date", "must be after departure_date"
                )

        target_price = _parse_price(details.get("target_price"))

        passengers = details.get("passengers") or {"adults": 1}
        adults = passengers.get("adults", 0)
        if adults < 1:
            raise ValidationException(
                "passengers.adults", "at least one adult is required"
            )
        children = passengers.get("children", 0)
        if children < 0:
            raise ValidationException("passengers.children", "cannot be negative")
        infants = passengers.get("infants", 0)
        if infants < 0:
            raise ValidationException("passengers.infants", "cannot be negative")

        currency_code = details.get("currency")
        if not currency_code:
            currency = Currency.usd()
        elif Currency.is_supported(currency_code):
            currency = Currency(currency_code)
        else:
            raise ValidationException(
                "currency", f"unsupported currency: {currency_code}"
            )

        expires_at = _parse_datetime(details.get("expires_at"), "expires_at")
        return PriceAlert(
            id=AlertId.generate(),
            user_id=owner_id,
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            return_date=return_date,
            trip_type=trip_type,
            passengers=PassengerCounts(
                adults=adults,
                children=children,
                infants=infants,
            ),
            cabin_class=_parse_enum(
                CabinClass, details.get("cabin_class", "economy"), "cabin_class"
            ),
            target_price=target_price,
            currency=currency,
            alert_type=_parse_enum(AlertType, details.get("alert_type"), "alert_type"),
            frequency=_parse_enum(
                AlertFrequency, details.get("frequency", "daily"), "frequency"
            ),
            email_notifications=details.get("email_notifications", True),
            push_notifications=details.get("push_notifications", False),
            expires_at=expires_at,
            created_at=now,
        )


def _required_code(value: str | None, field: str) -> str:
    if not value or not value.strip():
        raise ValidationException(field, "is required")
    return value.strip().upper()


def _parse_date(value: str | date | None, field: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationException(field, f"invalid date: {value}")


def _parse_datetime(value: str | None, field: str) -> IsoDateTime | None:
    if not value:
        return None
    try:
        return IsoDateTime.from_string(value)
    except ValueError:
        raise ValidationException(field, f"invalid datetime: {value}")


def _parse_price(value: object) -> Decimal:
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationException("target_price", f"invalid amount: {value}")
    if not price.is_finite() or price <= 0:
        raise ValidationException("target_price", "must be greater than 0")
    return price


def _parse_enum(enum_type, value, field: str):
    try:
        return enum_type(value)
    except ValueError:
        raise ValidationException(field, f"unsupported value: {value}")
