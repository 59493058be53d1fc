from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from flight_services.price_alert.domain.enum import (
    AlertFrequency,
    AlertType,
    CabinClass,
    TripType,
)
from flight_services.price_alert.domain.value_object import (
    AlertId,
    PassengerCounts,
    PriceHistory,
)
from flight_services.shared.domain import Currency, Entity, IsoDateTime, UserId
from flight_services.shared.domain.exception import BusinessRuleViolationException


class PriceAlert(Entity[AlertId]):
    """価格アラート（スナップショット）

    評価・編集は新しいスナップショットを返す形で行い、既存の値は変更しない。
    """

    def __init__(
        self,
        id: AlertId,
        user_id: UserId,
        origin: str,
        destination: str,
        departure_date: date,
        trip_type: TripType,
        passengers: PassengerCounts,
        cabin_class: CabinClass,
        target_price: Decimal,
        currency: Currency,
        alert_type: AlertType,
        created_at: IsoDateTime,
        return_date: date | None = None,
        frequency: AlertFrequency = AlertFrequency.DAILY,
        email_notifications: bool = True,
        push_notifications: bool = False,
        current_price: Decimal | None = None,
        last_checked: IsoDateTime | None = None,
        price_history: PriceHistory | None = None,
        is_active: bool = True,
        expires_at: IsoDateTime | None = None,
        updated_at: IsoDateTime | None = None,
    ) -> None:
        super().__init__(id)

        if target_price <= 0:
            raise BusinessRuleViolationException("target_price must be greater than 0")

        self._user_id = user_id
        self._origin = origin
        self._destination = destination
        self._departure_date = departure_date
        self._return_date = return_date
        self._trip_type = trip_type
        self._passengers = passengers
        self._cabin_class = cabin_class
        self._target_price = target_price
        self._currency = currency
        self._alert_type = alert_type
        self._frequency = frequency
        self._email_notifications = email_notifications
        self._push_notifications = push_notifications
        self._current_price = current_price
        self._last_checked = last_checked
        self._price_history = price_history or PriceHistory()
        self._is_active = is_active
        self._expires_at = expires_at
        self._created_at = created_at
        self._updated_at = updated_at or created_at

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def origin(self) -> str:
        return self._origin

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def route(self) -> str:
        """表示用の区間 (例: "NRT → LAX")"""
        return f"{self._origin} → {self._destination}"

    @property
    def departure_date(self) -> date:
        return self._departure_date

    @property
    def return_date(self) -> date | None:
        return self._return_date

    @property
    def trip_type(self) -> TripType:
        return self._trip_type

    @property
    def passengers(self) -> PassengerCounts:
        return self._passengers

    @property
    def cabin_class(self) -> CabinClass:
        return self._cabin_class

    @property
    def target_price(self) -> Decimal:
        return self._target_price

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def alert_type(self) -> AlertType:
        return self._alert_type

    @property
    def frequency(self) -> AlertFrequency:
        return self._frequency

    @property
    def email_notifications(self) -> bool:
        return self._email_notifications

    @property
    def push_notifications(self) -> bool:
        return self._push_notifications

    @property
    def current_price(self) -> Decimal | None:
        return self._current_price

    @property
    def last_checked(self) -> IsoDateTime | None:
        return self._last_checked

    @property
    def price_history(self) -> PriceHistory:
        return self._price_history

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def expires_at(self) -> IsoDateTime | None:
        return self._expires_at

    @property
    def created_at(self) -> IsoDateTime:
        return self._created_at

    @property
    def updated_at(self) -> IsoDateTime:
        return self._updated_at

    def is_owned_by(self, user_id: UserId) -> bool:
        return self._user_id == user_id

    def evolve(self, **changes: Any) -> PriceAlert:
        """指定したフィールドのみ差し替えた新しいスナップショットを返す"""
        for immutable in ("id", "user_id", "created_at"):
            if immutable in changes:
                raise BusinessRuleViolationException(f"{immutable} is immutable")

        fields = {
            "user_id": self._user_id,
            "origin": self._origin,
            "destination": self._destination,
            "departure_date": self._departure_date,
            "return_date": self._return_date,
            "trip_type": self._trip_type,
            "passengers": self._passengers,
            "cabin_class": self._cabin_class,
            "target_price": self._target_price,
            "currency": self._currency,
            "alert_type": self._alert_type,
            "frequency": self._frequency,
            "email_notifications": self._email_notifications,
            "push_notifications": self._push_notifications,
            "current_price": self._current_price,
            "last_checked": self._last_checked,
            "price_history": self._price_history,
            "is_active": self._is_active,
            "expires_at": self._expires_at,
            "created_at": self._created_at,
            "updated_at": self._updated_at,
        }
        fields.update(changes)
        return PriceAlert(id=self.id, **fields)
