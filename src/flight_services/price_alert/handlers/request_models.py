from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from flight_services.price_alert.domain.enum import (
    AlertFrequency,
    AlertType,
    CabinClass,
    TripType,
)
from flight_services.shared.utils import to_decimal


class PassengerCountsRequest(BaseModel):
    """搭乗者数のリクエストモデル

    adults の下限は PriceAlertFactory で検証する。
    """

    adults: int = 1
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)


class CreatePriceAlertRequest(BaseModel):
    """価格アラート作成リクエストモデル

    フィールド単位の業務ルール（出発日・目標価格など）は
    PriceAlertFactory で検証し、最初に失敗したフィールドを返す。
    """

    user_id: str = Field(..., min_length=1)
    origin: str = Field(default="", max_length=3, description="出発空港（IATA）")
    destination: str = Field(default="", max_length=3, description="到着空港（IATA）")
    departure_date: str = Field(
        default="",
        description="出発日（YYYY-MM-DD形式）",
        examples=["2026-12-01"],
    )
    return_date: str | None = Field(
        default=None,
        description="復路の出発日（YYYY-MM-DD形式、往復のみ）",
    )
    trip_type: TripType = TripType.ONE_WAY
    passengers: PassengerCountsRequest = Field(default_factory=PassengerCountsRequest)
    cabin_class: CabinClass = CabinClass.ECONOMY
    target_price: Decimal = Field(..., description="目標価格")
    currency: str = Field(default="USD", description="通貨コード（ISO 4217）")
    alert_type: AlertType = AlertType.PRICE_BELOW
    frequency: AlertFrequency = AlertFrequency.DAILY
    email_notifications: bool = True
    push_notifications: bool = False
    expires_at: str | None = None

    @field_validator("target_price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v: object) -> Decimal:
        return to_decimal(v)


class SweepRequest(BaseModel):
    """巡回チェックリクエストモデル（スケジュール実行用）"""

    now: str | None = Field(
        default=None,
        description="基準時刻（ISO 8601形式、省略時は現在時刻）",
    )
    time_budget_ms: int = Field(
        default=10_000,
        ge=0,
        description="Lambda の残り時間がこの値を下回ったら巡回を打ち切る",
    )
