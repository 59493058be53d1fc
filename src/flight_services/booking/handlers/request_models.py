from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from flight_services.booking.domain.enum import ActorType, BookingStatus
from flight_services.booking.domain.value_object import Actor
from flight_services.shared.utils import to_decimal


class ActorRequest(BaseModel):
    """操作者のリクエストモデル"""

    user_type: ActorType = Field(default=ActorType.CUSTOMER)
    name: str = Field(..., min_length=1)
    user_id: str | None = None

    def to_actor(self) -> Actor:
        return Actor(user_type=self.user_type, name=self.name, user_id=self.user_id)


class TransitionBookingRequest(BaseModel):
    """予約ステータス遷移リクエストモデル"""

    booking_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    target_status: BookingStatus
    performed_by: ActorRequest
    reason: str | None = Field(default=None, max_length=500)


class CancelBookingRequest(BaseModel):
    """予約キャンセルリクエストモデル"""

    booking_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=500)
    cancellation_fees: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="キャンセル手数料（予約と同じ通貨）",
    )
    performed_by: ActorRequest

    @field_validator("cancellation_fees", mode="before")
    @classmethod
    def convert_fees_to_decimal(cls, v: object) -> Decimal:
        return to_decimal(v)


class ExpirePendingRequest(BaseModel):
    """支払い期限切れ処理リクエストモデル（スケジュール実行用）"""

    now: str | None = Field(
        default=None,
        description="基準時刻（ISO 8601形式、省略時は現在時刻）",
        examples=["2026-01-01T00:00:00Z"],
    )
