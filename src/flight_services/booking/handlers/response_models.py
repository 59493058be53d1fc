from __future__ import annotations

from pydantic import BaseModel

from flight_services.booking.applications.expire_pending_bookings import ExpiryReport
from flight_services.booking.domain.entity import FlightBooking


class CancellationData(BaseModel):
    """キャンセル情報のレスポンスモデル"""

    reason: str
    cancelled_at: str
    cancelled_by: str
    refund_amount: str
    cancellation_fees: str
    refund_status: str


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    booking_reference: str
    user_id: str
    status: str
    trip_type: str
    total_amount: str
    currency: str
    modification_count: int
    cancellation: CancellationData | None = None
    updated_at: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: BookingData


class ExpiryData(BaseModel):
    """期限切れ処理結果のレスポンスモデル"""

    expired: list[str]
    errors: list[str]


class ExpirySuccessResponse(BaseModel):
    status: str = "success"
    data: ExpiryData


def to_response(booking: FlightBooking) -> dict:
    """FlightBooking エンティティをレスポンス辞書に変換する"""
    cancellation = booking.cancellation
    return SuccessResponse(
        data=BookingData(
            booking_id=str(booking.id),
            booking_reference=booking.booking_reference.formatted(),
            user_id=str(booking.user_id),
            status=booking.status.value,
            trip_type=booking.trip_type.value,
            total_amount=str(booking.pricing.total.amount),
            currency=str(booking.pricing.currency),
            modification_count=len(booking.modifications),
            cancellation=(
                CancellationData(
                    reason=cancellation.reason,
                    cancelled_at=str(cancellation.cancelled_at),
                    cancelled_by=cancellation.cancelled_by.name,
                    refund_amount=str(cancellation.refund_amount.amount),
                    cancellation_fees=str(cancellation.cancellation_fees.amount),
                    refund_status=cancellation.refund_status.value,
                )
                if cancellation
                else None
            ),
            updated_at=str(booking.updated_at),
        )
    ).model_dump(exclude_none=True)


def to_expiry_response(report: ExpiryReport) -> dict:
    return ExpirySuccessResponse(
        data=ExpiryData(expired=report.expired, errors=report.errors)
    ).model_dump()
