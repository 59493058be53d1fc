from __future__ import annotations

from pydantic import BaseModel

from flight_services.price_alert.applications.run_price_alert_sweep import SweepReport
from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.service import AlertPage, AlertStats


class PriceAlertData(BaseModel):
    """価格アラートのレスポンスモデル"""

    alert_id: str
    user_id: str
    origin: str
    destination: str
    departure_date: str
    return_date: str | None = None
    trip_type: str
    target_price: str
    currency: str
    alert_type: str
    current_price: str | None = None
    last_checked: str | None = None
    is_active: bool
    created_at: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: PriceAlertData


class SweepData(BaseModel):
    evaluated: int
    notified: int
    skipped: int
    failed: int


class SweepSuccessResponse(BaseModel):
    status: str = "success"
    data: SweepData


class StatsData(BaseModel):
    total: int
    active: int
    triggered: int
    average_savings: str


class AlertListData(BaseModel):
    """価格アラート一覧のレスポンスモデル"""

    alerts: list[PriceAlertData]
    total: int
    has_more: bool
    stats: StatsData


def to_alert_data(alert: PriceAlert) -> PriceAlertData:
    return PriceAlertData(
        alert_id=str(alert.id),
        user_id=str(alert.user_id),
        origin=alert.origin,
        destination=alert.destination,
        departure_date=alert.departure_date.isoformat(),
        return_date=alert.return_date.isoformat() if alert.return_date else None,
        trip_type=alert.trip_type.value,
        target_price=str(alert.target_price),
        currency=str(alert.currency),
        alert_type=alert.alert_type.value,
        current_price=(
            str(alert.current_price) if alert.current_price is not None else None
        ),
        last_checked=str(alert.last_checked) if alert.last_checked else None,
        is_active=alert.is_active,
        created_at=str(alert.created_at),
    )


def to_response(alert: PriceAlert) -> dict:
    """PriceAlert エンティティをレスポンス辞書に変換する"""
    return SuccessResponse(data=to_alert_data(alert)).model_dump(exclude_none=True)


def to_sweep_response(report: SweepReport) -> dict:
    return SweepSuccessResponse(
        data=SweepData(
            evaluated=report.evaluated,
            notified=report.notified,
            skipped=report.skipped,
            failed=report.failed,
        )
    ).model_dump()


def to_list_body(page: AlertPage, stats: AlertStats) -> dict:
    return AlertListData(
        alerts=[to_alert_data(alert) for alert in page.alerts],
        total=page.total,
        has_more=page.has_more,
        stats=StatsData(
            total=stats.total,
            active=stats.active,
            triggered=stats.triggered,
            average_savings=str(stats.average_savings),
        ),
    ).model_dump(exclude_none=True)
