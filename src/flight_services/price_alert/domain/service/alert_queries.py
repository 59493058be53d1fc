from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Literal

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import AlertType, TripType

DEFAULT_PAGE_LIMIT = 20

SortKey = Literal["created_at", "target_price", "current_price", "departure_date"]

_SORT_KEYS: dict[str, Callable[[PriceAlert], object]] = {
    "created_at": lambda a: a.created_at.value,
    "target_price": lambda a: a.target_price,
    # 未取得の現在価格は 0 として並べる
    "current_price": lambda a: a.current_price or Decimal("0"),
    "departure_date": lambda a: a.departure_date,
}


@dataclass(frozen=True)
class AlertFilters:
    """価格アラート一覧の検索条件"""

    is_active: bool | None = None
    origin: str | None = None
    destination: str | None = None
    trip_type: TripType | None = None
    alert_type: AlertType | None = None
    sort_by: SortKey = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError(f"limit must be at least 1: {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset cannot be negative: {self.offset}")


@dataclass(frozen=True)
class AlertPage:
    alerts: list[PriceAlert]
    total: int
    has_more: bool


@dataclass(frozen=True)
class AlertStats:
    """価格アラートの集計"""

    total: int
    active: int
    triggered: int
    average_savings: Decimal


def filter_alerts(alerts: Iterable[PriceAlert], filters: AlertFilters) -> AlertPage:
    """条件で絞り込み、並べ替えてページングする"""
    matched = [a for a in alerts if _matches(a, filters)]
    matched.sort(
        key=_SORT_KEYS.get(filters.sort_by, _SORT_KEYS["created_at"]),
        reverse=filters.sort_order == "desc",
    )

    limit = filters.limit
    offset = filters.offset
    total = len(matched)
    return AlertPage(
        alerts=matched[offset : offset + limit],
        total=total,
        has_more=offset + limit < total,
    )


def _matches(alert: PriceAlert, filters: AlertFilters) -> bool:
    if filters.is_active is not None and alert.is_active != filters.is_active:
        return False
    if filters.origin and filters.origin.lower() not in alert.origin.lower():
        return False
    if (
        filters.destination
        and filters.destination.lower() not in alert.destination.lower()
    ):
        return False
    if filters.trip_type is not None and alert.trip_type != filters.trip_type:
        return False
    if filters.alert_type is not None and alert.alert_type != filters.alert_type:
        return False
    return True


def summarize_alerts(alerts: Iterable[PriceAlert]) -> AlertStats:
    """件数と平均節約額を集計する

    triggered は現在価格が目標価格以下のアラート数。
    average_savings は triggered 1件あたりの (目標価格 - 現在価格) の平均。
    """
    alerts = list(alerts)
    triggered = [
        a
        for a in alerts
        if a.current_price is not None and a.current_price <= a.target_price
    ]
    total_savings = sum(
        (a.target_price - a.current_price for a in triggered), Decimal("0")
    )
    return AlertStats(
        total=len(alerts),
        active=sum(1 for a in alerts if a.is_active),
        triggered=len(triggered),
        average_savings=(
            total_savings / len(triggered) if triggered else Decimal("0")
        ),
    )
