"""価格アラート評価

サンプル価格を1件受け取り、更新後のアラートと通知指示を返す。
I/O は行わない。
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import NotificationKind
from flight_services.price_alert.domain.value_object import (
    NotificationDirective,
    PriceHistoryEntry,
)
from flight_services.shared.domain import IsoDateTime

from .alert_rules import decide_trigger

ZERO = Decimal("0")


@dataclass(frozen=True)
class EvaluationOutcome:
    updated_alert: PriceAlert
    notification: NotificationDirective | None = None

    @property
    def triggered(self) -> bool:
        return self.notification is not None


def evaluate(
    alert: PriceAlert, sampled_price: Decimal, *, now: IsoDateTime | None = None
) -> EvaluationOutcome:
    """価格アラートを評価する

    Args:
        alert: 現在のアラートスナップショット（変更されない）
        sampled_price: 取得した現在価格
        now: 評価時刻（省略時は現在時刻）

    Returns:
        EvaluationOutcome: 更新後のアラートと、発火した場合の通知指示
    """
    now = now or IsoDateTime.now()
    previous_sample = alert.current_price
    previous_price = previous_sample if previous_sample is not None else alert.target_price

    change = sampled_price - previous_price
    change_percent = change / previous_price * 100 if previous_price != ZERO else ZERO

    updated = alert.evolve(
        current_price=sampled_price,
        last_checked=now,
        updated_at=now,
        price_history=alert.price_history.append(
            PriceHistoryEntry(
                date=now,
                price=sampled_price,
                change=change,
                change_percent=change_percent,
            )
        ),
    )

    kind = decide_trigger(
        alert.alert_type, sampled_price, alert.target_price, previous_sample
    )
    if kind is None:
        return EvaluationOutcome(updated_alert=updated)

    return EvaluationOutcome(
        updated_alert=updated,
        notification=NotificationDirective(
            alert_id=alert.id,
            user_id=str(alert.user_id),
            kind=kind,
            previous_price=previous_price,
            current_price=sampled_price,
            change_amount=change,
            change_percent=change_percent,
            message=notification_message(kind, alert.route, change_percent),
        ),
    )


def notification_message(
    kind: NotificationKind, route: str, change_percent: Decimal
) -> str:
    if kind == NotificationKind.PRICE_DROP:
        return f"Price dropped {abs(change_percent):.1f}% for {route}"
    if kind == NotificationKind.PRICE_INCREASE:
        return f"Price increased {change_percent:.1f}% for {route}"
    return f"Target price reached for {route}"
