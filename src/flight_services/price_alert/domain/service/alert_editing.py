from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import AlertFrequency, AlertType
from flight_services.shared.domain import IsoDateTime, Result
from flight_services.shared.domain.exception import ValidationException

_UNSET = object()


@dataclass(frozen=True)
class AlertUpdate:
    """価格アラートの更新内容（指定されたフィールドのみ反映）

    expires_at は None で期限なしに戻すため、未指定とは区別する。
    """

    target_price: Decimal | None = None
    alert_type: AlertType | None = None
    frequency: AlertFrequency | None = None
    email_notifications: bool | None = None
    push_notifications: bool | None = None
    is_active: bool | None = None
    expires_at: IsoDateTime | None | object = _UNSET


def toggle_active(alert: PriceAlert, now: IsoDateTime | None = None) -> PriceAlert:
    """有効/無効を切り替える"""
    return alert.evolve(
        is_active=not alert.is_active, updated_at=now or IsoDateTime.now()
    )


def apply_update(
    alert: PriceAlert, update: AlertUpdate, now: IsoDateTime | None = None
) -> Result[PriceAlert, ValidationException]:
    """更新内容を反映した新しいスナップショットを返す"""
    if update.target_price is not None and update.target_price <= 0:
        return Result.failure(
            ValidationException("target_price", "must be greater than 0")
        )

    changes = {
        f.name: getattr(update, f.name)
        for f in fields(update)
        if f.name != "expires_at" and getattr(update, f.name) is not None
    }
    if update.expires_at is not _UNSET:
        changes["expires_at"] = update.expires_at

    return Result.ok(alert.evolve(updated_at=now or IsoDateTime.now(), **changes))


def is_eligible_for_sweep(alert: PriceAlert, now: IsoDateTime) -> bool:
    """巡回チェックの対象かどうか（有効かつ期限切れでない）"""
    if not alert.is_active:
        return False
    return alert.expires_at is None or alert.expires_at.is_after(now)
