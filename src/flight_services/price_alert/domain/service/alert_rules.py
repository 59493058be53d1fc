from decimal import Decimal

from flight_services.price_alert.domain.enum import AlertType, NotificationKind


def decide_trigger(
    alert_type: AlertType,
    sampled_price: Decimal,
    target_price: Decimal,
    previous_sample: Decimal | None,
) -> NotificationKind | None:
    """発火条件を判定し、通知種別を返す（発火しない場合は None）

    price-drop は直前のサンプルとの比較のみで判定し、初回サンプルでは発火しない。
    """
    if alert_type == AlertType.PRICE_BELOW:
        if sampled_price <= target_price:
            return NotificationKind.TARGET_REACHED
        return None
    if alert_type == AlertType.PRICE_ABOVE:
        if sampled_price >= target_price:
            return NotificationKind.PRICE_INCREASE
        return None
    if alert_type == AlertType.PRICE_DROP:
        if previous_sample is not None and sampled_price < previous_sample:
            return NotificationKind.PRICE_DROP
        return None
    raise TypeError(f"Unknown alert type: {alert_type!r}")
