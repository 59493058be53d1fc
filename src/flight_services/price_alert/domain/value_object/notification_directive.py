from dataclasses import dataclass
from decimal import Decimal

from flight_services.price_alert.domain.enum import NotificationKind

from .alert_id import AlertId


@dataclass(frozen=True)
class NotificationDirective:
    """通知指示

    評価結果として生成されるだけで、配信は NotificationDelivery が行う。
    """

    alert_id: AlertId
    user_id: str
    kind: NotificationKind
    previous_price: Decimal
    current_price: Decimal
    change_amount: Decimal
    change_percent: Decimal
    message: str
