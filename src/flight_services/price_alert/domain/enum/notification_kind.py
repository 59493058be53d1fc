from enum import Enum


class NotificationKind(str, Enum):
    """通知の種別"""

    TARGET_REACHED = "TARGET_REACHED"
    PRICE_INCREASE = "PRICE_INCREASE"
    PRICE_DROP = "PRICE_DROP"
