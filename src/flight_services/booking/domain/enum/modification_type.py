from enum import Enum


class ModificationType(str, Enum):
    """予約変更履歴の種別"""

    CREATION = "creation"
    UPDATE = "update"
    STATUS_CHANGE = "status_change"
    CANCELLATION = "cancellation"
    REFUND = "refund"
    SEAT_CHANGE = "seat_change"
    PASSENGER_UPDATE = "passenger_update"
