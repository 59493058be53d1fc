from enum import Enum


class AlertFrequency(str, Enum):
    """価格チェックの頻度"""

    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"
