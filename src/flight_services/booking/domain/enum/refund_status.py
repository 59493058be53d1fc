from enum import Enum


class RefundStatus(str, Enum):
    """払い戻しステータス"""

    PENDING = "pending"
    PROCESSED = "processed"
    DECLINED = "declined"
