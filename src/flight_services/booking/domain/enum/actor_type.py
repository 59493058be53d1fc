from enum import Enum


class ActorType(str, Enum):
    """操作者の種別（記録のみ。認可には使用しない）"""

    CUSTOMER = "customer"
    AGENT = "agent"
    SYSTEM = "system"
    AIRLINE = "airline"
