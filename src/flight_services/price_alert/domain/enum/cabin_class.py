from enum import Enum


class CabinClass(str, Enum):
    """座席クラス"""

    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium-economy"
    BUSINESS = "business"
    FIRST = "first"
