from enum import Enum


class AlertType(str, Enum):
    """価格アラートの発火条件"""

    PRICE_BELOW = "price-below"
    PRICE_ABOVE = "price-above"
    PRICE_DROP = "price-drop"
