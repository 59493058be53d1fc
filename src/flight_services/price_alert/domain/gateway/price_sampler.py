from abc import ABC, abstractmethod
from decimal import Decimal

from flight_services.price_alert.domain.entity import PriceAlert


class PriceSampler(ABC):
    """アラートの区間・条件に対する現在価格を取得する"""

    @abstractmethod
    def sample_current_price(self, alert: PriceAlert) -> Decimal:
        raise NotImplementedError
