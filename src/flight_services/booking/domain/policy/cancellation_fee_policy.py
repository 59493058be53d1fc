from abc import ABC, abstractmethod

from flight_services.booking.domain.entity import FlightBooking
from flight_services.shared.domain import Money


class CancellationFeePolicy(ABC):
    """キャンセル手数料の算出ポリシー

    運賃規則の参照など、算出方法はこのドメインの外で決まる。
    """

    @abstractmethod
    def fees_for(self, booking: FlightBooking) -> Money:
        raise NotImplementedError


class FixedCancellationFeePolicy(CancellationFeePolicy):
    """呼び出し側から渡された手数料をそのまま返す"""

    def __init__(self, fees: Money) -> None:
        self._fees = fees

    def fees_for(self, booking: FlightBooking) -> Money:
        return self._fees
