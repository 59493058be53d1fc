from abc import ABC, abstractmethod

from flight_services.price_alert.domain.value_object import NotificationDirective


class NotificationDelivery(ABC):
    """通知指示を利用者に配信する"""

    @abstractmethod
    def deliver(self, directive: NotificationDirective, user_id: str) -> None:
        raise NotImplementedError
