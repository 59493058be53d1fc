from abc import abstractmethod

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.value_object import AlertId
from flight_services.shared.domain import Repository, UserId


class PriceAlertRepository(Repository[PriceAlert, AlertId]):
    """価格アラートレポジトリ

    同一アラートの同時評価はリースで排他する。
    """

    @abstractmethod
    def save(self, alert: PriceAlert) -> None:
        """アラートを保存する（新規・更新とも）"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, alert_id: AlertId) -> PriceAlert | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_user(self, user_id: UserId) -> list[PriceAlert]:
        raise NotImplementedError

    @abstractmethod
    def find_active(self) -> list[PriceAlert]:
        """有効なアラートをすべて取得する"""
        raise NotImplementedError

    @abstractmethod
    def delete(self, alert_id: AlertId) -> None:
        raise NotImplementedError

    @abstractmethod
    def acquire_lease(self, alert_id: AlertId, owner: str, ttl_seconds: int) -> bool:
        """評価用のリースを取得する（他の所有者が保持中なら False）"""
        raise NotImplementedError

    @abstractmethod
    def release_lease(self, alert_id: AlertId, owner: str) -> None:
        raise NotImplementedError
