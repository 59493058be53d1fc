from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.repository import PriceAlertRepository
from flight_services.price_alert.domain.service import (
    AlertUpdate,
    apply_update,
    toggle_active,
)
from flight_services.price_alert.domain.value_object import AlertId
from flight_services.shared.domain import Result, UserId
from flight_services.shared.domain.exception import (
    DomainException,
    ResourceNotFoundException,
    UnauthorizedException,
)


class UpdatePriceAlertService:
    """価格アラートの更新・有効切替・削除サービス

    他ユーザーのアラートは操作できない。
    """

    def __init__(self, repository: PriceAlertRepository) -> None:
        self._repository = repository

    def update(
        self, alert_id: AlertId, user_id: UserId, update: AlertUpdate
    ) -> Result[PriceAlert, DomainException]:
        loaded = self._load_owned(alert_id, user_id)
        if loaded.failed:
            return loaded

        result = apply_update(loaded.unwrap(), update)
        if result.success:
            self._repository.save(result.unwrap())
        return result

    def toggle(
        self, alert_id: AlertId, user_id: UserId
    ) -> Result[PriceAlert, DomainException]:
        loaded = self._load_owned(alert_id, user_id)
        if loaded.failed:
            return loaded

        toggled = toggle_active(loaded.unwrap())
        self._repository.save(toggled)
        return Result.ok(toggled)

    def delete(
        self, alert_id: AlertId, user_id: UserId
    ) -> Result[AlertId, DomainException]:
        loaded = self._load_owned(alert_id, user_id)
        if loaded.failed:
            return Result.failure(loaded.error)

        self._repository.delete(alert_id)
        return Result.ok(alert_id)

    def _load_owned(
        self, alert_id: AlertId, user_id: UserId
    ) -> Result[PriceAlert, DomainException]:
        alert = self._repository.find_by_id(alert_id)
        if alert is None:
            return Result.failure(ResourceNotFoundException("price_alert", alert_id))
        if not alert.is_owned_by(user_id):
            return Result.failure(UnauthorizedException("price_alert", alert_id))
        return Result.ok(alert)
