from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.factory import AlertDetails, PriceAlertFactory
from flight_services.price_alert.domain.repository import PriceAlertRepository
from flight_services.shared.domain import Result, UserId
from flight_services.shared.domain.exception import ValidationException
from flight_services.shared.utils import get_logger

logger = get_logger("price_alert")


class CreatePriceAlertService:
    """価格アラート作成サービス

    Factory と Repository を使用してエンティティの生成・永続化を行う。
    """

    def __init__(
        self, repository: PriceAlertRepository, factory: PriceAlertFactory
    ) -> None:
        self._repository = repository
        self._factory = factory

    def create(
        self, user_id: UserId, details: AlertDetails
    ) -> Result[PriceAlert, ValidationException]:
        """価格アラートを作成する"""
        result = self._factory.create(user_id, details)
        if result.failed:
            logger.info(
                "Rejected price alert",
                extra={"field": result.error.field, "reason": result.error.reason},
            )
            return result

        alert = result.unwrap()
        self._repository.save(alert)
        logger.info("Price alert created", extra={"alert_id": str(alert.id)})
        return result
