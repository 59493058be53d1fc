from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.price_alert.applications.run_price_alert_sweep import (
    RunPriceAlertSweepService,
)
from flight_services.price_alert.handlers.request_models import SweepRequest
from flight_services.price_alert.handlers.response_models import to_sweep_response
from flight_services.price_alert.infrastructure.dynamodb_price_alert_repository import (
    DynamoDBPriceAlertRepository,
)
from flight_services.price_alert.infrastructure.dynamodb_price_sampler import (
    DynamoDBPriceSampler,
)
from flight_services.price_alert.infrastructure.sns_notification_delivery import (
    SnsNotificationDelivery,
)
from flight_services.shared.domain import IsoDateTime

logger = Logger()

service = RunPriceAlertSweepService(
    repository=DynamoDBPriceAlertRepository(),
    sampler=DynamoDBPriceSampler(),
    delivery=SnsNotificationDelivery(),
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """価格アラート巡回チェック Lambda Handler（EventBridge スケジュール実行）

    Lambda の残り時間が少なくなったら、次のアラートに進まず打ち切る。
    打ち切られたアラートは次回の巡回で評価される。
    """
    logger.info("Received price alert sweep request")

    payload = event.get("Payload", event)
    request = SweepRequest.model_validate(payload)
    now = IsoDateTime.from_string(request.now) if request.now else None

    report = service.run(
        now=now,
        should_stop=lambda: (
            context.get_remaining_time_in_millis() < request.time_budget_ms
        ),
    )
    return to_sweep_response(report)
