from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.price_alert.applications.create_price_alert import (
    CreatePriceAlertService,
)
from flight_services.price_alert.domain.factory import AlertDetails, PriceAlertFactory
from flight_services.price_alert.handlers.request_models import (
    CreatePriceAlertRequest,
)
from flight_services.price_alert.handlers.response_models import to_response
from flight_services.price_alert.infrastructure.dynamodb_price_alert_repository import (
    DynamoDBPriceAlertRepository,
)
from flight_services.shared.domain import UserId
from flight_services.shared.utils import error_response

logger = Logger()

repository = DynamoDBPriceAlertRepository()
factory = PriceAlertFactory()
service = CreatePriceAlertService(repository=repository, factory=factory)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """価格アラート作成 Lambda Handler"""
    logger.info("Received create price alert request")

    payload = event.get("Payload", event)
    request = CreatePriceAlertRequest.model_validate(payload)

    result = service.create(UserId(value=request.user_id), _to_alert_details(request))
    if result.failed:
        return error_response(result.error)

    return to_response(result.unwrap())


def _to_alert_details(request: CreatePriceAlertRequest) -> AlertDetails:
    """リクエストボディから AlertDetails を構築する"""

    return {
        "origin": request.origin,
        "destination": request.destination,
        "departure_date": request.departure_date,
        "return_date": request.return_date,
        "trip_type": request.trip_type.value,
        "passengers": {
            "adults": request.passengers.adults,
            "children": request.passengers.children,
            "infants": request.passengers.infants,
        },
        "cabin_class": request.cabin_class.value,
        "target_price": request.target_price,
        "currency": request.currency,
        "alert_type": request.alert_type.value,
        "frequency": request.frequency.value,
        "email_notifications": request.email_notifications,
        "push_notifications": request.push_notifications,
        "expires_at": request.expires_at,
    }
