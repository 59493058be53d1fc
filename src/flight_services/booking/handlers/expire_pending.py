from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.booking.applications.expire_pending_bookings import (
    ExpirePendingBookingsService,
)
from flight_services.booking.handlers.request_models import ExpirePendingRequest
from flight_services.booking.handlers.response_models import to_expiry_response
from flight_services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from flight_services.shared.domain import IsoDateTime

logger = Logger()

repository = DynamoDBBookingRepository()
service = ExpirePendingBookingsService(repository=repository)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """支払い期限切れ予約の失効 Lambda Handler（EventBridge スケジュール実行）"""
    logger.info("Received expire pending bookings request")

    payload = event.get("Payload", event)
    request = ExpirePendingRequest.model_validate(payload)
    now = IsoDateTime.from_string(request.now) if request.now else None

    report = service.expire(now)
    return to_expiry_response(report)
