from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.booking.applications.transition_booking import (
    TransitionBookingService,
)
from flight_services.booking.domain.value_object import BookingId
from flight_services.booking.handlers.request_models import TransitionBookingRequest
from flight_services.booking.handlers.response_models import to_response
from flight_services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from flight_services.shared.domain import UserId
from flight_services.shared.utils import error_response

logger = Logger()

repository = DynamoDBBookingRepository()
service = TransitionBookingService(repository=repository)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約ステータス遷移 Lambda Handler"""
    logger.info("Received transition booking request")

    payload = event.get("Payload", event)
    request = TransitionBookingRequest.model_validate(payload)

    result = service.execute(
        booking_id=BookingId(value=request.booking_id),
        user_id=UserId(value=request.user_id),
        target_status=request.target_status,
        actor=request.performed_by.to_actor(),
        reason=request.reason,
    )
    if result.failed:
        return error_response(result.error)

    return to_response(result.unwrap())
