from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.booking.applications.cancel_booking import CancelBookingService
from flight_services.booking.domain.policy import FixedCancellationFeePolicy
from flight_services.booking.domain.value_object import BookingId
from flight_services.booking.handlers.request_models import CancelBookingRequest
from flight_services.booking.handlers.response_models import to_response
from flight_services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from flight_services.shared.domain import Money, UserId
from flight_services.shared.domain.exception import ResourceNotFoundException
from flight_services.shared.utils import error_response

logger = Logger()

repository = DynamoDBBookingRepository()


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """予約キャンセル Lambda Handler

    手数料はリクエストで指定された金額を予約の通貨でそのまま適用する。
    """
    logger.info("Received cancel booking request")

    payload = event.get("Payload", event)
    request = CancelBookingRequest.model_validate(payload)
    booking_id = BookingId(value=request.booking_id)

    booking = repository.find_by_id(booking_id)
    if booking is None:
        return error_response(ResourceNotFoundException("booking", str(booking_id)))

    fees = Money(
        amount=request.cancellation_fees,
        currency=booking.pricing.currency,
    )
    service = CancelBookingService(
        repository=repository, fee_policy=FixedCancellationFeePolicy(fees)
    )
    result = service.cancel(
        booking_id=booking_id,
        user_id=UserId(value=request.user_id),
        reason=request.reason,
        actor=request.performed_by.to_actor(),
    )
    if result.failed:
        return error_response(result.error)

    return to_response(result.unwrap())
