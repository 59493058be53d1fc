import json

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from flight_services.price_alert.domain.enum import AlertType, TripType
from flight_services.price_alert.domain.service import (
    DEFAULT_PAGE_LIMIT,
    AlertFilters,
    filter_alerts,
    summarize_alerts,
)
from flight_services.price_alert.handlers.response_models import to_list_body
from flight_services.price_alert.infrastructure.dynamodb_price_alert_repository import (
    DynamoDBPriceAlertRepository,
)
from flight_services.shared.domain import UserId

logger = Logger()

repository = DynamoDBPriceAlertRepository()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """価格アラート一覧取得 Lambda Handler"""
    user_id = (event.path_parameters or {}).get("user_id")
    if not user_id:
        return _response(400, {"message": "user_id is required"})

    logger.info("Listing price alerts", extra={"user_id": user_id})

    try:
        filters = _to_filters(event.query_string_parameters or {})
    except ValueError as e:
        return _response(400, {"message": str(e)})

    alerts = repository.find_by_user(UserId(value=user_id))
    page = filter_alerts(alerts, filters)
    return _response(200, to_list_body(page, summarize_alerts(alerts)))


def _to_filters(params: dict[str, str]) -> AlertFilters:
    """クエリパラメータから AlertFilters を構築する"""
    is_active = params.get("is_active")
    sort_by = params.get("sort_by", "created_at")
    if sort_by not in ("created_at", "target_price", "current_price", "departure_date"):
        raise ValueError(f"Unsupported sort_by: {sort_by}")
    sort_order = params.get("sort_order", "desc")
    if sort_order not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort_order: {sort_order}")

    return AlertFilters(
        is_active=None if is_active is None else is_active.lower() == "true",
        origin=params.get("origin"),
        destination=params.get("destination"),
        trip_type=TripType(params["trip_type"]) if "trip_type" in params else None,
        alert_type=AlertType(params["alert_type"]) if "alert_type" in params else None,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=int(params.get("limit", DEFAULT_PAGE_LIMIT)),
        offset=int(params.get("offset", 0)),
    )


def _response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }
