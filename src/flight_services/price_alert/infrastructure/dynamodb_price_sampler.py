import os
from decimal import Decimal
from typing import Any

import boto3

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.gateway import PriceSampler
from flight_services.shared.domain.exception import ResourceNotFoundException


class DynamoDBPriceSampler(PriceSampler):
    """運賃取り込みジョブが書き込んだ最新運賃を参照する PriceSampler

    運賃アイテム: PK=FARE#{origin}#{destination}, SK=DATE#{departure_date}#{cabin_class}
    """

    def __init__(self, table_name: str | None = None, table: Any = None) -> None:
        if table is not None:
            self.table = table
            return
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def sample_current_price(self, alert: PriceAlert) -> Decimal:
        response = self.table.get_item(
            Key={
                "PK": f"FARE#{alert.origin}#{alert.destination}",
                "SK": f"DATE#{alert.departure_date.isoformat()}#{alert.cabin_class.value}",
            }
        )
        item = response.get("Item")
        if not item:
            raise ResourceNotFoundException(
                "fare", f"{alert.route} {alert.departure_date.isoformat()}"
            )
        return Decimal(str(item["price"]))
