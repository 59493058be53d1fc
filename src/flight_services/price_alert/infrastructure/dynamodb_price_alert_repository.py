import os
import time
from datetime import date
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.enum import (
    AlertFrequency,
    AlertType,
    CabinClass,
    TripType,
)
from flight_services.price_alert.domain.repository import PriceAlertRepository
from flight_services.price_alert.domain.value_object import (
    AlertId,
    PassengerCounts,
    PriceHistory,
    PriceHistoryEntry,
)
from flight_services.shared.domain import Currency, IsoDateTime, UserId

USER_INDEX = "GSI1"
ACTIVE_INDEX = "GSI2"


class DynamoDBPriceAlertRepository(PriceAlertRepository):
    """DynamoDBを使用したPriceAlertRepository の具象実装

    シングルテーブル設計:
      - PK=ALERT#{alert_id}, SK=METADATA
      - PK=ALERT#{alert_id}, SK=LEASE（巡回チェックのリース）
      - GSI1: ユーザーごとの一覧 (GSI1PK=USER#{user_id})
      - GSI2: 有効なアラートの一覧 (GSI2PK=ALERTS#ACTIVE、有効時のみ設定)
    """

    def __init__(self, table_name: str | None = None, table: Any = None) -> None:
        if table is not None:
            self.table = table
            return
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, alert: PriceAlert) -> None:
        """アラートを保存する"""
        self.table.put_item(Item=self._to_item(alert))

    def find_by_id(self, alert_id: AlertId) -> PriceAlert | None:
        response = self.table.get_item(
            Key={"PK": f"ALERT#{alert_id}", "SK": "METADATA"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_user(self, user_id: UserId) -> list[PriceAlert]:
        return self._query_all(
            IndexName=USER_INDEX,
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}"),
        )

    def find_active(self) -> list[PriceAlert]:
        return self._query_all(
            IndexName=ACTIVE_INDEX,
            KeyConditionExpression=Key("GSI2PK").eq("ALERTS#ACTIVE"),
        )

    def delete(self, alert_id: AlertId) -> None:
        self.table.delete_item(Key={"PK": f"ALERT#{alert_id}", "SK": "METADATA"})

    def acquire_lease(self, alert_id: AlertId, owner: str, ttl_seconds: int) -> bool:
        """条件付き書き込みでリースを取得する

        期限切れのリースは他の所有者が上書きできる。
        """
        now = int(time.time())
        try:
            self.table.put_item(
                Item={
                    "PK": f"ALERT#{alert_id}",
                    "SK": "LEASE",
                    "entity_type": "ALERT_LEASE",
                    "owner": owner,
                    "expires_at": now + ttl_seconds,
                },
                ConditionExpression=Attr("PK").not_exists()
                | Attr("owner").eq(owner)
                | Attr("expires_at").lt(now),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise
        return True

    def release_lease(self, alert_id: AlertId, owner: str) -> None:
        """自分が保持しているリースのみ解放する"""
        try:
            self.table.delete_item(
                Key={"PK": f"ALERT#{alert_id}", "SK": "LEASE"},
                ConditionExpression=Attr("owner").eq(owner),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return
            raise

    def _query_all(self, **kwargs: Any) -> list[PriceAlert]:
        alerts = []
        while True:
            response = self.table.query(**kwargs)
            alerts.extend(self._to_entity(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return alerts
            kwargs["ExclusiveStartKey"] = last_key

    def _to_item(self, alert: PriceAlert) -> dict:
        """ドメインエンティティを DynamoDB アイテムに変換する"""
        item = {
            "PK": f"ALERT#{alert.id}",
            "SK": "METADATA",
            "entity_type": "PRICE_ALERT",
            "alert_id": str(alert.id),
            "user_id": str(alert.user_id),
            "origin": alert.origin,
            "destination": alert.destination,
            "departure_date": alert.departure_date.isoformat(),
            "trip_type": alert.trip_type.value,
            "passengers": {
                "adults": alert.passengers.adults,
                "children": alert.passengers.children,
                "infants": alert.passengers.infants,
            },
            "cabin_class": alert.cabin_class.value,
            "target_price": str(alert.target_price),
            "currency": str(alert.currency),
            "alert_type": alert.alert_type.value,
            "frequency": alert.frequency.value,
            "email_notifications": alert.email_notifications,
            "push_notifications": alert.push_notifications,
            "price_history": [
                {
                    "date": str(entry.date),
                    "price": str(entry.price),
                    "change": str(entry.change),
                    "change_percent": str(entry.change_percent),
                }
                for entry in alert.price_history
            ],
            "is_active": alert.is_active,
            "created_at": str(alert.created_at),
            "updated_at": str(alert.updated_at),
            "GSI1PK": f"USER#{alert.user_id}",
            "GSI1SK": str(alert.created_at),
        }
        if alert.return_date is not None:
            item["return_date"] = alert.return_date.isoformat()
        if alert.current_price is not None:
            item["current_price"] = str(alert.current_price)
        if alert.last_checked is not None:
            item["last_checked"] = str(alert.last_checked)
        if alert.expires_at is not None:
            item["expires_at"] = str(alert.expires_at)
        if alert.is_active:
            item["GSI2PK"] = "ALERTS#ACTIVE"
            item["GSI2SK"] = f"ALERT#{alert.id}"
        return item

    def _to_entity(self, item: dict) -> PriceAlert:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        passengers = item.get("passengers", {})
        return PriceAlert(
            id=AlertId(value=item["alert_id"]),
            user_id=UserId(value=item["user_id"]),
            origin=item["origin"],
            destination=item["destination"],
            departure_date=date.fromisoformat(item["departure_date"]),
            return_date=(
                date.fromisoformat(item["return_date"])
                if item.get("return_date")
                else None
            ),
            trip_type=TripType(item["trip_type"]),
            passengers=PassengerCounts(
                adults=int(passengers.get("adults", 1)),
                children=int(passengers.get("children", 0)),
                infants=int(passengers.get("infants", 0)),
            ),
            cabin_class=CabinClass(item["cabin_class"]),
            target_price=Decimal(item["target_price"]),
            currency=Currency(item["currency"]),
            alert_type=AlertType(item["alert_type"]),
            frequency=AlertFrequency(item["frequency"]),
            email_notifications=bool(item.get("email_notifications", True)),
            push_notifications=bool(item.get("push_notifications", False)),
            current_price=(
                Decimal(item["current_price"]) if item.get("current_price") else None
            ),
            last_checked=(
                IsoDateTime.from_string(item["last_checked"])
                if item.get("last_checked")
                else None
            ),
            price_history=PriceHistory(
                entries=tuple(
                    PriceHistoryEntry(
                        date=IsoDateTime.from_string(entry["date"]),
                        price=Decimal(entry["price"]),
                        change=Decimal(entry["change"]),
                        change_percent=Decimal(entry["change_percent"]),
                    )
                    for entry in item.get("price_history", [])
                )
            ),
            is_active=bool(item.get("is_active", True)),
            expires_at=(
                IsoDateTime.from_string(item["expires_at"])
                if item.get("expires_at")
                else None
            ),
            created_at=IsoDateTime.from_string(item["created_at"]),
            updated_at=IsoDateTime.from_string(item["updated_at"]),
        )
