import os
from dataclasses import asdict
from decimal import Decimal
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from flight_services.booking.domain.entity import FlightBooking
from flight_services.booking.domain.enum import (
    ActorType,
    BookingStatus,
    ModificationType,
    PassengerType,
    RefundStatus,
    TripType,
)
from flight_services.booking.domain.repository import BookingRepository
from flight_services.booking.domain.value_object import (
    Actor,
    BookingAddOns,
    BookingDiscounts,
    BookingFees,
    BookingId,
    BookingModification,
    BookingPricing,
    BookingReference,
    Cancellation,
    FieldChange,
    Passenger,
    PromoCodeDiscount,
)
from flight_services.shared.domain import Currency, IsoDateTime, Money, UserId
from flight_services.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)

REFERENCE_INDEX = "GSI1"
STATUS_INDEX = "GSI2"


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    シングルテーブル設計:
      - PK=BOOKING#{booking_id}, SK=METADATA
      - GSI1: 予約番号での検索 (GSI1PK=REF#{reference})
      - GSI2: ステータスでの検索 (GSI2PK=STATUS#{status})
    """

    def __init__(self, table_name: str | None = None, table: Any = None) -> None:
        if table is not None:
            self.table = table
            return
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, booking: FlightBooking) -> None:
        """予約をDBに保存する"""
        try:
            self.table.put_item(
                Item=self._to_item(booking),
                ConditionExpression=Attr("PK").not_exists(),
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                )
            raise

    def find_by_id(self, booking_id: BookingId) -> FlightBooking | None:
        """予約IDで検索"""
        response = self.table.get_item(
            Key={"PK": f"BOOKING#{booking_id}", "SK": "METADATA"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_pending_payment(self) -> list[FlightBooking]:
        """支払い待ちの予約を取得する"""
        kwargs: dict = {
            "IndexName": STATUS_INDEX,
            "KeyConditionExpression": Key("GSI2PK").eq(
                f"STATUS#{BookingStatus.PENDING_PAYMENT.value}"
            ),
        }
        bookings = []
        while True:
            response = self.table.query(**kwargs)
            bookings.extend(self._to_entity(item) for item in response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return bookings
            kwargs["ExclusiveStartKey"] = last_key

    def update(
        self, booking: FlightBooking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約を更新する

        予約全体を書き戻し、expected_status を指定した場合は
        保存済みのステータスが一致する場合のみ書き込む。
        """
        kwargs: dict = {"Item": self._to_item(booking)}
        if expected_status is not None:
            kwargs["ConditionExpression"] = Attr("status").eq(expected_status.value)
        else:
            kwargs["ConditionExpression"] = Attr("PK").exists()

        try:
            self.table.put_item(**kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                )
            raise

    def reference_exists(self, reference: str) -> bool:
        """予約番号が採番済みかどうか"""
        response = self.table.query(
            IndexName=REFERENCE_INDEX,
            KeyConditionExpression=Key("GSI1PK").eq(f"REF#{reference.upper()}"),
            Select="COUNT",
        )
        return response.get("Count", 0) > 0

    def _to_item(self, booking: FlightBooking) -> dict:
        """ドメインエンティティを DynamoDB アイテムに変換する"""
        pricing = booking.pricing
        item = {
            "PK": f"BOOKING#{booking.id}",
            "SK": "METADATA",
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "booking_reference": str(booking.booking_reference),
            "user_id": str(booking.user_id),
            "status": booking.status.value,
            "trip_type": booking.trip_type.value,
            "passengers": [
                {k: v for k, v in asdict(p).items() if v is not None}
                | {"type": p.type.value}
                for p in booking.passengers
            ],
            "pricing": {
                "base_price": str(pricing.base_price),
                "taxes": str(pricing.taxes),
                "currency": str(pricing.currency),
                "fees": {k: str(v) for k, v in asdict(pricing.fees).items()},
                "add_ons": {k: str(v) for k, v in asdict(pricing.add_ons).items()},
                "loyalty_discount": str(pricing.discounts.loyalty_discount),
                "member_discount": str(pricing.discounts.member_discount),
            },
            "modifications": [self._modification_to_item(m) for m in booking.modifications],
            "created_at": str(booking.created_at),
            "updated_at": str(booking.updated_at),
            "GSI1PK": f"REF#{booking.booking_reference}",
            "GSI1SK": f"BOOKING#{booking.id}",
            "GSI2PK": f"STATUS#{booking.status.value}",
            "GSI2SK": str(booking.created_at),
        }
        promo = pricing.discounts.promo_code
        if promo is not None:
            item["pricing"]["promo_code"] = {
                "code": promo.code,
                "discount": str(promo.discount),
                "description": promo.description,
            }
        if booking.expires_at is not None:
            item["expires_at"] = str(booking.expires_at)
        if booking.cancellation is not None:
            c = booking.cancellation
            item["cancellation"] = {
                "reason": c.reason,
                "cancelled_at": str(c.cancelled_at),
                "cancelled_by": self._actor_to_item(c.cancelled_by),
                "refund_amount": str(c.refund_amount.amount),
                "cancellation_fees": str(c.cancellation_fees.amount),
                "currency": str(c.refund_amount.currency),
                "refund_status": c.refund_status.value,
            }
        return item

    @staticmethod
    def _actor_to_item(actor: Actor) -> dict:
        item = {"user_type": actor.user_type.value, "name": actor.name}
        if actor.user_id is not None:
            item["user_id"] = actor.user_id
        return item

    def _modification_to_item(self, modification: BookingModification) -> dict:
        item = {
            "id": modification.id,
            "type": modification.type.value,
            "description": modification.description,
            "timestamp": str(modification.timestamp),
            "performed_by": self._actor_to_item(modification.performed_by),
            "changes": [
                {
                    "field": c.field,
                    "old_value": str(c.old_value),
                    "new_value": str(c.new_value),
                }
                for c in modification.changes
            ],
        }
        if modification.cost is not None:
            item["cost"] = str(modification.cost)
        return item

    def _to_entity(self, item: dict) -> FlightBooking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        pricing = item["pricing"]
        promo = pricing.get("promo_code")
        currency = Currency(pricing["currency"])
        cancellation = item.get("cancellation")

        return FlightBooking(
            id=BookingId(value=item["booking_id"]),
            booking_reference=BookingReference(value=item["booking_reference"]),
            user_id=UserId(value=item["user_id"]),
            trip_type=TripType(item["trip_type"]),
            passengers=tuple(
                Passenger(
                    id=p["id"],
                    type=PassengerType(p["type"]),
                    first_name=p["first_name"],
                    last_name=p["last_name"],
                    date_of_birth=p.get("date_of_birth"),
                    nationality=p.get("nationality"),
                    seat_number=p.get("seat_number"),
                )
                for p in item.get("passengers", [])
            ),
            pricing=BookingPricing(
                base_price=Decimal(pricing["base_price"]),
                taxes=Decimal(pricing["taxes"]),
                currency=currency,
                fees=BookingFees(
                    **{k: Decimal(v) for k, v in pricing.get("fees", {}).items()}
                ),
                add_ons=BookingAddOns(
                    **{k: Decimal(v) for k, v in pricing.get("add_ons", {}).items()}
                ),
                discounts=BookingDiscounts(
                    promo_code=(
                        PromoCodeDiscount(
                            code=promo["code"],
                            discount=Decimal(promo["discount"]),
                            description=promo.get("description", ""),
                        )
                        if promo
                        else None
                    ),
                    loyalty_discount=Decimal(pricing.get("loyalty_discount", "0")),
                    member_discount=Decimal(pricing.get("member_discount", "0")),
                ),
            ),
            status=BookingStatus(item["status"]),
            modifications=tuple(
                self._to_modification(m) for m in item.get("modifications", [])
            ),
            cancellation=(
                Cancellation(
                    reason=cancellation["reason"],
                    cancelled_at=IsoDateTime.from_string(cancellation["cancelled_at"]),
                    cancelled_by=self._to_actor(cancellation["cancelled_by"]),
                    refund_amount=Money(
                        amount=Decimal(cancellation["refund_amount"]),
                        currency=currency,
                    ),
                    cancellation_fees=Money(
                        amount=Decimal(cancellation["cancellation_fees"]),
                        currency=currency,
                    ),
                    refund_status=RefundStatus(cancellation["refund_status"]),
                )
                if cancellation
                else None
            ),
            created_at=IsoDateTime.from_string(item["created_at"]),
            updated_at=IsoDateTime.from_string(item["updated_at"]),
            expires_at=(
                IsoDateTime.from_string(item["expires_at"])
                if item.get("expires_at")
                else None
            ),
        )

    @staticmethod
    def _to_actor(item: dict) -> Actor:
        return Actor(
            user_type=ActorType(item["user_type"]),
            name=item["name"],
            user_id=item.get("user_id"),
        )

    def _to_modification(self, item: dict) -> BookingModification:
        return BookingModification(
            id=item["id"],
            type=ModificationType(item["type"]),
            description=item["description"],
            timestamp=IsoDateTime.from_string(item["timestamp"]),
            performed_by=self._to_actor(item["performed_by"]),
            changes=tuple(
                FieldChange(
                    field=c["field"],
                    old_value=c["old_value"],
                    new_value=c["new_value"],
                )
                for c in item.get("changes", [])
            ),
            cost=Decimal(item["cost"]) if item.get("cost") else None,
        )
