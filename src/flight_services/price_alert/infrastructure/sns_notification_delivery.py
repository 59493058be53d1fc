import json
import os
from typing import Any

import boto3

from flight_services.price_alert.domain.gateway import NotificationDelivery
from flight_services.price_alert.domain.value_object import NotificationDirective


class SnsNotificationDelivery(NotificationDelivery):
    """SNS トピックに通知指示を JSON で発行する

    メール・プッシュ等の配信はトピックの購読側が行う。
    """

    def __init__(self, topic_arn: str | None = None, client: Any = None) -> None:
        self.topic_arn = topic_arn or os.getenv("NOTIFICATION_TOPIC_ARN")
        self.client = client or boto3.client("sns")

    def deliver(self, directive: NotificationDirective, user_id: str) -> None:
        self.client.publish(
            TopicArn=self.topic_arn,
            Subject="Flight price alert",
            Message=json.dumps(self._to_message(directive, user_id)),
            MessageAttributes={
                "kind": {"DataType": "String", "StringValue": directive.kind.value},
                "user_id": {"DataType": "String", "StringValue": user_id},
            },
        )

    @staticmethod
    def _to_message(directive: NotificationDirective, user_id: str) -> dict:
        return {
            "alert_id": str(directive.alert_id),
            "user_id": user_id,
            "kind": directive.kind.value,
            "previous_price": str(directive.previous_price),
            "current_price": str(directive.current_price),
            "change_amount": str(directive.change_amount),
            "change_percent": str(directive.change_percent),
            "message": directive.message,
        }
