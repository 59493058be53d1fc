from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from flight_services.price_alert.domain.service import evaluate
from flight_services.price_alert.domain.value_object import AlertId
from flight_services.price_alert.infrastructure.dynamodb_price_alert_repository import (
    DynamoDBPriceAlertRepository,
)


def _conditional_check_failed(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "ConditionalCheckFailedException", "Message": "failed"}},
        operation,
    )


class TestDynamoDBPriceAlertRepository:
    """DynamoDBPriceAlertRepository のテスト（テーブルはモック）"""

    def test_item_round_trip(self, create_alert, now):
        """保存したアイテムから同じ内容のアラートが復元される"""
        table = MagicMock()
        repository = DynamoDBPriceAlertRepository(table=table)
        alert = evaluate(create_alert(), Decimal("480"), now=now).updated_alert

        repository.save(alert)
        item = table.put_item.call_args.kwargs["Item"]
        table.get_item.return_value = {"Item": item}
        restored = repository.find_by_id(AlertId(value="alert-1"))

        assert item["PK"] == "ALERT#alert-1"
        assert item["GSI1PK"] == "USER#user-123"
        assert item["GSI2PK"] == "ALERTS#ACTIVE"
        assert restored == alert
        assert restored.current_price == Decimal("480")
        assert restored.last_checked == now
        assert list(restored.price_history) == list(alert.price_history)
        assert restored.departure_date == alert.departure_date

    def test_inactive_alert_is_not_indexed_as_active(self, create_alert):
        table = MagicMock()
        repository = DynamoDBPriceAlertRepository(table=table)

        repository.save(create_alert(is_active=False))

        assert "GSI2PK" not in table.put_item.call_args.kwargs["Item"]

    def test_acquire_lease(self):
        table = MagicMock()
        repository = DynamoDBPriceAlertRepository(table=table)

        assert repository.acquire_lease(AlertId(value="alert-1"), "owner-a", 60) is True

        item = table.put_item.call_args.kwargs["Item"]
        assert item["SK"] == "LEASE"
        assert item["owner"] == "owner-a"

    def test_lease_held_elsewhere_is_not_acquired(self):
        """他の所有者がリースを保持している場合は False"""
        table = MagicMock()
        table.put_item.side_effect = _conditional_check_failed("PutItem")
        repository = DynamoDBPriceAlertRepository(table=table)

        assert repository.acquire_lease(AlertId(value="alert-1"), "owner-b", 60) is False

    def test_release_lease_ignores_foreign_lease(self):
        table = MagicMock()
        table.delete_item.side_effect = _conditional_check_failed("DeleteItem")
        repository = DynamoDBPriceAlertRepository(table=table)

        repository.release_lease(AlertId(value="alert-1"), "owner-a")

    def test_other_client_errors_propagate(self):
        table = MagicMock()
        table.put_item.side_effect = ClientError(
            {"Error": {"Code": "InternalServerError"}}, "PutItem"
        )
        repository = DynamoDBPriceAlertRepository(table=table)

        with pytest.raises(ClientError):
            repository.acquire_lease(AlertId(value="alert-1"), "owner-a", 60)

    def test_delete(self):
        table = MagicMock()
        repository = DynamoDBPriceAlertRepository(table=table)

        repository.delete(AlertId(value="alert-1"))

        table.delete_item.assert_called_once_with(
            Key={"PK": "ALERT#alert-1", "SK": "METADATA"}
        )
