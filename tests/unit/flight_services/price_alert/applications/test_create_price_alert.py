from unittest.mock import MagicMock

from flight_services.price_alert.applications.create_price_alert import (
    CreatePriceAlertService,
)
from flight_services.price_alert.domain.entity import PriceAlert
from flight_services.price_alert.domain.factory import PriceAlertFactory


class TestCreatePriceAlertService:
    """CreatePriceAlertService のテスト"""

    def test_create_saves_alert(self, user_id, alert_details):
        """アラートが作成され、Repository に保存される"""
        mock_repository = MagicMock()
        service = CreatePriceAlertService(
            repository=mock_repository, factory=PriceAlertFactory()
        )

        result = service.create(user_id, alert_details(departure_date="2099-01-01"))

        assert isinstance(result.unwrap(), PriceAlert)
        mock_repository.save.assert_called_once_with(result.unwrap())

    def test_invalid_alert_is_not_saved(self, user_id, alert_details):
        mock_repository = MagicMock()
        service = CreatePriceAlertService(
            repository=mock_repository, factory=PriceAlertFactory()
        )

        result = service.create(user_id, alert_details(origin=""))

        assert result.error.field == "origin"
        mock_repository.save.assert_not_called()
