from decimal import Decimal

import pytest

from flight_services.price_alert.domain.enum import AlertType, NotificationKind
from flight_services.price_alert.domain.service import decide_trigger


class TestDecideTrigger:
    """decide_trigger のテスト"""

    def test_first_sample_never_triggers_price_drop(self):
        assert decide_trigger(AlertType.PRICE_DROP, Decimal("1"), Decimal("500"), None) is None

    def test_equal_price_does_not_trigger_price_drop(self):
        assert (
            decide_trigger(
                AlertType.PRICE_DROP, Decimal("500"), Decimal("700"), Decimal("500")
            )
            is None
        )

    def test_price_above_on_target(self):
        assert (
            decide_trigger(AlertType.PRICE_ABOVE, Decimal("500"), Decimal("500"), None)
            == NotificationKind.PRICE_INCREASE
        )

    def test_unknown_alert_type_raises_type_error(self):
        with pytest.raises(TypeError):
            decide_trigger("price-sideways", Decimal("1"), Decimal("1"), None)
