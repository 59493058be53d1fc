from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from flight_services.shared.domain import Currency, IsoDateTime, Money, UserId


@pytest.fixture
def user_id():
    """全テスト共通の UserId フィクスチャ"""
    return UserId(value="user-123")


@pytest.fixture
def now():
    """テスト用の基準時刻"""
    return IsoDateTime.from_string("2026-03-01T09:00:00+00:00")


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def usd():
    """米ドルの Money を生成する Factory fixture"""

    def _factory(amount: Decimal | int | str) -> Money:
        return Money(Decimal(str(amount)), Currency("USD"))

    return _factory
