import pytest

from flight_services.shared.domain import Result, ValidationException


class TestResult:
    """Result のテスト"""

    def test_ok_carries_value(self):
        result = Result.ok("value")
        assert result.success is True
        assert result.failed is False
        assert result.unwrap() == "value"

    def test_failure_unwrap_raises_carried_error(self):
        """失敗時の unwrap は保持しているエラーを送出する"""
        error = ValidationException("origin", "is required")
        result = Result.failure(error)

        assert result.failed is True
        assert result.error is error
        with pytest.raises(ValidationException, match="origin: is required"):
            result.unwrap()
