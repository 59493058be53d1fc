import pytest

from flight_services.shared.domain import Currency


class TestCurrency:
    """Currency Value Object のテスト"""

    def test_code_is_upper_cased(self):
        assert Currency("eur").code == "EUR"

    def test_unsupported_currency_raises_error(self):
        """未対応の通貨コードは ValueError"""
        with pytest.raises(ValueError, match="Unsupported currency"):
            Currency("XYZ")

    @pytest.mark.parametrize("code", ["USD", "jpy", "SGD"])
    def test_is_supported(self, code):
        assert Currency.is_supported(code) is True
