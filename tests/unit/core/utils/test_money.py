"""
core/utils/money.py 테스트
"""

from decimal import Decimal

import pytest

from core.utils.money import check_money, parse_amount, parse_money, to_money_str


class TestParseAmount:
    """parse_amount 테스트"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("100", Decimal("100")),
            (" 12.50 ", Decimal("12.50")),
            (7, Decimal("7")),
            (Decimal("3.3"), Decimal("3.3")),
        ],
    )
    def test_valid(self, value, expected: Decimal) -> None:
        assert parse_amount(value) == expected

    def test_float_goes_through_str(self) -> None:
        """0.1은 이진 오차 없이 Decimal('0.1')"""
        assert parse_amount(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", ["abc", "", None, True, "NaN", "Infinity", [1]])
    def test_invalid(self, value) -> None:
        with pytest.raises(ValueError):
            parse_amount(value)


class TestParseMoney:
    """0.01 단위, 정수부 13자리 이내"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12.5", Decimal("12.5")),
            ("-9999999999999.99", Decimal("-9999999999999.99")),
            ("1.000", Decimal("1.000")),
            (0.1, Decimal("0.1")),
        ],
    )
    def test_valid(self, value, expected: Decimal) -> None:
        assert parse_money(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["1e1000000", "10000000000000", "-10000000000000", "0.005", "1E-28", "abc"],
    )
    def test_invalid(self, value) -> None:
        with pytest.raises(ValueError):
            parse_money(value)

    def test_check_money_returns_value(self) -> None:
        value = Decimal("42.10")
        assert check_money(value) is value


class TestToMoneyStr:
    def test_keeps_scale(self) -> None:
        assert to_money_str(Decimal("10.00")) == "10.00"

    def test_none(self) -> None:
        assert to_money_str(None) is None
