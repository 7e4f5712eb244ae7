"""
금액 유틸리티

금액은 항상 Decimal로 다루고 JSON에는 문자열로 직렬화한다.
float은 str()을 거쳐 변환하여 이진 부동소수 오차를 들여오지 않는다.

잔액에 더해지는 금액은 parse_money()로 최소 단위(0.01)와 크기 한도를 검증한다.
한도 안의 금액끼리의 합은 Decimal 기본 정밀도(28자리) 안에서 정확하다.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from core.constants import Money


def parse_amount(value: Any) -> Decimal:
    """금액 값 → Decimal

    Args:
        value: Decimal, int, float, str

    Returns:
        Decimal

    Raises:
        ValueError: 숫자로 해석할 수 없거나 NaN/무한대인 경우
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def check_money(value: Decimal) -> Decimal:
    """금액 크기/자릿수 검증

    Args:
        value: 유한한 Decimal (부호 무관)

    Returns:
        value 그대로

    Raises:
        ValueError: |value| ≥ Money.LIMIT 이거나 소수점 이하가 0.01 단위가 아닌 경우
    """
    if abs(value) >= Money.LIMIT:
        raise ValueError(f"Amount is too large: {value}")
    if value != value.quantize(Money.QUANTUM):
        raise ValueError(f"Amount must have at most {Money.PLACES} decimal places: {value}")
    return value


def parse_money(value: Any) -> Decimal:
    """잔액에 반영할 금액 파싱 (parse_amount + check_money)

    Raises:
        ValueError: 숫자가 아니거나 한도/자릿수 위반
    """
    return check_money(parse_amount(value))


def to_money_str(value: Decimal | None) -> str | None:
    """Decimal → 문자열 (None 유지)"""
    if value is None:
        return None
    return str(value)
