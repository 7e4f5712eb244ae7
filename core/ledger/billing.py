"""
구독 결제 주기 계산

월/분기/연 단위는 dateutil.relativedelta로 달력 기준 이동
(1월 31일 + 1개월 = 2월 말일).
"""

from datetime import datetime, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from core.types import Frequency

_PERIODS: dict[str, timedelta | relativedelta] = {
    Frequency.WEEKLY.value: timedelta(days=7),
    Frequency.BIWEEKLY.value: timedelta(days=14),
    Frequency.MONTHLY.value: relativedelta(months=1),
    Frequency.QUARTERLY.value: relativedelta(months=3),
    Frequency.YEARLY.value: relativedelta(years=1),
}

# 월 환산 배수 (주 4.33회, 격주 2.17회)
_MONTHLY_FACTORS: dict[str, Decimal] = {
    Frequency.WEEKLY.value: Decimal("4.33"),
    Frequency.BIWEEKLY.value: Decimal("2.17"),
    Frequency.MONTHLY.value: Decimal("1"),
    Frequency.QUARTERLY.value: Decimal("1") / Decimal("3"),
    Frequency.YEARLY.value: Decimal("1") / Decimal("12"),
}


def billing_period(
    frequency: Frequency | str,
    custom_frequency_days: int | None = None,
) -> timedelta | relativedelta:
    """결제 주기 한 번의 길이

    Args:
        frequency: 결제 주기
        custom_frequency_days: frequency가 custom일 때 일수

    Returns:
        datetime에 더할 수 있는 기간

    Raises:
        ValueError: 알 수 없는 주기 또는 custom 일수가 양수가 아닌 경우
    """
    key = frequency.value if isinstance(frequency, Frequency) else frequency

    if key == Frequency.CUSTOM.value:
        if not custom_frequency_days or custom_frequency_days <= 0:
            raise ValueError("customFrequencyDays must be a positive integer")
        return timedelta(days=custom_frequency_days)

    try:
        return _PERIODS[key]
    except KeyError:
        raise ValueError(f"Unknown frequency: {key}") from None


def next_payment_date(
    current: datetime,
    frequency: Frequency | str,
    custom_frequency_days: int | None = None,
) -> datetime:
    """다음 결제일

    Example:
        >>> next_payment_date(datetime(2024, 1, 10, tzinfo=timezone.utc), "monthly")
        datetime(2024, 2, 10, 0, 0, tzinfo=timezone.utc)
    """
    return current + billing_period(frequency, custom_frequency_days)


def monthly_amount(
    amount: Decimal,
    frequency: Frequency | str,
    custom_frequency_days: int | None = None,
) -> Decimal:
    """결제 금액의 월 환산액 (반올림하지 않음)

    custom 주기는 한 달을 30일로 본다.

    Raises:
        ValueError: 알 수 없는 주기 또는 custom 일수가 양수가 아닌 경우
    """
    key = frequency.value if isinstance(frequency, Frequency) else frequency

    if key == Frequency.CUSTOM.value:
        if not custom_frequency_days or custom_frequency_days <= 0:
            raise ValueError("customFrequencyDays must be a positive integer")
        return amount * Decimal(30) / Decimal(custom_frequency_days)

    try:
        return amount * _MONTHLY_FACTORS[key]
    except KeyError:
        raise ValueError(f"Unknown frequency: {key}") from None
