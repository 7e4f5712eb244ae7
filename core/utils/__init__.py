"""
유틸리티 패키지

타임존 처리, 금액 변환, 페이지네이션 공통 유틸리티
"""

from core.utils.money import check_money, parse_amount, parse_money, to_money_str
from core.utils.pagination import paginate
from core.utils.timezone import (
    end_of_day,
    ensure_utc,
    now_utc,
    parse_datetime,
    to_iso,
)

__all__ = [
    "end_of_day",
    "ensure_utc",
    "now_utc",
    "parse_datetime",
    "to_iso",
    "check_money",
    "parse_amount",
    "parse_money",
    "to_money_str",
    "paginate",
]
