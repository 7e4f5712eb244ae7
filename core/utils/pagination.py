"""
페이지네이션 유틸리티
"""

import math
from typing import Any, Sequence, TypeVar

from core.constants import Defaults
from core.errors import ValidationError

T = TypeVar("T")


def paginate(
    items: Sequence[T],
    page: int = Defaults.PAGE,
    limit: int = Defaults.PAGE_LIMIT,
) -> tuple[list[T], dict[str, Any]]:
    """목록을 페이지로 자르기

    Args:
        items: 정렬이 끝난 전체 목록
        page: 1부터 시작하는 페이지 번호
        limit: 페이지 크기 (1 ~ Defaults.MAX_PAGE_LIMIT)

    Returns:
        (해당 페이지 항목, {total, totalPages, currentPage, limit})

    Raises:
        ValidationError: page < 1 또는 limit 범위 밖
    """
    if page < 1:
        raise ValidationError("page must be >= 1")
    if limit < 1 or limit > Defaults.MAX_PAGE_LIMIT:
        raise ValidationError(f"limit must be between 1 and {Defaults.MAX_PAGE_LIMIT}")

    total = len(items)
    start = (page - 1) * limit
    pagination = {
        "total": total,
        "totalPages": math.ceil(total / limit),
        "currentPage": page,
        "limit": limit,
    }
    return list(items[start:start + limit]), pagination
