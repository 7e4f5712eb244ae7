"""
core/utils/pagination.py 테스트
"""

import pytest

from core.constants import Defaults
from core.errors import ValidationError
from core.utils.pagination import paginate


class TestPaginate:
    """paginate 테스트"""

    def test_first_page(self) -> None:
        items, pagination = paginate(list(range(25)), page=1, limit=10)

        assert items == list(range(10))
        assert pagination == {"total": 25, "totalPages": 3, "currentPage": 1, "limit": 10}

    def test_last_partial_page(self) -> None:
        items, pagination = paginate(list(range(25)), page=3, limit=10)

        assert items == [20, 21, 22, 23, 24]
        assert pagination["currentPage"] == 3

    def test_page_beyond_end_is_empty(self) -> None:
        items, pagination = paginate([1, 2], page=5, limit=10)

        assert items == []
        assert pagination["total"] == 2
        assert pagination["totalPages"] == 1

    def test_empty(self) -> None:
        items, pagination = paginate([], page=1, limit=10)

        assert items == []
        assert pagination["totalPages"] == 0

    @pytest.mark.parametrize(
        "page,limit",
        [(0, 10), (-1, 10), (1, 0), (1, Defaults.MAX_PAGE_LIMIT + 1)],
    )
    def test_invalid_arguments(self, page: int, limit: int) -> None:
        with pytest.raises(ValidationError):
            paginate([1], page=page, limit=limit)
