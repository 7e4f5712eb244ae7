"""
카테고리 서비스
"""

import logging
from typing import Any

from core.constants import Defaults
from core.domain.models import Category, new_id
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status
from core.utils.timezone import now_utc
from web.models.requests import CategoryCreateRequest, CategoryUpdateRequest
from web.services.common import require_active, status_filter

logger = logging.getLogger(__name__)


class CategoryService:
    """카테고리 서비스

    Args:
        store: EntityStore
    """

    def __init__(self, store: EntityStore):
        self.store = store

    async def list_categories(
        self,
        status: str | None = None,
        category_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """카테고리 목록 (기본: active, type 필터 선택)"""
        statuses = status_filter(EntityType.CATEGORIES, status, [Status.ACTIVE.value])
        async with self.store.reading() as store:
            categories = await store.categories.list(statuses)
        if category_type:
            categories = [c for c in categories if c.type == category_type]
        return [category.to_dict() for category in categories]

    async def get_category(self, category_id: str) -> dict[str, Any]:
        async with self.store.reading() as store:
            category = await store.categories.require(category_id)
        return category.to_dict()

    async def create_category(self, request: CategoryCreateRequest) -> dict[str, Any]:
        category = Category(
            id=new_id(),
            name=request.name,
            type=request.type.value,
            icon=request.icon or Defaults.CATEGORY_ICON,
            color=request.color,
        )
        async with self.store.unit_of_work() as store:
            await store.categories.add(category)

        logger.info("카테고리 생성", extra={"category_id": category.id, "type": category.type})
        return category.to_dict()

    async def update_category(self, category_id: str, request: CategoryUpdateRequest) -> dict[str, Any]:
        async with self.store.unit_of_work() as store:
            category = await require_active(store, EntityType.CATEGORIES, category_id)
            if request.name is not None:
                category.name = request.name
            if request.type is not None:
                category.type = request.type.value
            if request.icon:
                category.icon = request.icon
            if "color" in request.model_fields_set:
                category.color = request.color
            category.updated_at = now_utc()
            await store.categories.save(category)

        return category.to_dict()
