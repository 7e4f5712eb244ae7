"""
카테고리 라우트
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from web.dependencies import get_category_service
from web.models.requests import CategoryCreateRequest, CategoryUpdateRequest
from web.services.category_service import CategoryService

router = APIRouter(prefix="/api", tags=["Categories"])


@router.get("/categories")
async def list_categories(
    status: str | None = Query(default=None, description="상태 (쉼표 구분, 기본: active)"),
    type: str | None = Query(default=None, description="income | expense"),
    service: CategoryService = Depends(get_category_service),
) -> list[dict[str, Any]]:
    """카테고리 목록"""
    return await service.list_categories(status, type)


@router.get("/categories/{category_id}")
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> dict[str, Any]:
    return await service.get_category(category_id)


@router.post("/categories", status_code=201)
async def create_category(
    request: CategoryCreateRequest,
    service: CategoryService = Depends(get_category_service),
) -> dict[str, Any]:
    return await service.create_category(request)


@router.put("/categories/{category_id}")
async def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: CategoryService = Depends(get_category_service),
) -> dict[str, Any]:
    return await service.update_category(category_id, request)
