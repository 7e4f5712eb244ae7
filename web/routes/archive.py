"""
보관함 라우트

엔티티 보관/복원 (PUT /api/{type}/{id}/archive|restore)과
보관함 조회/통계/복원/영구 삭제 (/api/archive/...) API
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.archive.manager import ArchiveManager
from web.dependencies import get_archive_manager
from web.models.responses import ArchiveStatsResponse, MessageResponse, SuccessResponse

router = APIRouter(prefix="/api", tags=["Archive"])


# =========================================================================
# 보관함
# =========================================================================


@router.get("/archive/stats", response_model=ArchiveStatsResponse)
async def get_archive_stats(
    archive: ArchiveManager = Depends(get_archive_manager),
) -> dict[str, Any]:
    """보관함 통계

    Returns:
        {total, byType, oldestDate}
    """
    return await archive.stats()


@router.get("/archive/{entity_type}")
async def list_archived(
    entity_type: str,
    page: int = Query(default=1, ge=1, description="페이지"),
    limit: int | None = Query(default=None, ge=1, le=100, description="페이지 크기 (기본: 설정값)"),
    search: str | None = Query(default=None, description="이름/설명 검색어"),
    start_date: str | None = Query(default=None, alias="startDate", description="updatedAt 시작일"),
    end_date: str | None = Query(default=None, alias="endDate", description="updatedAt 종료일 (포함)"),
    transaction_type: str | None = Query(
        default=None, alias="transactionType", description="거래 유형 (transactions 전용)"
    ),
    archive: ArchiveManager = Depends(get_archive_manager),
) -> dict[str, Any]:
    """보관된 엔티티 목록 (updatedAt 최신순)

    Returns:
        {items, pagination: {total, totalPages, currentPage, limit}}
    """
    return await archive.list(
        entity_type,
        page=page,
        limit=limit,
        search=search,
        start_date=start_date,
        end_date=end_date,
        transaction_type=transaction_type,
    )


@router.patch("/archive/{entity_type}/{entity_id}/restore")
async def restore_from_archive(
    entity_type: str,
    entity_id: str,
    archive: ArchiveManager = Depends(get_archive_manager),
) -> dict[str, Any]:
    """보관함에서 복원

    Returns:
        {message, item}
    """
    entity = await archive.restore(entity_type, entity_id)
    return {"message": "Item restored from archive", "item": entity.to_dict()}


@router.delete("/archive/{entity_type}/{entity_id}", response_model=MessageResponse)
async def delete_from_archive(
    entity_type: str,
    entity_id: str,
    archive: ArchiveManager = Depends(get_archive_manager),
) -> MessageResponse:
    """보관함에서 영구 삭제 (보관되지 않은 엔티티는 409)"""
    await archive.delete(entity_type, entity_id)
    return MessageResponse(message="Item deleted from archive permanently")


# =========================================================================
# 엔티티별 보관/복원
# =========================================================================


@router.put("/{entity_type}/{entity_id}/archive", response_model=SuccessResponse)
async def archive_entity(
    entity_type: str,
    entity_id: str,
    archive: ArchiveManager = Depends(get_archive_manager),
) -> SuccessResponse:
    """엔티티 보관 (accounts, categories, transactions, goals, debts, subscriptions)"""
    await archive.archive(entity_type, entity_id)
    return SuccessResponse()


@router.put("/{entity_type}/{entity_id}/restore", response_model=SuccessResponse)
async def restore_entity(
    entity_type: str,
    entity_id: str,
    archive: ArchiveManager = Depends(get_archive_manager),
) -> SuccessResponse:
    """엔티티 복원 (항상 active로)"""
    await archive.restore(entity_type, entity_id)
    return SuccessResponse()
