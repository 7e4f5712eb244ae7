"""
거래 라우트

거래 조회/생성/수정/영구 삭제 API
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.archive.manager import ArchiveManager
from core.constants import Defaults
from core.types import EntityType
from web.dependencies import get_archive_manager, get_transaction_service
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.models.responses import MessageResponse
from web.services.transaction_service import TransactionService

router = APIRouter(prefix="/api", tags=["Transactions"])


@router.get("/transactions")
async def list_transactions(
    status: str | None = Query(default=None, description="상태 (기본: active)"),
    type: str | None = Query(default=None, description="income | expense | transfer"),
    account_id: str | None = Query(default=None, alias="accountId", description="계좌 ID"),
    category_id: str | None = Query(default=None, alias="categoryId", description="카테고리 ID"),
    start_date: str | None = Query(default=None, alias="startDate", description="시작일"),
    end_date: str | None = Query(default=None, alias="endDate", description="종료일 (포함)"),
    page: int = Query(default=Defaults.PAGE, ge=1, description="페이지"),
    limit: int = Query(default=Defaults.PAGE_LIMIT, ge=1, le=Defaults.MAX_PAGE_LIMIT, description="페이지 크기"),
    service: TransactionService = Depends(get_transaction_service),
) -> dict[str, Any]:
    """거래 목록 (날짜 최신순)

    Returns:
        {transactions, pagination}
    """
    return await service.list_transactions(
        status=status,
        transaction_type=type,
        account_id=account_id,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )


@router.get("/transactions/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    service: TransactionService = Depends(get_transaction_service),
) -> dict[str, Any]:
    """거래 조회"""
    return await service.get_transaction(transaction_id)


@router.post("/transactions", status_code=201)
async def create_transaction(
    request: TransactionCreateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> dict[str, Any]:
    """거래 생성

    income/expense는 계좌 잔액에 즉시 반영, transfer는 계좌 간 이체로 처리.
    """
    return await service.create_transaction(request)


@router.patch("/transactions/{transaction_id}")
@router.put("/transactions/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    request: TransactionUpdateRequest,
    service: TransactionService = Depends(get_transaction_service),
) -> dict[str, Any]:
    """거래 수정

    금액/유형/계좌가 바뀌면 기존 효과를 되돌리고 새 효과를 적용한다.
    """
    return await service.update_transaction(transaction_id, request)


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: str,
    archive: ArchiveManager = Depends(get_archive_manager),
) -> MessageResponse:
    """거래 영구 삭제 (보관된 거래만, 아니면 409)"""
    await archive.delete(EntityType.TRANSACTIONS, transaction_id)
    return MessageResponse(message="Transaction deleted permanently")
