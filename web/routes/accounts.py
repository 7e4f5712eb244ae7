"""
계좌 라우트

계좌 CRUD, 이력, 계좌 간 이체 API
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.ledger.engine import LedgerEngine
from web.dependencies import get_account_service, get_ledger
from web.models.requests import AccountCreateRequest, AccountUpdateRequest, TransferRequest
from web.services.account_service import AccountService

router = APIRouter(prefix="/api", tags=["Accounts"])


@router.get("/accounts")
async def list_accounts(
    status: str | None = Query(default=None, description="상태 (쉼표 구분, 기본: active)"),
    service: AccountService = Depends(get_account_service),
) -> list[dict[str, Any]]:
    """계좌 목록"""
    return await service.list_accounts(status)


@router.post("/accounts/transfer")
async def transfer_funds(
    request: TransferRequest,
    ledger: LedgerEngine = Depends(get_ledger),
) -> dict[str, Any]:
    """계좌 간 이체

    출금/입금 계좌 잔액과 이력, transfer 거래가 함께 기록된다.
    잔액 부족 시 400, 계좌가 없으면 404.
    """
    result = await ledger.transfer(
        request.from_account_id,
        request.to_account_id,
        request.amount,
        description=request.description,
        date=request.date,
    )
    return result.to_dict()


@router.get("/accounts/{account_id}")
async def get_account(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """계좌 조회"""
    return await service.get_account(account_id)


@router.get("/accounts/{account_id}/history")
async def get_account_history(
    account_id: str,
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """계좌 이력 (최신순)"""
    return await service.get_history(account_id)


@router.post("/accounts", status_code=201)
async def create_account(
    request: AccountCreateRequest,
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """계좌 생성"""
    return await service.create_account(request)


@router.put("/accounts/{account_id}")
async def update_account(
    account_id: str,
    request: AccountUpdateRequest,
    service: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """계좌 수정 (잔액 제외)"""
    return await service.update_account(account_id, request)
