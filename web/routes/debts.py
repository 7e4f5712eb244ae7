"""
부채 라우트
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.constants import Defaults
from web.dependencies import get_debt_service
from web.models.requests import DebtCreateRequest, DebtPaymentRequest, DebtUpdateRequest
from web.services.debt_service import DebtService

router = APIRouter(prefix="/api", tags=["Debts"])


@router.get("/debts")
async def list_debts(
    status: str | None = Query(default=None, description="상태 (쉼표 구분, 기본: 보관 외 전체)"),
    type: str | None = Query(default=None, description="credit | loan | creditCard | personalDebt"),
    service: DebtService = Depends(get_debt_service),
) -> list[dict[str, Any]]:
    """부채 목록 (다음 상환일 순)"""
    return await service.list_debts(status, type)


@router.get("/debts/upcoming")
async def upcoming_debt_payments(
    days: int = Query(
        default=Defaults.UPCOMING_DAYS, ge=0, le=Defaults.MAX_UPCOMING_DAYS, description="조회 기간 (일)"
    ),
    service: DebtService = Depends(get_debt_service),
) -> list[dict[str, Any]]:
    """다가오는 상환 (활성 부채, 다음 상환일 순)"""
    return await service.upcoming_payments(days)


@router.get("/debts/stats")
async def debt_stats(
    service: DebtService = Depends(get_debt_service),
) -> dict[str, Any]:
    """부채 통계

    Returns:
        {totalDebt, activeDebts, paidDebts, upcomingPayments, byType}
    """
    return await service.stats()


@router.get("/debts/{debt_id}")
async def get_debt(
    debt_id: str,
    service: DebtService = Depends(get_debt_service),
) -> dict[str, Any]:
    return await service.get_debt(debt_id)


@router.post("/debts", status_code=201)
async def create_debt(
    request: DebtCreateRequest,
    service: DebtService = Depends(get_debt_service),
) -> dict[str, Any]:
    return await service.create_debt(request)


@router.put("/debts/{debt_id}")
async def update_debt(
    debt_id: str,
    request: DebtUpdateRequest,
    service: DebtService = Depends(get_debt_service),
) -> dict[str, Any]:
    """부채 수정 (initialAmount 변경 불가)"""
    return await service.update_debt(debt_id, request)


@router.post("/debts/{debt_id}/payment")
async def record_debt_payment(
    debt_id: str,
    request: DebtPaymentRequest,
    service: DebtService = Depends(get_debt_service),
) -> dict[str, Any]:
    """부채 상환

    잔여 금액을 넘는 상환, 이미 상환 완료된 부채는 400.
    """
    return await service.record_payment(debt_id, request)
