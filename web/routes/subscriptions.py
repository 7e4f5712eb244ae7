"""
구독 라우트
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from core.constants import Defaults
from web.dependencies import get_subscription_service
from web.models.requests import (
    SubscriptionCreateRequest,
    SubscriptionPaymentRequest,
    SubscriptionStatusRequest,
    SubscriptionUpdateRequest,
)
from web.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/api", tags=["Subscriptions"])


@router.get("/subscriptions")
async def list_subscriptions(
    status: str | None = Query(default=None, description="상태 (쉼표 구분, 예: active,paused)"),
    frequency: str | None = Query(default=None, description="결제 주기 (쉼표 구분)"),
    page: int = Query(default=Defaults.PAGE, ge=1, description="페이지"),
    limit: int = Query(default=Defaults.PAGE_LIMIT, ge=1, le=Defaults.MAX_PAGE_LIMIT, description="페이지 크기"),
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    """구독 목록 (다음 결제일 순)

    Returns:
        {subscriptions, pagination}
    """
    return await service.list_subscriptions(status, frequency, page, limit)


@router.get("/subscriptions/upcoming")
async def upcoming_subscription_payments(
    days: int = Query(
        default=Defaults.UPCOMING_DAYS, ge=0, le=Defaults.MAX_UPCOMING_DAYS, description="조회 기간 (일)"
    ),
    service: SubscriptionService = Depends(get_subscription_service),
) -> list[dict[str, Any]]:
    """다가오는 결제 (활성 구독, 다음 결제일 순)"""
    return await service.upcoming_payments(days)


@router.get("/subscriptions/stats")
async def subscription_stats(
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    """구독 통계 (월/연 환산 금액, 상태별 개수, 7일 내 결제)"""
    return await service.stats()


@router.get("/subscriptions/{subscription_id}")
async def get_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    return await service.get_subscription(subscription_id)


@router.post("/subscriptions", status_code=201)
async def create_subscription(
    request: SubscriptionCreateRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    return await service.create_subscription(request)


@router.put("/subscriptions/{subscription_id}")
async def update_subscription(
    subscription_id: str,
    request: SubscriptionUpdateRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    return await service.update_subscription(subscription_id, request)


@router.patch("/subscriptions/{subscription_id}/status")
async def change_subscription_status(
    subscription_id: str,
    request: SubscriptionStatusRequest,
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    """구독 상태 변경 (active / paused / cancelled)"""
    return await service.change_status(subscription_id, request.status)


@router.post("/subscriptions/{subscription_id}/payment")
async def record_subscription_payment(
    subscription_id: str,
    request: SubscriptionPaymentRequest | None = None,
    service: SubscriptionService = Depends(get_subscription_service),
) -> dict[str, Any]:
    """구독 결제

    연결 계좌에서 출금하고 다음 결제일을 한 주기 뒤로 이동.

    Returns:
        {subscription, payment, transaction, account}
    """
    return await service.record_payment(subscription_id, request or SubscriptionPaymentRequest())
