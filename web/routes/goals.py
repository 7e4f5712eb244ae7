"""
목표 라우트
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from web.dependencies import get_goal_service
from web.models.requests import GoalCreateRequest, GoalTransferRequest, GoalUpdateRequest
from web.services.goal_service import GoalService

router = APIRouter(prefix="/api", tags=["Goals"])


@router.get("/goals")
async def list_goals(
    status: str | None = Query(default=None, description="상태 (쉼표 구분, 기본: active,completed)"),
    service: GoalService = Depends(get_goal_service),
) -> list[dict[str, Any]]:
    """목표 목록"""
    return await service.list_goals(status)


@router.get("/goals/{goal_id}")
async def get_goal(
    goal_id: str,
    service: GoalService = Depends(get_goal_service),
) -> dict[str, Any]:
    return await service.get_goal(goal_id)


@router.post("/goals", status_code=201)
async def create_goal(
    request: GoalCreateRequest,
    service: GoalService = Depends(get_goal_service),
) -> dict[str, Any]:
    return await service.create_goal(request)


@router.put("/goals/{goal_id}")
async def update_goal(
    goal_id: str,
    request: GoalUpdateRequest,
    service: GoalService = Depends(get_goal_service),
) -> dict[str, Any]:
    """목표 수정 (목표 금액 변경 시 완료 여부 재판정)"""
    return await service.update_goal(goal_id, request)


@router.post("/goals/{goal_id}/transfer")
async def transfer_to_goal(
    goal_id: str,
    request: GoalTransferRequest,
    service: GoalService = Depends(get_goal_service),
) -> dict[str, Any]:
    """목표 적립

    계좌에서 지출 거래로 출금하고 진행률을 올린다.
    """
    return await service.transfer(goal_id, request)
