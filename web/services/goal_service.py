"""
목표 서비스

목표 CRUD. 적립은 LedgerEngine.transfer_to_goal()
"""

import logging
from typing import Any

from core.domain.models import Goal, new_id
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import EntityType
from core.utils.timezone import now_utc
from web.models.requests import GoalCreateRequest, GoalTransferRequest, GoalUpdateRequest
from web.services.common import optional_datetime, require_active, status_filter

logger = logging.getLogger(__name__)


class GoalService:
    """목표 서비스

    Args:
        store: EntityStore
        ledger: LedgerEngine
    """

    def __init__(self, store: EntityStore, ledger: LedgerEngine):
        self.store = store
        self.ledger = ledger

    async def list_goals(self, status: str | None = None) -> list[dict[str, Any]]:
        """목표 목록 (기본: active, completed)"""
        statuses = status_filter(EntityType.GOALS, status)
        async with self.store.reading() as store:
            goals = await store.goals.list(statuses)
        return [goal.to_dict() for goal in goals]

    async def get_goal(self, goal_id: str) -> dict[str, Any]:
        async with self.store.reading() as store:
            goal = await store.goals.require(goal_id)
        return goal.to_dict()

    async def create_goal(self, request: GoalCreateRequest) -> dict[str, Any]:
        goal = Goal(
            id=new_id(),
            name=request.name,
            target_amount=request.target_amount,
            description=request.description,
            account_id=request.account_id,
            deadline=optional_datetime(request.deadline, "deadline"),
        )
        async with self.store.unit_of_work() as store:
            if goal.account_id:
                await require_active(store, EntityType.ACCOUNTS, goal.account_id)
            await store.goals.add(goal)

        logger.info(
            "목표 생성",
            extra={"goal_id": goal.id, "target_amount": str(goal.target_amount)},
        )
        return goal.to_dict()

    async def update_goal(self, goal_id: str, request: GoalUpdateRequest) -> dict[str, Any]:
        """목표 수정

        목표 금액이 바뀌면 active/completed 상태를 다시 판정한다.
        """
        fields = request.model_fields_set

        async with self.store.unit_of_work() as store:
            goal = await require_active(store, EntityType.GOALS, goal_id)
            if request.name is not None:
                goal.name = request.name
            if request.target_amount is not None:
                goal.target_amount = request.target_amount
            if "description" in fields:
                goal.description = request.description
            if "account_id" in fields:
                if request.account_id:
                    await require_active(store, EntityType.ACCOUNTS, request.account_id)
                goal.account_id = request.account_id
            if "deadline" in fields:
                goal.deadline = optional_datetime(request.deadline, "deadline")
            goal.refresh_completion()
            goal.updated_at = now_utc()
            await store.goals.save(goal)

        return goal.to_dict()

    async def transfer(self, goal_id: str, request: GoalTransferRequest) -> dict[str, Any]:
        """목표 적립"""
        goal = await self.ledger.transfer_to_goal(goal_id, request.from_account_id, request.amount)
        return goal.to_dict()
