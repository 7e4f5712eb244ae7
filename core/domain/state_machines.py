"""
State Machines

엔티티 생명주기(active ⇄ archived → deleted) 상태 전이 관리.
엔티티 종류마다 보관되지 않은 상태 집합이 다르므로 종류별 머신을 둔다.
"""

import logging
from enum import Enum

from core.types import EntityType, Status

logger = logging.getLogger(__name__)

# 영구 삭제 전이 대상 (저장되지 않는 의사 상태)
DELETED = "deleted"


class StateMachineError(Exception):
    """상태 전이 오류"""
    pass


class StateMachine:
    """상태 머신 기본 클래스

    Args:
        initial_state: 초기 상태
        transitions: 허용된 전이 정의 {from_state: [to_states]}
        name: 머신 이름 (로깅용)
    """

    def __init__(
        self,
        initial_state: str | Enum,
        transitions: dict[str, list[str]],
        name: str = "StateMachine",
    ):
        self._state = initial_state.value if isinstance(initial_state, Enum) else initial_state
        self._transitions = transitions
        self._name = name

    @property
    def state(self) -> str:
        """현재 상태"""
        return self._state

    def can_transition(self, to_state: str | Enum) -> bool:
        """전이 가능 여부 확인

        Args:
            to_state: 목표 상태

        Returns:
            전이 가능 여부
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state
        allowed = self._transitions.get(self._state, [])
        return target in allowed

    def transition(self, to_state: str | Enum) -> str:
        """상태 전이

        Args:
            to_state: 목표 상태

        Returns:
            새 상태

        Raises:
            StateMachineError: 허용되지 않은 전이
        """
        target = to_state.value if isinstance(to_state, Enum) else to_state

        if not self.can_transition(target):
            allowed = self._transitions.get(self._state, [])
            raise StateMachineError(
                f"{self._name}: Cannot transition from {self._state} to {target}. "
                f"Allowed: {allowed}"
            )

        old_state = self._state
        self._state = target

        logger.debug(
            f"{self._name}: {old_state} → {target}",
        )

        return target


class LifecycleStateMachine(StateMachine):
    """엔티티 생명주기 상태 머신

    전이 규칙 (모든 종류 공통):
    - 보관되지 않은 상태 → ARCHIVED: 보관
    - ARCHIVED → ACTIVE: 복원 (보관 전 상태는 기억하지 않음)
    - ARCHIVED → DELETED: 영구 삭제
    """

    TRANSITIONS: dict[str, list[str]] = {}

    def __init__(self, initial_state: str | Status = Status.ACTIVE):
        super().__init__(
            initial_state=initial_state,
            transitions=self.TRANSITIONS,
            name=type(self).__name__,
        )

    @property
    def is_archived(self) -> bool:
        """보관 상태 여부"""
        return self._state == Status.ARCHIVED.value

    def archive(self) -> str:
        return self.transition(Status.ARCHIVED)

    def restore(self) -> str:
        return self.transition(Status.ACTIVE)

    def delete(self) -> str:
        return self.transition(DELETED)


class SimpleLifecycleMachine(LifecycleStateMachine):
    """Account / Category / Transaction 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["archived"],
        "archived": ["active", DELETED],
    }


class GoalStateMachine(LifecycleStateMachine):
    """목표 상태 머신

    active ⇄ completed 는 진행률 변화로 발생.
    """

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["completed", "archived"],
        "completed": ["active", "archived"],
        "archived": ["active", DELETED],
    }


class DebtStateMachine(LifecycleStateMachine):
    """부채 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["paid", "defaulted", "archived"],
        "paid": ["active", "archived"],
        "defaulted": ["active", "paid", "archived"],
        "archived": ["active", DELETED],
    }


class SubscriptionStateMachine(LifecycleStateMachine):
    """구독 상태 머신"""

    TRANSITIONS: dict[str, list[str]] = {
        "active": ["paused", "cancelled", "archived"],
        "paused": ["active", "cancelled", "archived"],
        "cancelled": ["active", "archived"],
        "archived": ["active", DELETED],
    }

    @property
    def can_pay(self) -> bool:
        """결제 가능 여부"""
        return self._state in ("active", "paused")


_MACHINES: dict[EntityType, type[LifecycleStateMachine]] = {
    EntityType.ACCOUNTS: SimpleLifecycleMachine,
    EntityType.CATEGORIES: SimpleLifecycleMachine,
    EntityType.TRANSACTIONS: SimpleLifecycleMachine,
    EntityType.GOALS: GoalStateMachine,
    EntityType.DEBTS: DebtStateMachine,
    EntityType.SUBSCRIPTIONS: SubscriptionStateMachine,
}


def lifecycle_machine(entity_type: EntityType, status: str) -> LifecycleStateMachine:
    """엔티티 종류와 현재 상태로 상태 머신 생성

    Args:
        entity_type: 엔티티 종류
        status: 현재 저장된 상태

    Returns:
        해당 종류의 LifecycleStateMachine
    """
    return _MACHINES[entity_type](status)


def statuses_for(entity_type: EntityType) -> list[str]:
    """엔티티 종류가 가질 수 있는 상태 목록"""
    return list(_MACHINES[entity_type].TRANSITIONS.keys())
