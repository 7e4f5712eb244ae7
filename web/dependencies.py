"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
앱 lifespan에서 set_runtime()으로 EntityStore / LedgerEngine / ArchiveManager를
한 번 설정하고, 라우터는 get_* 함수로 받아 쓴다.
"""

from dataclasses import dataclass

from fastapi import Depends

from core.archive.manager import ArchiveManager
from core.archive.resolver import ReferenceResolver
from core.config.loader import Settings, get_settings
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from web.services import (
    AccountService,
    CategoryService,
    DebtService,
    GoalService,
    SubscriptionService,
    TransactionService,
)


@dataclass
class Runtime:
    """앱 수명 동안 공유되는 컴포넌트"""

    store: EntityStore
    ledger: LedgerEngine
    archive: ArchiveManager
    resolver: ReferenceResolver


# lifespan에서 설정되는 전역 인스턴스
_runtime: Runtime | None = None


def set_runtime(runtime: Runtime | None) -> None:
    """Runtime 설정 (lifespan 시작/종료 시 호출)

    Args:
        runtime: Runtime 인스턴스 (None이면 해제)
    """
    global _runtime
    _runtime = runtime


def get_runtime() -> Runtime:
    """Runtime 반환

    Raises:
        RuntimeError: lifespan 초기화 전 호출
    """
    if _runtime is None:
        raise RuntimeError("Application runtime is not initialized")
    return _runtime


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


def get_store() -> EntityStore:
    return get_runtime().store


def get_ledger() -> LedgerEngine:
    return get_runtime().ledger


def get_archive_manager() -> ArchiveManager:
    return get_runtime().archive


# =========================================================================
# 서비스
# =========================================================================


def get_account_service(
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(store, settings.default_currency)


def get_category_service(store: EntityStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)


def get_transaction_service(
    store: EntityStore = Depends(get_store),
    ledger: LedgerEngine = Depends(get_ledger),
) -> TransactionService:
    return TransactionService(store, ledger, get_runtime().resolver)


def get_goal_service(
    store: EntityStore = Depends(get_store),
    ledger: LedgerEngine = Depends(get_ledger),
) -> GoalService:
    return GoalService(store, ledger)


def get_debt_service(
    store: EntityStore = Depends(get_store),
    ledger: LedgerEngine = Depends(get_ledger),
) -> DebtService:
    return DebtService(store, ledger)


def get_subscription_service(
    store: EntityStore = Depends(get_store),
    ledger: LedgerEngine = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
) -> SubscriptionService:
    return SubscriptionService(store, ledger, settings.default_currency)
