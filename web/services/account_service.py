"""
계좌 서비스

계좌 CRUD. 잔액 변경은 LedgerEngine이 담당하며 여기서는 초기 잔액만 설정한다.
"""

import logging
from typing import Any

from core.constants import Defaults
from core.domain.models import Account, new_id
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status
from core.utils.timezone import now_utc
from web.models.requests import AccountCreateRequest, AccountUpdateRequest
from web.services.common import require_active, status_filter

logger = logging.getLogger(__name__)


class AccountService:
    """계좌 서비스

    Args:
        store: EntityStore
        default_currency: 통화 미지정 시 기본값
    """

    def __init__(self, store: EntityStore, default_currency: str = Defaults.CURRENCY):
        self.store = store
        self.default_currency = default_currency

    async def list_accounts(self, status: str | None = None) -> list[dict[str, Any]]:
        """계좌 목록 (기본: active)"""
        statuses = status_filter(EntityType.ACCOUNTS, status, [Status.ACTIVE.value])
        async with self.store.reading() as store:
            accounts = await store.accounts.list(statuses)
        return [account.to_dict() for account in accounts]

    async def get_account(self, account_id: str) -> dict[str, Any]:
        """계좌 조회 (보관 포함)"""
        async with self.store.reading() as store:
            account = await store.accounts.require(account_id)
        return account.to_dict()

    async def get_history(self, account_id: str) -> dict[str, Any]:
        """계좌 이력 (최신순)"""
        async with self.store.reading() as store:
            account = await store.accounts.require(account_id)
        history = sorted(account.history, key=lambda entry: entry.date, reverse=True)
        return {
            "accountId": account.id,
            "balance": account.to_dict()["balance"],
            "history": [entry.to_dict() for entry in history],
        }

    async def create_account(self, request: AccountCreateRequest) -> dict[str, Any]:
        """계좌 생성

        요청의 balance는 초기 잔액 (이력 없음).
        """
        account = Account(
            id=new_id(),
            name=request.name,
            type=request.type.value,
            balance=request.balance,
            initial_balance=request.balance,
            currency=request.currency or self.default_currency,
            description=request.description,
        )
        async with self.store.unit_of_work() as store:
            await store.accounts.add(account)

        logger.info(
            "계좌 생성",
            extra={"account_id": account.id, "initial_balance": str(account.balance)},
        )
        return account.to_dict()

    async def update_account(self, account_id: str, request: AccountUpdateRequest) -> dict[str, Any]:
        """계좌 수정 (이름, 종류, 통화, 설명)"""
        async with self.store.unit_of_work() as store:
            account = await require_active(store, EntityType.ACCOUNTS, account_id)
            account.name = request.name
            if request.type is not None:
                account.type = request.type.value
            if request.currency:
                account.currency = request.currency
            if "description" in request.model_fields_set:
                account.description = request.description
            account.updated_at = now_utc()
            await store.accounts.save(account)

        return account.to_dict()
