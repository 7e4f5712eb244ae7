"""
Reference Resolver

계좌/카테고리가 영구 삭제될 때 이를 참조하는 레코드에 표시 이름을 고정한다.
ID는 그대로 두고 *_name / *_deleted 필드만 채운다.

조회 시에는 resolve_label()로 "살아있는 이름 → 고정 라벨 → 기본값" 순으로
표시 이름을 결정하므로 삭제된 ID를 다시 조회할 필요가 없다.
"""

import logging
from typing import Any

from core.constants import Labels
from core.domain.models import Account, Category, Transaction
from core.storage.entity_store import EntityStore
from core.types import EntityType

logger = logging.getLogger(__name__)


def resolve_label(
    live_name: str | None,
    frozen_label: str | None,
    fallback: str,
) -> str:
    """표시 이름 결정

    Args:
        live_name: 참조 대상이 존재하면 그 이름
        frozen_label: 영구 삭제 시 고정된 라벨
        fallback: 둘 다 없을 때 기본값

    Returns:
        표시 이름
    """
    if live_name is not None:
        return live_name
    if frozen_label:
        return frozen_label
    return fallback


def removed_label(name: str) -> str:
    """영구 삭제된 대상의 고정 라벨"""
    return f"{name}{Labels.REMOVED_SUFFIX}"


class ReferenceResolver:
    """참조 라벨 고정/해석

    freeze()는 Archive Manager의 unit of work 안에서 호출된다 (락 재획득 없음).
    """

    async def freeze(self, store: EntityStore, entity_type: EntityType, entity: Any) -> int:
        """영구 삭제 직전 참조 레코드에 라벨 고정

        Args:
            store: EntityStore (unit of work 진행 중)
            entity_type: 삭제되는 엔티티 종류
            entity: 삭제되는 엔티티

        Returns:
            갱신된 참조 레코드 수
        """
        if entity_type == EntityType.ACCOUNTS:
            return await self._freeze_account(store, entity)
        if entity_type == EntityType.CATEGORIES:
            return await self._freeze_category(store, entity)
        return 0

    async def _freeze_account(self, store: EntityStore, account: Account) -> int:
        label = removed_label(account.name)

        changed_transactions = []
        for transaction in await store.transactions.list():
            changed = False
            if transaction.account_id == account.id:
                transaction.account_name = label
                transaction.account_deleted = True
                changed = True
            if transaction.to_account_id == account.id:
                transaction.to_account_name = label
                transaction.to_account_deleted = True
                changed = True
            if changed:
                changed_transactions.append(transaction)

        changed_goals = []
        for goal in await store.goals.list():
            entries = [t for t in goal.transfer_history if t.from_account_id == account.id]
            for entry in entries:
                entry.from_account_name = label
                entry.from_account_deleted = True
            if entries:
                changed_goals.append(goal)

        await store.transactions.save_many(changed_transactions)
        await store.goals.save_many(changed_goals)

        logger.info(
            "계좌 참조 라벨 고정",
            extra={
                "account_id": account.id,
                "transactions": len(changed_transactions),
                "goals": len(changed_goals),
            },
        )
        return len(changed_transactions) + len(changed_goals)

    async def _freeze_category(self, store: EntityStore, category: Category) -> int:
        label = removed_label(category.name)

        changed = []
        for transaction in await store.transactions.list():
            if transaction.category_id == category.id:
                transaction.category_name = label
                transaction.category_deleted = True
                changed.append(transaction)

        await store.transactions.save_many(changed)

        logger.info(
            "카테고리 참조 라벨 고정",
            extra={"category_id": category.id, "transactions": len(changed)},
        )
        return len(changed)

    async def label_transactions(
        self, store: EntityStore, transactions: list[Transaction]
    ) -> list[dict[str, Any]]:
        """거래 목록을 표시 이름이 채워진 dict로 변환

        Args:
            store: EntityStore (reading() 진행 중)
            transactions: 거래 목록

        Returns:
            accountName / toAccountName / categoryName이 채워진 dict 목록
        """
        accounts = {a.id: a.name for a in await store.accounts.list()}
        categories = {c.id: c.name for c in await store.categories.list()}

        result = []
        for transaction in transactions:
            data = transaction.to_dict()
            data["accountName"] = resolve_label(
                accounts.get(transaction.account_id),
                transaction.account_name,
                Labels.UNKNOWN_ACCOUNT,
            )
            if transaction.to_account_id:
                data["toAccountName"] = resolve_label(
                    accounts.get(transaction.to_account_id),
                    transaction.to_account_name,
                    Labels.UNKNOWN_ACCOUNT,
                )
            if transaction.category_id:
                data["categoryName"] = resolve_label(
                    categories.get(transaction.category_id),
                    transaction.category_name,
                    Labels.UNKNOWN_CATEGORY,
                )
            result.append(data)
        return result
