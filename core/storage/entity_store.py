"""
Entity Store

6개 컬렉션 저장소를 묶고 unit of work(락 + DB 트랜잭션)를 제공한다.
Ledger Engine / Archive Manager는 모듈 전역이 아닌 주입된 EntityStore만 사용.

사용 예시:
```python
store = EntityStore(db)

async with store.unit_of_work():
    account = await store.accounts.require(account_id)
    account.apply(OperationType.INCOME, Decimal("100"), now_utc())
    await store.accounts.save(account)
    # 성공 시 커밋, 예외 시 롤백

async with store.reading():
    accounts = await store.accounts.list(["active"])
```
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.domain.models import Account, Category, Debt, Goal, Subscription, Transaction
from core.storage.repository import EntityRepository
from core.types import EntityType

logger = logging.getLogger(__name__)


class EntityStore:
    """엔티티 저장소 묶음

    락은 재진입 불가. unit_of_work() 안에서 다시 unit_of_work()/reading()을
    호출하면 교착된다.

    Args:
        db: 연결된 SQLiteAdapter (스키마 초기화 완료)
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self._lock = asyncio.Lock()

        self.accounts: EntityRepository[Account] = EntityRepository(
            db, EntityType.ACCOUNTS, Account
        )
        self.transactions: EntityRepository[Transaction] = EntityRepository(
            db, EntityType.TRANSACTIONS, Transaction
        )
        self.categories: EntityRepository[Category] = EntityRepository(
            db, EntityType.CATEGORIES, Category
        )
        self.goals: EntityRepository[Goal] = EntityRepository(
            db, EntityType.GOALS, Goal
        )
        self.debts: EntityRepository[Debt] = EntityRepository(
            db, EntityType.DEBTS, Debt
        )
        self.subscriptions: EntityRepository[Subscription] = EntityRepository(
            db, EntityType.SUBSCRIPTIONS, Subscription
        )

        self._repositories: dict[EntityType, EntityRepository] = {
            EntityType.ACCOUNTS: self.accounts,
            EntityType.TRANSACTIONS: self.transactions,
            EntityType.CATEGORIES: self.categories,
            EntityType.GOALS: self.goals,
            EntityType.DEBTS: self.debts,
            EntityType.SUBSCRIPTIONS: self.subscriptions,
        }

    def repository(self, entity_type: EntityType) -> EntityRepository:
        """엔티티 종류별 저장소"""
        return self._repositories[entity_type]

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator["EntityStore"]:
        """쓰기 작업 단위

        저장소 전역 락을 잡고 DB 트랜잭션을 연다.
        성공 시 커밋, 예외 시 롤백 후 예외 전파.
        """
        async with self._lock:
            async with self.db.transaction():
                yield self

    @asynccontextmanager
    async def reading(self) -> AsyncIterator["EntityStore"]:
        """읽기 작업 단위 (진행 중인 쓰기의 중간 상태를 보지 않음)"""
        async with self._lock:
            yield self
