"""
테스트 헬퍼

엔진을 거치지 않고 저장소에 직접 계좌/카테고리를 넣는 함수
"""

from decimal import Decimal

from core.domain.models import Account, Category, new_id
from core.storage.entity_store import EntityStore
from core.types import AccountType, CategoryType


async def add_account(
    store: EntityStore,
    name: str = "Card",
    balance: str = "0",
    account_type: AccountType = AccountType.DEBIT,
) -> Account:
    """테스트용 계좌 생성 (초기 잔액 = balance)"""
    amount = Decimal(balance)
    account = Account(
        id=new_id(),
        name=name,
        type=account_type.value,
        balance=amount,
        initial_balance=amount,
    )
    async with store.unit_of_work() as s:
        await s.accounts.add(account)
    return account


async def add_category(
    store: EntityStore,
    name: str = "Food",
    category_type: CategoryType = CategoryType.EXPENSE,
) -> Category:
    """테스트용 카테고리 생성"""
    category = Category(id=new_id(), name=name, type=category_type.value)
    async with store.unit_of_work() as s:
        await s.categories.add(category)
    return category
