"""
데모 데이터 생성

settings.yaml의 storage.seed_demo_data: true 일 때 앱 시작 시 한 번 실행.
잔액에 영향을 주는 데이터는 모두 LedgerEngine을 거쳐 만들어지므로
balance == initial_balance + Σ history 불변식이 유지된다.
"""

import logging
from datetime import timedelta
from decimal import Decimal

from core.archive.manager import ArchiveManager
from core.constants import Defaults
from core.domain.models import Account, Category, Debt, Goal, Subscription, new_id
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import AccountType, CategoryType, DebtType, EntityType, Frequency
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


async def is_empty(store: EntityStore) -> bool:
    """계좌가 하나도 없으면 True"""
    async with store.reading() as s:
        return not await s.accounts.list()


async def seed_demo_data(
    store: EntityStore,
    ledger: LedgerEngine,
    archive: ArchiveManager,
    currency: str = Defaults.CURRENCY,
) -> dict[str, int]:
    """데모 데이터 생성

    이미 계좌가 있으면 아무것도 하지 않는다.

    Returns:
        종류별 생성 개수
    """
    if not await is_empty(store):
        logger.info("데모 데이터 생략 (기존 데이터 있음)")
        return {}

    now = now_utc()

    main = _account("Main account", AccountType.DEBIT, "158500", currency)
    savings = _account("Savings", AccountType.SAVINGS, "256000", currency)
    card = _account("Credit card", AccountType.CREDIT, "-15800", currency)
    legacy = _account("Old bank account", AccountType.DEBIT, "0", currency)

    salary = Category(id=new_id(), name="Salary", type=CategoryType.INCOME.value, icon="work")
    groceries = Category(id=new_id(), name="Groceries", type=CategoryType.EXPENSE.value, icon="shopping_cart")
    transport = Category(id=new_id(), name="Transport", type=CategoryType.EXPENSE.value, icon="directions_car")
    streaming = Category(id=new_id(), name="Streaming", type=CategoryType.EXPENSE.value, icon="movie")

    vacation = Goal(id=new_id(), name="Vacation", target_amount=Decimal("120000"),
                    deadline=now + timedelta(days=180))
    laptop = Goal(id=new_id(), name="New laptop", target_amount=Decimal("180000"))

    car_loan = Debt(
        id=new_id(),
        name="Car loan",
        type=DebtType.LOAN.value,
        initial_amount=Decimal("1200000"),
        current_amount=Decimal("1200000"),
        interest_rate=Decimal("12.5"),
        lender="City Bank",
        start_date=now - timedelta(days=365),
        next_payment_date=now + timedelta(days=10),
    )

    netflix = Subscription(
        id=new_id(),
        name="Netflix",
        amount=Decimal("799"),
        frequency=Frequency.MONTHLY.value,
        account_id=main.id,
        start_date=now - timedelta(days=25),
        next_payment_date=now - timedelta(days=25),
        currency=currency,
        category_id=streaming.id,
    )
    spotify = Subscription(
        id=new_id(),
        name="Spotify Premium",
        amount=Decimal("299"),
        frequency=Frequency.MONTHLY.value,
        account_id=card.id,
        start_date=now + timedelta(days=8),
        next_payment_date=now + timedelta(days=8),
        currency=currency,
        category_id=streaming.id,
    )

    async with store.unit_of_work() as s:
        for account in (main, savings, card, legacy):
            await s.accounts.add(account)
        for category in (salary, groceries, transport, streaming):
            await s.categories.add(category)
        for goal in (vacation, laptop):
            await s.goals.add(goal)
        await s.debts.add(car_loan)
        for subscription in (netflix, spotify):
            await s.subscriptions.add(subscription)

    await ledger.record_transaction(main.id, "income", "120000", category_id=salary.id,
                                    description="Monthly salary", date=now - timedelta(days=20))
    await ledger.record_transaction(main.id, "expense", "8450", category_id=groceries.id,
                                    description="Supermarket", date=now - timedelta(days=12))
    await ledger.record_transaction(main.id, "expense", "1200", category_id=transport.id,
                                    description="Metro card", date=now - timedelta(days=5))
    await ledger.transfer(main.id, savings.id, "30000", description="Monthly savings")
    await ledger.transfer_to_goal(vacation.id, savings.id, "25000")
    await ledger.record_debt_payment(car_loan.id, "35000", account_id=main.id)
    await ledger.record_subscription_payment(netflix.id)
    await archive.archive(EntityType.ACCOUNTS, legacy.id)

    counts = {
        "accounts": 4,
        "categories": 4,
        "goals": 2,
        "debts": 1,
        "subscriptions": 2,
    }
    logger.info("데모 데이터 생성 완료", extra=counts)
    return counts


def _account(name: str, account_type: AccountType, balance: str, currency: str) -> Account:
    amount = Decimal(balance)
    return Account(
        id=new_id(),
        name=name,
        type=account_type.value,
        balance=amount,
        initial_balance=amount,
        currency=currency,
    )
