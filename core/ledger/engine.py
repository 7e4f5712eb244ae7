"""
Ledger Engine

계좌 잔액/이력을 변경하는 유일한 경로.
거래 생성/수정, 계좌 간 이체, 구독 결제, 부채 상환, 목표 적립을 처리한다.

규칙:
- 모든 금액은 0보다 커야 한다 (ValidationError)
- 잔액 변경은 Account.apply()로만 (balance와 history가 함께 변경)
- 하나의 공개 메서드 = 하나의 unit of work (전부 반영 또는 전부 롤백)
- 비즈니스 규칙 검사는 첫 쓰기 이전에 수행

사용 예시:
```python
engine = LedgerEngine(store)

result = await engine.transfer(from_id, to_id, Decimal("300"))
print(result.from_account.balance, result.to_account.balance)
```
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from core.constants import Labels, Money
from core.domain.models import (
    Account,
    Debt,
    DebtPayment,
    Goal,
    GoalTransfer,
    Subscription,
    SubscriptionPayment,
    Transaction,
    new_id,
)
from core.domain.state_machines import SubscriptionStateMachine
from core.errors import InsufficientFundsError, NotFoundError, ValidationError
from core.ledger.billing import next_payment_date
from core.storage.entity_store import EntityStore
from core.types import OperationType, Status, TransactionType
from core.utils.money import parse_money
from core.utils.timezone import now_utc, parse_datetime

logger = logging.getLogger(__name__)

# 거래 수정 시 잔액 재계산이 필요한 필드
_MONEY_FIELDS = ("type", "account_id", "to_account_id", "amount")

_OPPOSITE = {
    OperationType.INCOME: OperationType.EXPENSE,
    OperationType.EXPENSE: OperationType.INCOME,
}


@dataclass
class TransferResult:
    """계좌 간 이체 결과"""

    from_account: Account
    to_account: Account
    transaction: Transaction

    def to_dict(self) -> dict[str, Any]:
        return {
            "fromAccount": self.from_account.to_dict(),
            "toAccount": self.to_account.to_dict(),
            "transaction": self.transaction.to_dict(),
        }


@dataclass
class SubscriptionPaymentResult:
    """구독 결제 결과"""

    subscription: Subscription
    payment: SubscriptionPayment
    transaction: Transaction
    account: Account

    def to_dict(self) -> dict[str, Any]:
        return {
            "subscription": self.subscription.to_dict(),
            "payment": self.payment.to_dict(),
            "transaction": self.transaction.to_dict(),
            "account": self.account.to_dict(),
        }


def positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    """금액 검증 (> 0, 0.01 단위, 한도 이내)

    Raises:
        ValidationError: 숫자가 아니거나 0 이하, 자릿수/한도 위반
    """
    try:
        amount = parse_money(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name}: {e}") from None
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return amount


class LedgerEngine:
    """Ledger Engine

    Args:
        store: EntityStore (unit of work 제공)
    """

    def __init__(self, store: EntityStore):
        self.store = store

    # =========================================================================
    # 거래
    # =========================================================================

    async def record_transaction(
        self,
        account_id: str,
        type: TransactionType | str,
        amount: Any,
        date: datetime | str | None = None,
        category_id: str | None = None,
        description: str | None = None,
        to_account_id: str | None = None,
    ) -> Transaction:
        """수입/지출 거래 기록

        transfer 유형은 transfer()로 위임 (to_account_id 필수).

        Returns:
            생성된 Transaction

        Raises:
            NotFoundError: 계좌/카테고리가 없거나 비활성
            InsufficientFundsError: 지출 금액이 잔액보다 큰 경우
            ValidationError: 금액 ≤ 0, 알 수 없는 유형
        """
        tx_type = self._transaction_type(type)
        value = positive_amount(amount)

        if tx_type == TransactionType.TRANSFER:
            if not to_account_id:
                raise ValidationError("toAccountId is required for transfers")
            result = await self.transfer(
                account_id, to_account_id, value, description=description, date=date
            )
            return result.transaction

        occurred_at = self._date(date)

        async with self.store.unit_of_work() as store:
            account = await self._active_account(store, account_id)
            if category_id:
                await self._active_category(store, category_id)

            transaction = Transaction(
                id=new_id(),
                type=tx_type.value,
                account_id=account.id,
                amount=value,
                date=occurred_at,
                category_id=category_id,
                description=description,
            )
            op = transaction.effects()[0][1]
            if op == OperationType.EXPENSE:
                self._check_funds(account, value)

            account.apply(
                op,
                value,
                occurred_at,
                description=description or tx_type.value,
                transaction_id=transaction.id,
            )
            await store.transactions.add(transaction)
            await store.accounts.save(account)

        logger.info(
            "거래 기록",
            extra={
                "transaction_id": transaction.id,
                "type": transaction.type,
                "amount": str(value),
                "account_id": account.id,
            },
        )
        return transaction

    async def update_transaction(self, transaction_id: str, patch: dict[str, Any]) -> Transaction:
        """거래 수정

        금액/유형/계좌가 바뀌면 기존 효과를 상쇄 이력으로 되돌린 뒤 새 효과를 적용.
        같은 값으로 수정하면 순 잔액 변화는 0.

        Args:
            transaction_id: 거래 ID
            patch: 변경 필드 (type, account_id, to_account_id, amount,
                category_id, description, date)

        Raises:
            NotFoundError: 거래가 없거나 보관됨, 새 계좌/카테고리가 없음,
                금액 효과를 되돌릴 기존 계좌가 보관됨
            InsufficientFundsError: 새 지출/이체 금액이 잔액보다 큰 경우
            ValidationError: 금액 ≤ 0, transfer의 출금/입금 계좌가 같은 경우
        """
        async with self.store.unit_of_work() as store:
            transaction = await store.transactions.get(transaction_id)
            if transaction is None or transaction.status != Status.ACTIVE.value:
                raise NotFoundError(f"Transaction not found: {transaction_id}")

            old = Transaction.from_dict(transaction.to_dict())
            self._merge_patch(transaction, patch)

            if transaction.category_id and transaction.category_id != old.category_id:
                await self._active_category(store, transaction.category_id)
                transaction.category_name = None
                transaction.category_deleted = False

            money_changed = any(
                getattr(transaction, name) != getattr(old, name) for name in _MONEY_FIELDS
            )
            touched: dict[str, Account] = {}

            if money_changed:
                # 영구 삭제된 계좌는 되돌릴 대상이 없음, 보관된 계좌는 변경 불가
                old_effects = []
                for account_id, op in old.effects():
                    account = await self._load(store, touched, account_id)
                    if account is None:
                        continue
                    if account.status != Status.ACTIVE.value:
                        logger.warning(
                            "보관된 계좌의 거래 수정 거부",
                            extra={"transaction_id": old.id, "account_id": account_id},
                        )
                        raise NotFoundError(f"Account not found: {account_id}")
                    old_effects.append((account, op))

                reversed_at = now_utc()
                for account, op in old_effects:
                    account.apply(
                        _OPPOSITE[op],
                        old.amount,
                        reversed_at,
                        description=f"{Labels.REVERSAL_PREFIX}{old.description or old.type}",
                        transaction_id=old.id,
                    )

                new_effects = transaction.effects()
                for account_id, _ in new_effects:
                    account = await self._load(store, touched, account_id)
                    if account is None or account.status != Status.ACTIVE.value:
                        raise NotFoundError(f"Account not found: {account_id}")

                for account_id, op in new_effects:
                    account = touched[account_id]
                    if op == OperationType.EXPENSE:
                        self._check_funds(account, transaction.amount)
                    account.apply(
                        op,
                        transaction.amount,
                        transaction.date,
                        description=transaction.description or transaction.type,
                        linked_account_id=self._counterpart(transaction, account_id),
                        transaction_id=transaction.id,
                    )

                if transaction.account_id != old.account_id:
                    transaction.account_name = None
                    transaction.account_deleted = False
                if transaction.to_account_id != old.to_account_id:
                    transaction.to_account_name = None
                    transaction.to_account_deleted = False

            transaction.updated_at = now_utc()
            await store.transactions.save(transaction)
            await store.accounts.save_many(list(touched.values()))

        logger.info(
            "거래 수정",
            extra={
                "transaction_id": transaction.id,
                "rebalanced": money_changed,
                "accounts": list(touched.keys()),
            },
        )
        return transaction

    # =========================================================================
    # 이체
    # =========================================================================

    async def transfer(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Any,
        description: str | None = None,
        date: datetime | str | None = None,
    ) -> TransferResult:
        """계좌 간 이체

        출금/입금 계좌와 transfer 거래를 하나의 unit of work로 기록.
        양쪽 이력 항목은 서로를 linked_account_id로 참조한다.

        Raises:
            ValidationError: 금액 ≤ 0, 같은 계좌
            NotFoundError: 계좌가 없거나 비활성
            InsufficientFundsError: 출금 계좌 잔액 < 금액
        """
        value = positive_amount(amount)
        if from_account_id == to_account_id:
            raise ValidationError("Cannot transfer to the same account")
        occurred_at = self._date(date)
        text = description or Labels.TRANSFER_DESCRIPTION

        async with self.store.unit_of_work() as store:
            from_account = await self._active_account(store, from_account_id)
            to_account = await self._active_account(store, to_account_id)
            self._check_funds(from_account, value)

            transaction = Transaction(
                id=new_id(),
                type=TransactionType.TRANSFER.value,
                account_id=from_account.id,
                to_account_id=to_account.id,
                amount=value,
                date=occurred_at,
                description=text,
            )
            from_account.apply(
                OperationType.EXPENSE,
                value,
                occurred_at,
                description=text,
                linked_account_id=to_account.id,
                transaction_id=transaction.id,
            )
            to_account.apply(
                OperationType.INCOME,
                value,
                occurred_at,
                description=text,
                linked_account_id=from_account.id,
                transaction_id=transaction.id,
            )
            await store.transactions.add(transaction)
            await store.accounts.save_many([from_account, to_account])

        logger.info(
            "계좌 이체",
            extra={
                "transaction_id": transaction.id,
                "from_account_id": from_account.id,
                "to_account_id": to_account.id,
                "amount": str(value),
            },
        )
        return TransferResult(from_account, to_account, transaction)

    # =========================================================================
    # 구독 결제
    # =========================================================================

    async def record_subscription_payment(
        self,
        subscription_id: str,
        amount: Any = None,
        description: str | None = None,
    ) -> SubscriptionPaymentResult:
        """구독 결제 기록

        연결 계좌에 지출 거래를 만들고 다음 결제일을 현재 다음 결제일 기준
        한 주기 뒤로 이동한다.

        Args:
            subscription_id: 구독 ID
            amount: 결제 금액 (None이면 구독 금액)
            description: 설명

        Raises:
            NotFoundError: 구독이 없거나 보관됨, 연결 계좌가 없음
            ValidationError: 해지된 구독, 금액 ≤ 0
            InsufficientFundsError: 잔액 부족
        """
        async with self.store.unit_of_work() as store:
            subscription = await store.subscriptions.get(subscription_id)
            if subscription is None or subscription.status == Status.ARCHIVED.value:
                raise NotFoundError(f"Subscription not found: {subscription_id}")
            if not SubscriptionStateMachine(subscription.status).can_pay:
                raise ValidationError(
                    f"Cannot record a payment for a {subscription.status} subscription"
                )

            value = positive_amount(subscription.amount if amount is None else amount)
            account = await self._active_account(store, subscription.account_id)
            paid_at = now_utc()
            text = description or f"{Labels.SUBSCRIPTION_PAYMENT_PREFIX}{subscription.name}"

            transaction = await self._post_expense(
                store, account, value, paid_at, text, subscription.category_id
            )
            payment = SubscriptionPayment(
                date=paid_at,
                amount=value,
                description=text,
                transaction_id=transaction.id,
            )
            subscription.payment_history.append(payment)
            subscription.last_payment_date = paid_at
            subscription.next_payment_date = next_payment_date(
                subscription.next_payment_date,
                subscription.frequency,
                subscription.custom_frequency_days,
            )
            subscription.updated_at = paid_at
            await store.subscriptions.save(subscription)

        logger.info(
            "구독 결제",
            extra={
                "subscription_id": subscription.id,
                "amount": str(value),
                "next_payment_date": subscription.next_payment_date.isoformat(),
            },
        )
        return SubscriptionPaymentResult(subscription, payment, transaction, account)

    # =========================================================================
    # 부채 상환
    # =========================================================================

    async def record_debt_payment(
        self,
        debt_id: str,
        amount: Any,
        description: str | None = None,
        account_id: str | None = None,
    ) -> Debt:
        """부채 상환 기록

        current_amount가 0이 되면 paid. account_id가 있으면 해당 계좌에서
        지출 거래로 출금한다.

        Raises:
            NotFoundError: 부채가 없거나 보관됨, 계좌가 없음
            ValidationError: 이미 상환 완료, 금액 ≤ 0, 잔여 금액 초과
            InsufficientFundsError: 출금 계좌 잔액 부족
        """
        value = positive_amount(amount)

        async with self.store.unit_of_work() as store:
            debt = await store.debts.get(debt_id)
            if debt is None or debt.status == Status.ARCHIVED.value:
                raise NotFoundError(f"Debt not found: {debt_id}")
            if debt.status == Status.PAID.value or debt.current_amount <= 0:
                raise ValidationError("Debt is already paid")
            if value > debt.current_amount:
                raise ValidationError(
                    f"Payment exceeds the remaining amount ({debt.current_amount})"
                )

            paid_at = now_utc()
            text = description or Labels.DEBT_PAYMENT_DESCRIPTION
            transaction_id = None
            if account_id:
                account = await self._active_account(store, account_id)
                transaction = await self._post_expense(
                    store, account, value, paid_at, f"{text}: {debt.name}"
                )
                transaction_id = transaction.id

            debt.current_amount = max(debt.current_amount - value, Money.ZERO)
            debt.payment_history.append(
                DebtPayment(
                    date=paid_at,
                    amount=value,
                    description=text,
                    transaction_id=transaction_id,
                )
            )
            if debt.current_amount <= 0:
                debt.status = Status.PAID.value
            debt.updated_at = paid_at
            await store.debts.save(debt)

        logger.info(
            "부채 상환",
            extra={
                "debt_id": debt.id,
                "amount": str(value),
                "current_amount": str(debt.current_amount),
                "status": debt.status,
            },
        )
        return debt

    # =========================================================================
    # 목표 적립
    # =========================================================================

    async def transfer_to_goal(self, goal_id: str, from_account_id: str, amount: Any) -> Goal:
        """목표 적립

        계좌에서 지출 거래로 출금하고 목표 진행률을 올린다.

        Raises:
            NotFoundError: 목표가 없거나 활성 상태가 아님, 계좌가 없음
            ValidationError: 금액 ≤ 0
            InsufficientFundsError: 잔액 부족
        """
        value = positive_amount(amount)

        async with self.store.unit_of_work() as store:
            goal = await store.goals.get(goal_id)
            if goal is None or goal.status != Status.ACTIVE.value:
                raise NotFoundError(f"Goal not found or not active: {goal_id}")

            account = await self._active_account(store, from_account_id)
            transferred_at = now_utc()
            transaction = await self._post_expense(
                store,
                account,
                value,
                transferred_at,
                f"{Labels.GOAL_TRANSFER_PREFIX}{goal.name}",
            )

            goal.progress += value
            goal.transfer_history.append(
                GoalTransfer(
                    amount=value,
                    date=transferred_at,
                    from_account_id=account.id,
                    transaction_id=transaction.id,
                )
            )
            goal.refresh_completion()
            goal.updated_at = transferred_at
            await store.goals.save(goal)

        logger.info(
            "목표 적립",
            extra={
                "goal_id": goal.id,
                "amount": str(value),
                "progress": str(goal.progress),
                "status": goal.status,
            },
        )
        return goal

    # =========================================================================
    # 내부 (unit of work 안에서만 호출, 락을 다시 잡지 않음)
    # =========================================================================

    async def _post_expense(
        self,
        store: EntityStore,
        account: Account,
        amount: Decimal,
        occurred_at: datetime,
        description: str,
        category_id: str | None = None,
    ) -> Transaction:
        """잔액 확인 후 지출 거래 생성 + 계좌 반영"""
        self._check_funds(account, amount)
        transaction = Transaction(
            id=new_id(),
            type=TransactionType.EXPENSE.value,
            account_id=account.id,
            amount=amount,
            date=occurred_at,
            category_id=category_id,
            description=description,
        )
        account.apply(
            OperationType.EXPENSE,
            amount,
            occurred_at,
            description=description,
            transaction_id=transaction.id,
        )
        await store.transactions.add(transaction)
        await store.accounts.save(account)
        return transaction

    @staticmethod
    async def _active_account(store: EntityStore, account_id: str) -> Account:
        account = await store.accounts.get(account_id)
        if account is None or account.status != Status.ACTIVE.value:
            raise NotFoundError(f"Account not found: {account_id}")
        return account

    @staticmethod
    async def _active_category(store: EntityStore, category_id: str) -> None:
        category = await store.categories.get(category_id)
        if category is None or category.status != Status.ACTIVE.value:
            raise NotFoundError(f"Category not found: {category_id}")

    @staticmethod
    async def _load(
        store: EntityStore, touched: dict[str, Account], account_id: str
    ) -> Account | None:
        """한 unit of work 안에서 같은 계좌는 같은 객체로 다룬다"""
        if account_id not in touched:
            account = await store.accounts.get(account_id)
            if account is None:
                return None
            touched[account_id] = account
        return touched[account_id]

    @staticmethod
    def _check_funds(account: Account, amount: Decimal) -> None:
        if account.balance < amount:
            logger.warning(
                "잔액 부족",
                extra={
                    "account_id": account.id,
                    "balance": str(account.balance),
                    "amount": str(amount),
                },
            )
            raise InsufficientFundsError(
                f"Insufficient funds on account {account.name}: "
                f"balance {account.balance}, required {amount}"
            )

    @staticmethod
    def _counterpart(transaction: Transaction, account_id: str) -> str | None:
        if transaction.type != TransactionType.TRANSFER.value:
            return None
        if account_id == transaction.account_id:
            return transaction.to_account_id
        return transaction.account_id

    @staticmethod
    def _transaction_type(value: TransactionType | str) -> TransactionType:
        try:
            return TransactionType(value)
        except ValueError:
            raise ValidationError(f"Unknown transaction type: {value}") from None

    @staticmethod
    def _date(value: datetime | str | None) -> datetime:
        try:
            return parse_datetime(value) or now_utc()
        except ValueError:
            raise ValidationError(f"Invalid date: {value}") from None

    def _merge_patch(self, transaction: Transaction, patch: dict[str, Any]) -> None:
        """patch 적용 + 검증 (쓰기 전)"""
        if "type" in patch and patch["type"] is not None:
            transaction.type = self._transaction_type(patch["type"]).value
        if patch.get("account_id"):
            transaction.account_id = patch["account_id"]
        if "to_account_id" in patch:
            transaction.to_account_id = patch["to_account_id"] or None
        if "amount" in patch and patch["amount"] is not None:
            transaction.amount = positive_amount(patch["amount"])
        if "category_id" in patch:
            transaction.category_id = patch["category_id"] or None
        if "description" in patch:
            transaction.description = patch["description"]
        if "date" in patch and patch["date"] is not None:
            transaction.date = self._date(patch["date"])

        if transaction.type == TransactionType.TRANSFER.value:
            if not transaction.to_account_id:
                raise ValidationError("toAccountId is required for transfers")
            if transaction.to_account_id == transaction.account_id:
                raise ValidationError("Cannot transfer to the same account")
        else:
            transaction.to_account_id = None
