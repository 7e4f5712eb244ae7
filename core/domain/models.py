"""
도메인 모델

Account, Transaction, Category, Goal, Debt, Subscription 6개 엔티티 정의.
저장소(JSON 문서)와 API 응답 모두 to_dict()의 camelCase 표현을 사용한다.

금액: Decimal (JSON 문자열)
시간: UTC datetime (JSON ISO 8601)
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from core.constants import Defaults, Money
from core.types import OperationType, PaymentStatus, Status, TransactionType
from core.utils.money import parse_amount, to_money_str
from core.utils.timezone import now_utc, parse_datetime, to_iso


def new_id() -> str:
    """새 엔티티 ID (uuid4 hex)"""
    return uuid4().hex


def _money(data: dict[str, Any], key: str, default: Decimal | None = None) -> Decimal | None:
    value = data.get(key)
    if value is None:
        return default
    return parse_amount(value)


def _time(data: dict[str, Any], key: str) -> datetime | None:
    return parse_datetime(data.get(key))


# =========================================================================
# Account
# =========================================================================


@dataclass
class HistoryEntry:
    """계좌 이력 항목

    operation_type 방향으로 amount만큼 잔액이 변했음을 기록.
    """

    operation_type: str
    amount: Decimal
    date: datetime
    description: str = ""
    linked_account_id: str | None = None
    transaction_id: str | None = None

    @property
    def signed_amount(self) -> Decimal:
        """잔액 기준 부호 있는 금액"""
        if self.operation_type == OperationType.INCOME.value:
            return self.amount
        return -self.amount

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "operationType": self.operation_type,
            "amount": to_money_str(self.amount),
            "date": to_iso(self.date),
            "description": self.description,
            "linkedAccountId": self.linked_account_id,
            "transactionId": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """딕셔너리에서 생성"""
        return cls(
            operation_type=data["operationType"],
            amount=parse_amount(data["amount"]),
            date=parse_datetime(data["date"]),
            description=data.get("description") or "",
            linked_account_id=data.get("linkedAccountId"),
            transaction_id=data.get("transactionId"),
        )


@dataclass
class Account:
    """계좌

    불변식: balance == initial_balance + Σ history.signed_amount
    balance는 apply()로만 변경된다.
    """

    id: str
    name: str
    type: str
    balance: Decimal
    initial_balance: Decimal
    currency: str = Defaults.CURRENCY
    description: str | None = None
    status: str = Status.ACTIVE.value
    history: list[HistoryEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def history_balance(self) -> Decimal:
        """이력에서 재계산한 잔액"""
        return self.initial_balance + sum(
            (entry.signed_amount for entry in self.history), Money.ZERO
        )

    def apply(
        self,
        operation_type: OperationType | str,
        amount: Decimal,
        date: datetime,
        description: str = "",
        linked_account_id: str | None = None,
        transaction_id: str | None = None,
    ) -> HistoryEntry:
        """잔액 변경 + 이력 추가 (항상 함께)

        Args:
            operation_type: income(+) / expense(-)
            amount: 양수 금액
            date: 거래 일시
            description: 설명
            linked_account_id: 이체 상대 계좌
            transaction_id: 연결된 거래 ID

        Returns:
            추가된 HistoryEntry
        """
        op = operation_type.value if isinstance(operation_type, OperationType) else operation_type
        entry = HistoryEntry(
            operation_type=op,
            amount=amount,
            date=date,
            description=description,
            linked_account_id=linked_account_id,
            transaction_id=transaction_id,
        )
        self.balance += entry.signed_amount
        self.history.append(entry)
        self.updated_at = now_utc()
        return entry

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "balance": to_money_str(self.balance),
            "initialBalance": to_money_str(self.initial_balance),
            "currency": self.currency,
            "description": self.description,
            "status": self.status,
            "history": [entry.to_dict() for entry in self.history],
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """딕셔너리에서 생성"""
        balance = _money(data, "balance", Money.ZERO)
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            balance=balance,
            initial_balance=_money(data, "initialBalance", balance),
            currency=data.get("currency") or Defaults.CURRENCY,
            description=data.get("description"),
            status=data.get("status", Status.ACTIVE.value),
            history=[HistoryEntry.from_dict(h) for h in data.get("history", [])],
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )


# =========================================================================
# Transaction
# =========================================================================


@dataclass
class Transaction:
    """거래

    income/expense: account_id 하나에 영향
    transfer: account_id(출금) → to_account_id(입금)

    *_name / *_deleted 필드는 참조 대상이 영구 삭제될 때 채워지는 고정 라벨.
    """

    id: str
    type: str
    account_id: str
    amount: Decimal
    date: datetime
    to_account_id: str | None = None
    category_id: str | None = None
    description: str | None = None
    status: str = Status.ACTIVE.value
    account_name: str | None = None
    to_account_name: str | None = None
    category_name: str | None = None
    account_deleted: bool = False
    to_account_deleted: bool = False
    category_deleted: bool = False
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.description or ""

    def effects(self) -> list[tuple[str, OperationType]]:
        """이 거래가 계좌에 주는 영향 목록

        Returns:
            [(account_id, operation_type), ...]
        """
        if self.type == TransactionType.INCOME.value:
            return [(self.account_id, OperationType.INCOME)]
        if self.type == TransactionType.EXPENSE.value:
            return [(self.account_id, OperationType.EXPENSE)]
        return [
            (self.account_id, OperationType.EXPENSE),
            (self.to_account_id, OperationType.INCOME),
        ]

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "type": self.type,
            "accountId": self.account_id,
            "toAccountId": self.to_account_id,
            "amount": to_money_str(self.amount),
            "categoryId": self.category_id,
            "description": self.description,
            "date": to_iso(self.date),
            "status": self.status,
            "accountName": self.account_name,
            "toAccountName": self.to_account_name,
            "categoryName": self.category_name,
            "accountDeleted": self.account_deleted,
            "toAccountDeleted": self.to_account_deleted,
            "categoryDeleted": self.category_deleted,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """딕셔너리에서 생성"""
        return cls(
            id=data["id"],
            type=data["type"],
            account_id=data["accountId"],
            amount=parse_amount(data["amount"]),
            date=_time(data, "date") or now_utc(),
            to_account_id=data.get("toAccountId"),
            category_id=data.get("categoryId"),
            description=data.get("description"),
            status=data.get("status", Status.ACTIVE.value),
            account_name=data.get("accountName"),
            to_account_name=data.get("toAccountName"),
            category_name=data.get("categoryName"),
            account_deleted=bool(data.get("accountDeleted", False)),
            to_account_deleted=bool(data.get("toAccountDeleted", False)),
            category_deleted=bool(data.get("categoryDeleted", False)),
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )


# =========================================================================
# Category
# =========================================================================


@dataclass
class Category:
    """카테고리"""

    id: str
    name: str
    type: str
    icon: str = Defaults.CATEGORY_ICON
    color: str | None = None
    status: str = Status.ACTIVE.value
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "color": self.color,
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """딕셔너리에서 생성"""
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            icon=data.get("icon") or Defaults.CATEGORY_ICON,
            color=data.get("color"),
            status=data.get("status", Status.ACTIVE.value),
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )


# =========================================================================
# Goal
# =========================================================================


@dataclass
class GoalTransfer:
    """목표 적립 이력 항목"""

    amount: Decimal
    date: datetime
    from_account_id: str
    from_account_name: str | None = None
    from_account_deleted: bool = False
    transaction_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "amount": to_money_str(self.amount),
            "date": to_iso(self.date),
            "fromAccountId": self.from_account_id,
            "fromAccountName": self.from_account_name,
            "fromAccountDeleted": self.from_account_deleted,
            "transactionId": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GoalTransfer":
        """딕셔너리에서 생성"""
        return cls(
            amount=parse_amount(data["amount"]),
            date=parse_datetime(data["date"]),
            from_account_id=data["fromAccountId"],
            from_account_name=data.get("fromAccountName"),
            from_account_deleted=bool(data.get("fromAccountDeleted", False)),
            transaction_id=data.get("transactionId"),
        )


@dataclass
class Goal:
    """저축 목표

    progress >= target_amount 이면 completed.
    """

    id: str
    name: str
    target_amount: Decimal
    progress: Decimal = Money.ZERO
    description: str | None = None
    account_id: str | None = None
    deadline: datetime | None = None
    transfer_history: list[GoalTransfer] = field(default_factory=list)
    status: str = Status.ACTIVE.value
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name

    def refresh_completion(self) -> None:
        """진행률에 맞춰 active ↔ completed 갱신 (archived는 그대로)"""
        if self.status == Status.ARCHIVED.value:
            return
        if self.progress >= self.target_amount:
            self.status = Status.COMPLETED.value
        else:
            self.status = Status.ACTIVE.value

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "accountId": self.account_id,
            "targetAmount": to_money_str(self.target_amount),
            "progress": to_money_str(self.progress),
            "deadline": to_iso(self.deadline),
            "transferHistory": [t.to_dict() for t in self.transfer_history],
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        """딕셔너리에서 생성"""
        return cls(
            id=data["id"],
            name=data["name"],
            target_amount=parse_amount(data["targetAmount"]),
            progress=_money(data, "progress", Money.ZERO),
            description=data.get("description"),
            account_id=data.get("accountId"),
            deadline=_time(data, "deadline"),
            transfer_history=[
                GoalTransfer.from_dict(t) for t in data.get("transferHistory", [])
            ],
            status=data.get("status", Status.ACTIVE.value),
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )


# =========================================================================
# Debt
# =========================================================================


@dataclass
class DebtPayment:
    """부채 상환 이력 항목"""

    date: datetime
    amount: Decimal
    description: str
    transaction_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "date": to_iso(self.date),
            "amount": to_money_str(self.amount),
            "description": self.description,
            "transactionId": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DebtPayment":
        """딕셔너리에서 생성"""
        return cls(
            date=parse_datetime(data["date"]),
            amount=parse_amount(data["amount"]),
            description=data.get("description") or "",
            transaction_id=data.get("transactionId"),
        )


@dataclass
class Debt:
    """부채

    initial_amount는 생성 후 불변. current_amount <= 0 이면 paid.
    """

    id: str
    name: str
    type: str
    initial_amount: Decimal
    current_amount: Decimal
    interest_rate: Decimal | None = None
    lender: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    next_payment_date: datetime | None = None
    payment_history: list[DebtPayment] = field(default_factory=list)
    status: str = Status.ACTIVE.value
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def paid_amount(self) -> Decimal:
        """상환 누계"""
        return self.initial_amount - self.current_amount

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "initialAmount": to_money_str(self.initial_amount),
            "currentAmount": to_money_str(self.current_amount),
            "interestRate": to_money_str(self.interest_rate),
            "lender": self.lender,
            "description": self.description,
            "startDate": to_iso(self.start_date),
            "endDate": to_iso(self.end_date),
            "nextPaymentDate": to_iso(self.next_payment_date),
            "paymentHistory": [p.to_dict() for p in self.payment_history],
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Debt":
        """딕셔너리에서 생성"""
        initial_amount = parse_amount(data["initialAmount"])
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            initial_amount=initial_amount,
            current_amount=_money(data, "currentAmount", initial_amount),
            interest_rate=_money(data, "interestRate"),
            lender=data.get("lender"),
            description=data.get("description"),
            start_date=_time(data, "startDate"),
            end_date=_time(data, "endDate"),
            next_payment_date=_time(data, "nextPaymentDate"),
            payment_history=[
                DebtPayment.from_dict(p) for p in data.get("paymentHistory", [])
            ],
            status=data.get("status", Status.ACTIVE.value),
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )


# =========================================================================
# Subscription
# =========================================================================


@dataclass
class SubscriptionPayment:
    """구독 결제 이력 항목"""

    date: datetime
    amount: Decimal
    status: str = PaymentStatus.SUCCESS.value
    description: str = ""
    transaction_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "date": to_iso(self.date),
            "amount": to_money_str(self.amount),
            "status": self.status,
            "description": self.description,
            "transactionId": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SubscriptionPayment":
        """딕셔너리에서 생성"""
        return cls(
            date=parse_datetime(data["date"]),
            amount=parse_amount(data["amount"]),
            status=data.get("status", PaymentStatus.SUCCESS.value),
            description=data.get("description") or "",
            transaction_id=data.get("transactionId"),
        )


@dataclass
class Subscription:
    """정기 구독

    결제 시 account_id 계좌에서 expense 거래가 생성된다.
    """

    id: str
    name: str
    amount: Decimal
    frequency: str
    account_id: str
    start_date: datetime
    next_payment_date: datetime
    custom_frequency_days: int | None = None
    currency: str = Defaults.CURRENCY
    category_id: str | None = None
    description: str | None = None
    auto_payment: bool = False
    last_payment_date: datetime | None = None
    payment_history: list[SubscriptionPayment] = field(default_factory=list)
    status: str = Status.ACTIVE.value
    created_at: datetime = field(default_factory=now_utc)
    updated_at: datetime = field(default_factory=now_utc)

    @property
    def display_name(self) -> str:
        return self.name

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "amount": to_money_str(self.amount),
            "currency": self.currency,
            "frequency": self.frequency,
            "customFrequencyDays": self.custom_frequency_days,
            "startDate": to_iso(self.start_date),
            "nextPaymentDate": to_iso(self.next_payment_date),
            "lastPaymentDate": to_iso(self.last_payment_date),
            "accountId": self.account_id,
            "categoryId": self.category_id,
            "autoPayment": self.auto_payment,
            "paymentHistory": [p.to_dict() for p in self.payment_history],
            "status": self.status,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Subscription":
        """딕셔너리에서 생성"""
        return cls(
            id=data["id"],
            name=data["name"],
            amount=parse_amount(data["amount"]),
            frequency=data["frequency"],
            account_id=data["accountId"],
            start_date=parse_datetime(data["startDate"]),
            next_payment_date=parse_datetime(data["nextPaymentDate"]),
            custom_frequency_days=data.get("customFrequencyDays"),
            currency=data.get("currency") or Defaults.CURRENCY,
            category_id=data.get("categoryId"),
            description=data.get("description"),
            auto_payment=bool(data.get("autoPayment", False)),
            last_payment_date=_time(data, "lastPaymentDate"),
            payment_history=[
                SubscriptionPayment.from_dict(p) for p in data.get("paymentHistory", [])
            ],
            status=data.get("status", Status.ACTIVE.value),
            created_at=_time(data, "createdAt") or now_utc(),
            updated_at=_time(data, "updatedAt") or now_utc(),
        )

