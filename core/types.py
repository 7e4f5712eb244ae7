"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class EntityType(str, Enum):
    """엔티티 컬렉션 종류

    값은 URL 경로 세그먼트와 동일 (/api/{type}/...)
    """

    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
    CATEGORIES = "categories"
    GOALS = "goals"
    DEBTS = "debts"
    SUBSCRIPTIONS = "subscriptions"

    @classmethod
    def parse(cls, value: str) -> "EntityType | None":
        """문자열 → EntityType (알 수 없으면 None)"""
        try:
            return cls(value)
        except ValueError:
            return None


class TransactionType(str, Enum):
    """거래 유형"""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class OperationType(str, Enum):
    """계좌 이력 항목 방향"""

    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    """계좌 종류"""

    CASH = "cash"
    DEBIT = "debit"
    CREDIT = "credit"
    SAVINGS = "savings"
    INVESTMENT = "investment"
    OTHER = "other"


class CategoryType(str, Enum):
    """카테고리 종류"""

    INCOME = "income"
    EXPENSE = "expense"


class DebtType(str, Enum):
    """부채 종류"""

    CREDIT = "credit"
    LOAN = "loan"
    CREDIT_CARD = "creditCard"
    PERSONAL_DEBT = "personalDebt"


class Frequency(str, Enum):
    """구독 결제 주기"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class PaymentStatus(str, Enum):
    """구독 결제 결과"""

    SUCCESS = "success"
    PENDING = "pending"
    FAILED = "failed"


class Status(str, Enum):
    """엔티티 생명주기 상태 (전체 엔티티 공통 값 집합)

    엔티티별 허용 상태는 core.domain.state_machines 참고.
    """

    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"
    PAID = "paid"
    DEFAULTED = "defaulted"
    PAUSED = "paused"
    CANCELLED = "cancelled"
