"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
JSON 필드는 camelCase (accountId, targetAmount ...), 파이썬 속성은 snake_case.
금액은 JSON 숫자/문자열 모두 허용 (Decimal로 변환).
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.constants import Money
from core.types import AccountType, CategoryType, DebtType, Frequency, TransactionType


# 0.01 단위, 정수부 13자리 이내
MoneyDecimal = Annotated[
    Decimal, Field(max_digits=Money.MAX_DIGITS, decimal_places=Money.PLACES)
]
RateDecimal = Annotated[Decimal, Field(ge=0, max_digits=7, decimal_places=4)]


class CamelModel(BaseModel):
    """camelCase JSON ↔ snake_case 속성 기본 모델"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =========================================================================
# Account
# =========================================================================


class AccountCreateRequest(CamelModel):
    """계좌 생성 요청"""

    name: str = Field(..., min_length=1, description="계좌 이름")
    type: AccountType = Field(default=AccountType.CASH, description="계좌 종류")
    balance: MoneyDecimal = Field(default=Decimal("0"), description="초기 잔액")
    currency: str | None = Field(default=None, description="통화 (기본: 설정값)")
    description: str | None = Field(default=None, description="설명")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Card", "type": "debit", "balance": 1000, "currency": "RUB"},
            ]
        }
    }


class AccountUpdateRequest(CamelModel):
    """계좌 수정 요청

    잔액은 Ledger Engine만 변경하므로 받지 않는다.
    """

    name: str = Field(..., min_length=1, description="계좌 이름")
    type: AccountType | None = Field(default=None, description="계좌 종류")
    currency: str | None = Field(default=None, description="통화")
    description: str | None = Field(default=None, description="설명")


class TransferRequest(CamelModel):
    """계좌 간 이체 요청"""

    from_account_id: str = Field(..., description="출금 계좌 ID")
    to_account_id: str = Field(..., description="입금 계좌 ID")
    amount: MoneyDecimal = Field(..., description="이체 금액 (> 0)")
    description: str | None = Field(default=None, description="설명")
    date: datetime | None = Field(default=None, description="이체 일시 (기본: 현재)")


# =========================================================================
# Category
# =========================================================================


class CategoryCreateRequest(CamelModel):
    """카테고리 생성 요청"""

    name: str = Field(..., min_length=1, description="카테고리 이름")
    type: CategoryType = Field(..., description="income | expense")
    icon: str | None = Field(default=None, description="아이콘 이름")
    color: str | None = Field(default=None, description="표시 색상")


class CategoryUpdateRequest(CamelModel):
    """카테고리 수정 요청"""

    name: str | None = Field(default=None, min_length=1, description="카테고리 이름")
    type: CategoryType | None = Field(default=None, description="income | expense")
    icon: str | None = Field(default=None, description="아이콘 이름")
    color: str | None = Field(default=None, description="표시 색상")


# =========================================================================
# Transaction
# =========================================================================


class TransactionCreateRequest(CamelModel):
    """거래 생성 요청

    type=transfer 이면 toAccountId 필수.
    """

    type: TransactionType = Field(..., description="income | expense | transfer")
    account_id: str = Field(..., description="계좌 ID (transfer는 출금 계좌)")
    to_account_id: str | None = Field(default=None, description="입금 계좌 ID (transfer 전용)")
    amount: MoneyDecimal = Field(..., description="금액 (> 0)")
    category_id: str | None = Field(default=None, description="카테고리 ID")
    description: str | None = Field(default=None, description="설명")
    date: datetime | None = Field(default=None, description="거래 일시 (기본: 현재)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"type": "expense", "accountId": "a1", "amount": "250.00", "categoryId": "c1"},
                {"type": "transfer", "accountId": "a1", "toAccountId": "a2", "amount": 300},
            ]
        }
    }


class TransactionUpdateRequest(CamelModel):
    """거래 수정 요청 (보낸 필드만 변경)"""

    type: TransactionType | None = Field(default=None, description="거래 유형")
    account_id: str | None = Field(default=None, description="계좌 ID")
    to_account_id: str | None = Field(default=None, description="입금 계좌 ID")
    amount: MoneyDecimal | None = Field(default=None, description="금액 (> 0)")
    category_id: str | None = Field(default=None, description="카테고리 ID (빈 값이면 제거)")
    description: str | None = Field(default=None, description="설명")
    date: datetime | None = Field(default=None, description="거래 일시")


# =========================================================================
# Goal
# =========================================================================


class GoalCreateRequest(CamelModel):
    """목표 생성 요청"""

    name: str = Field(..., min_length=1, description="목표 이름")
    target_amount: MoneyDecimal = Field(..., gt=0, description="목표 금액")
    description: str | None = Field(default=None, description="설명")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")
    deadline: datetime | None = Field(default=None, description="목표 기한")


class GoalUpdateRequest(CamelModel):
    """목표 수정 요청 (진행률은 적립으로만 변경)"""

    name: str | None = Field(default=None, min_length=1, description="목표 이름")
    target_amount: MoneyDecimal | None = Field(default=None, gt=0, description="목표 금액")
    description: str | None = Field(default=None, description="설명")
    account_id: str | None = Field(default=None, description="연결 계좌 ID")
    deadline: datetime | None = Field(default=None, description="목표 기한")


class GoalTransferRequest(CamelModel):
    """목표 적립 요청"""

    from_account_id: str = Field(..., description="출금 계좌 ID")
    amount: MoneyDecimal = Field(..., description="적립 금액 (> 0)")


# =========================================================================
# Debt
# =========================================================================


class DebtCreateRequest(CamelModel):
    """부채 생성 요청"""

    name: str = Field(..., min_length=1, description="부채 이름")
    type: DebtType = Field(..., description="credit | loan | creditCard | personalDebt")
    initial_amount: MoneyDecimal = Field(..., gt=0, description="최초 금액")
    interest_rate: RateDecimal | None = Field(default=None, description="연 이율 (%)")
    lender: str | None = Field(default=None, description="채권자")
    description: str | None = Field(default=None, description="설명")
    start_date: datetime | None = Field(default=None, description="시작일")
    end_date: datetime | None = Field(default=None, description="종료일")
    next_payment_date: datetime | None = Field(default=None, description="다음 상환일")


class DebtUpdateRequest(CamelModel):
    """부채 수정 요청

    initialAmount는 생성 후 변경 불가 (같은 값만 허용).
    """

    name: str | None = Field(default=None, min_length=1, description="부채 이름")
    type: DebtType | None = Field(default=None, description="부채 종류")
    initial_amount: MoneyDecimal | None = Field(default=None, description="최초 금액 (변경 불가)")
    interest_rate: RateDecimal | None = Field(default=None, description="연 이율 (%)")
    lender: str | None = Field(default=None, description="채권자")
    description: str | None = Field(default=None, description="설명")
    start_date: datetime | None = Field(default=None, description="시작일")
    end_date: datetime | None = Field(default=None, description="종료일")
    next_payment_date: datetime | None = Field(default=None, description="다음 상환일")


class DebtPaymentRequest(CamelModel):
    """부채 상환 요청"""

    amount: MoneyDecimal = Field(..., description="상환 금액 (> 0, 잔여 금액 이하)")
    description: str | None = Field(default=None, description="설명")
    account_id: str | None = Field(default=None, description="출금 계좌 ID (선택)")


# =========================================================================
# Subscription
# =========================================================================


class SubscriptionCreateRequest(CamelModel):
    """구독 생성 요청

    frequency=custom 이면 customFrequencyDays 필수.
    """

    name: str = Field(..., min_length=1, description="구독 이름")
    amount: MoneyDecimal = Field(..., gt=0, description="결제 금액")
    frequency: Frequency = Field(..., description="결제 주기")
    custom_frequency_days: int | None = Field(default=None, gt=0, description="custom 주기 일수")
    start_date: datetime = Field(..., description="시작일 (첫 결제일)")
    account_id: str = Field(..., description="결제 계좌 ID")
    category_id: str | None = Field(default=None, description="카테고리 ID")
    currency: str | None = Field(default=None, description="통화 (기본: 설정값)")
    description: str | None = Field(default=None, description="설명")
    auto_payment: bool = Field(default=False, description="자동 결제 여부")

    @model_validator(mode="after")
    def _check_custom_days(self) -> "SubscriptionCreateRequest":
        if self.frequency == Frequency.CUSTOM and not self.custom_frequency_days:
            raise ValueError("customFrequencyDays is required for custom frequency")
        return self


class SubscriptionUpdateRequest(CamelModel):
    """구독 수정 요청"""

    name: str | None = Field(default=None, min_length=1, description="구독 이름")
    amount: MoneyDecimal | None = Field(default=None, gt=0, description="결제 금액")
    frequency: Frequency | None = Field(default=None, description="결제 주기")
    custom_frequency_days: int | None = Field(default=None, gt=0, description="custom 주기 일수")
    next_payment_date: datetime | None = Field(default=None, description="다음 결제일")
    account_id: str | None = Field(default=None, description="결제 계좌 ID")
    category_id: str | None = Field(default=None, description="카테고리 ID")
    currency: str | None = Field(default=None, description="통화")
    description: str | None = Field(default=None, description="설명")
    auto_payment: bool | None = Field(default=None, description="자동 결제 여부")


class SubscriptionStatusRequest(CamelModel):
    """구독 상태 변경 요청 (보관은 archive 엔드포인트 사용)"""

    status: Literal["active", "paused", "cancelled"] = Field(..., description="새 상태")


class SubscriptionPaymentRequest(CamelModel):
    """구독 결제 요청"""

    amount: MoneyDecimal | None = Field(default=None, description="결제 금액 (기본: 구독 금액)")
    description: str | None = Field(default=None, description="설명")
