"""
Ledger Engine

계좌 잔액/이력을 변경하는 모든 금전 이벤트를 처리.

사용 예시:
```python
from core.ledger import LedgerEngine

engine = LedgerEngine(store)

# 수입 기록
tx = await engine.record_transaction(account_id, "income", Decimal("1000"))

# 계좌 간 이체
result = await engine.transfer(account_a, account_b, Decimal("300"))

# 구독 결제 (다음 결제일 한 주기 이동)
paid = await engine.record_subscription_payment(subscription_id)
```
"""

from core.ledger.billing import billing_period, monthly_amount, next_payment_date
from core.ledger.engine import (
    LedgerEngine,
    SubscriptionPaymentResult,
    TransferResult,
    positive_amount,
)

__all__ = [
    # 핵심 클래스
    "LedgerEngine",
    "TransferResult",
    "SubscriptionPaymentResult",
    # 함수
    "billing_period",
    "monthly_amount",
    "next_payment_date",
    "positive_amount",
]
