"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    AccountCreateRequest,
    AccountUpdateRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    DebtCreateRequest,
    DebtPaymentRequest,
    DebtUpdateRequest,
    GoalCreateRequest,
    GoalTransferRequest,
    GoalUpdateRequest,
    SubscriptionCreateRequest,
    SubscriptionPaymentRequest,
    SubscriptionStatusRequest,
    SubscriptionUpdateRequest,
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransferRequest,
)
from web.models.responses import (
    ArchiveStatsResponse,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    SuccessResponse,
)

__all__ = [
    # Requests
    "AccountCreateRequest",
    "AccountUpdateRequest",
    "TransferRequest",
    "CategoryCreateRequest",
    "CategoryUpdateRequest",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "GoalCreateRequest",
    "GoalUpdateRequest",
    "GoalTransferRequest",
    "DebtCreateRequest",
    "DebtUpdateRequest",
    "DebtPaymentRequest",
    "SubscriptionCreateRequest",
    "SubscriptionUpdateRequest",
    "SubscriptionStatusRequest",
    "SubscriptionPaymentRequest",
    # Responses
    "ArchiveStatsResponse",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "SuccessResponse",
]
