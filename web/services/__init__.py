"""
Web 서비스 패키지

비즈니스 로직 처리 (CRUD + LedgerEngine / ArchiveManager 호출)
"""

from web.services.account_service import AccountService
from web.services.category_service import CategoryService
from web.services.debt_service import DebtService
from web.services.goal_service import GoalService
from web.services.subscription_service import SubscriptionService
from web.services.transaction_service import TransactionService

__all__ = [
    "AccountService",
    "CategoryService",
    "DebtService",
    "GoalService",
    "SubscriptionService",
    "TransactionService",
]
