"""
거래 서비스

거래 조회(표시 이름 해석 포함)와 LedgerEngine을 통한 생성/수정
"""

from datetime import datetime
from typing import Any

from core.archive.resolver import ReferenceResolver
from core.constants import Defaults
from core.errors import ValidationError
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status, TransactionType
from core.utils.pagination import paginate
from core.utils.timezone import end_of_day
from web.models.requests import TransactionCreateRequest, TransactionUpdateRequest
from web.services.common import optional_datetime, status_filter


class TransactionService:
    """거래 서비스

    Args:
        store: EntityStore
        ledger: LedgerEngine (잔액 변경)
        resolver: 계좌/카테고리 표시 이름 해석
    """

    def __init__(
        self,
        store: EntityStore,
        ledger: LedgerEngine,
        resolver: ReferenceResolver | None = None,
    ):
        self.store = store
        self.ledger = ledger
        self.resolver = resolver or ReferenceResolver()

    async def list_transactions(
        self,
        status: str | None = None,
        transaction_type: str | None = None,
        account_id: str | None = None,
        category_id: str | None = None,
        start_date: datetime | str | None = None,
        end_date: datetime | str | None = None,
        page: int = Defaults.PAGE,
        limit: int = Defaults.PAGE_LIMIT,
    ) -> dict[str, Any]:
        """거래 목록 (날짜 최신순)

        account_id 필터는 출금/입금 어느 쪽이든 일치하면 포함.

        Returns:
            {transactions, pagination}
        """
        statuses = status_filter(EntityType.TRANSACTIONS, status, [Status.ACTIVE.value])
        if transaction_type:
            try:
                transaction_type = TransactionType(transaction_type).value
            except ValueError:
                raise ValidationError(f"Unknown transaction type: {transaction_type}") from None

        start = optional_datetime(start_date, "startDate")
        end = optional_datetime(end_date, "endDate")
        if end is not None:
            end = end_of_day(end)

        async with self.store.reading() as store:
            transactions = await store.transactions.list(statuses)
            matched = [
                t
                for t in transactions
                if (not transaction_type or t.type == transaction_type)
                and (not account_id or account_id in (t.account_id, t.to_account_id))
                and (not category_id or t.category_id == category_id)
                and (start is None or t.date >= start)
                and (end is None or t.date <= end)
            ]
            matched.sort(key=lambda t: t.date, reverse=True)
            page_items, pagination = paginate(matched, page, limit)
            items = await self.resolver.label_transactions(store, page_items)

        return {"transactions": items, "pagination": pagination}

    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        """거래 조회 (보관 포함)"""
        async with self.store.reading() as store:
            transaction = await store.transactions.require(transaction_id)
            items = await self.resolver.label_transactions(store, [transaction])
        return items[0]

    async def create_transaction(self, request: TransactionCreateRequest) -> dict[str, Any]:
        """거래 생성 (transfer는 계좌 간 이체로 처리)"""
        transaction = await self.ledger.record_transaction(
            account_id=request.account_id,
            type=request.type,
            amount=request.amount,
            date=request.date,
            category_id=request.category_id,
            description=request.description,
            to_account_id=request.to_account_id,
        )
        return await self.get_transaction(transaction.id)

    async def update_transaction(
        self, transaction_id: str, request: TransactionUpdateRequest
    ) -> dict[str, Any]:
        """거래 수정 (보낸 필드만)"""
        patch = request.model_dump(exclude_unset=True)
        transaction = await self.ledger.update_transaction(transaction_id, patch)
        return await self.get_transaction(transaction.id)
