"""
부채 서비스

부채 CRUD. 상환은 LedgerEngine.record_debt_payment()
"""

import logging
from datetime import timedelta
from typing import Any

from core.constants import Defaults, Money
from core.domain.models import Debt, new_id
from core.errors import ValidationError
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import DebtType, EntityType, Status
from core.utils.money import to_money_str
from core.utils.timezone import now_utc
from web.models.requests import DebtCreateRequest, DebtPaymentRequest, DebtUpdateRequest
from web.services.common import optional_datetime, require_active, status_filter

logger = logging.getLogger(__name__)

# 수정 요청에서 그대로 옮기는 날짜 필드
_DATE_FIELDS = ("start_date", "end_date", "next_payment_date")


class DebtService:
    """부채 서비스

    Args:
        store: EntityStore
        ledger: LedgerEngine
    """

    def __init__(self, store: EntityStore, ledger: LedgerEngine):
        self.store = store
        self.ledger = ledger

    async def list_debts(
        self,
        status: str | None = None,
        debt_type: str | None = None,
    ) -> list[dict[str, Any]]:
        """부채 목록 (기본: 보관 외 전체, 다음 상환일 순)"""
        statuses = status_filter(EntityType.DEBTS, status)
        if debt_type:
            try:
                debt_type = DebtType(debt_type).value
            except ValueError:
                raise ValidationError(f"Unknown debt type: {debt_type}") from None

        async with self.store.reading() as store:
            debts = await store.debts.list(statuses)
        if debt_type:
            debts = [d for d in debts if d.type == debt_type]
        # 다음 상환일이 없는 부채는 뒤로
        debts.sort(key=lambda d: (d.next_payment_date is None, d.next_payment_date or d.created_at))
        return [debt.to_dict() for debt in debts]

    async def upcoming_payments(self, days: int = Defaults.UPCOMING_DAYS) -> list[dict[str, Any]]:
        """다가오는 상환 (활성 부채 중 nextPaymentDate ≤ 지금 + days, 가까운 순)

        기한이 지난 상환도 포함한다.
        """
        until = now_utc() + timedelta(days=days)
        async with self.store.reading() as store:
            debts = await store.debts.list([Status.ACTIVE.value])
        upcoming = [
            d for d in debts if d.next_payment_date is not None and d.next_payment_date <= until
        ]
        upcoming.sort(key=lambda d: d.next_payment_date)
        return [debt.to_dict() for debt in upcoming]

    async def stats(self) -> dict[str, Any]:
        """부채 통계 (보관 제외)

        Returns:
            {totalDebt, activeDebts, paidDebts, upcomingPayments, byType}
            금액은 문자열, byType은 종류별 잔여 금액 합
        """
        statuses = status_filter(EntityType.DEBTS, None)
        async with self.store.reading() as store:
            debts = await store.debts.list(statuses)

        by_type = {debt_type.value: Money.ZERO for debt_type in DebtType}
        for debt in debts:
            by_type[debt.type] = by_type.get(debt.type, Money.ZERO) + debt.current_amount

        active = [d for d in debts if d.status == Status.ACTIVE.value]
        scheduled = sorted(
            (d for d in active if d.next_payment_date is not None),
            key=lambda d: d.next_payment_date,
        )

        return {
            "totalDebt": to_money_str(sum((d.current_amount for d in debts), Money.ZERO)),
            "activeDebts": len(active),
            "paidDebts": sum(1 for d in debts if d.status == Status.PAID.value),
            "upcomingPayments": [
                d.to_dict() for d in scheduled[: Defaults.STATS_UPCOMING_LIMIT]
            ],
            "byType": {key: to_money_str(value) for key, value in by_type.items()},
        }

    async def get_debt(self, debt_id: str) -> dict[str, Any]:
        async with self.store.reading() as store:
            debt = await store.debts.require(debt_id)
        return debt.to_dict()

    async def create_debt(self, request: DebtCreateRequest) -> dict[str, Any]:
        """부채 생성 (current_amount = initial_amount)"""
        debt = Debt(
            id=new_id(),
            name=request.name,
            type=request.type.value,
            initial_amount=request.initial_amount,
            current_amount=request.initial_amount,
            interest_rate=request.interest_rate,
            lender=request.lender,
            description=request.description,
            start_date=optional_datetime(request.start_date, "startDate"),
            end_date=optional_datetime(request.end_date, "endDate"),
            next_payment_date=optional_datetime(request.next_payment_date, "nextPaymentDate"),
        )
        if debt.start_date and debt.end_date and debt.end_date < debt.start_date:
            raise ValidationError("endDate must not be earlier than startDate")

        async with self.store.unit_of_work() as store:
            await store.debts.add(debt)

        logger.info(
            "부채 생성",
            extra={"debt_id": debt.id, "initial_amount": str(debt.initial_amount)},
        )
        return debt.to_dict()

    async def update_debt(self, debt_id: str, request: DebtUpdateRequest) -> dict[str, Any]:
        """부채 수정 (initialAmount 변경 불가)"""
        fields = request.model_fields_set

        async with self.store.unit_of_work() as store:
            debt = await require_active(store, EntityType.DEBTS, debt_id)
            if request.initial_amount is not None and request.initial_amount != debt.initial_amount:
                raise ValidationError("initialAmount cannot be changed")

            if request.name is not None:
                debt.name = request.name
            if request.type is not None:
                debt.type = request.type.value
            for name in ("interest_rate", "lender", "description"):
                if name in fields:
                    setattr(debt, name, getattr(request, name))
            for name in _DATE_FIELDS:
                if name in fields:
                    setattr(debt, name, optional_datetime(getattr(request, name), name))
            if debt.start_date and debt.end_date and debt.end_date < debt.start_date:
                raise ValidationError("endDate must not be earlier than startDate")

            debt.updated_at = now_utc()
            await store.debts.save(debt)

        return debt.to_dict()

    async def record_payment(self, debt_id: str, request: DebtPaymentRequest) -> dict[str, Any]:
        """부채 상환"""
        debt = await self.ledger.record_debt_payment(
            debt_id,
            request.amount,
            description=request.description,
            account_id=request.account_id,
        )
        return debt.to_dict()
