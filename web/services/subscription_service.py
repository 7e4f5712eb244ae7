"""
구독 서비스

구독 CRUD, 상태 변경(active/paused/cancelled), 결제는 LedgerEngine
"""

import logging
from datetime import timedelta
from typing import Any

from core.constants import Defaults, Money
from core.domain.models import Subscription, new_id
from core.domain.state_machines import StateMachineError, SubscriptionStateMachine
from core.errors import ValidationError
from core.ledger.billing import billing_period, monthly_amount
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import EntityType, Frequency, Status
from core.utils.money import to_money_str
from core.utils.pagination import paginate
from core.utils.timezone import now_utc
from web.models.requests import (
    SubscriptionCreateRequest,
    SubscriptionPaymentRequest,
    SubscriptionUpdateRequest,
)
from web.services.common import optional_datetime, require_active, split_csv, status_filter

logger = logging.getLogger(__name__)


class SubscriptionService:
    """구독 서비스

    Args:
        store: EntityStore
        ledger: LedgerEngine
        default_currency: 통화 미지정 시 기본값
    """

    def __init__(
        self,
        store: EntityStore,
        ledger: LedgerEngine,
        default_currency: str = Defaults.CURRENCY,
    ):
        self.store = store
        self.ledger = ledger
        self.default_currency = default_currency

    async def list_subscriptions(
        self,
        status: str | None = None,
        frequency: str | None = None,
        page: int = Defaults.PAGE,
        limit: int = Defaults.PAGE_LIMIT,
    ) -> dict[str, Any]:
        """구독 목록 (다음 결제일 순)

        Args:
            status: 쉼표 구분 상태 목록 (기본: 보관 외 전체)
            frequency: 쉼표 구분 주기 목록

        Returns:
            {subscriptions, pagination}
        """
        statuses = status_filter(EntityType.SUBSCRIPTIONS, status)
        frequencies = split_csv(frequency)
        unknown = [f for f in frequencies if f not in {m.value for m in Frequency}]
        if unknown:
            raise ValidationError(f"Unknown frequency: {', '.join(unknown)}")

        async with self.store.reading() as store:
            subscriptions = await store.subscriptions.list(statuses)
        if frequencies:
            subscriptions = [s for s in subscriptions if s.frequency in frequencies]
        subscriptions.sort(key=lambda s: s.next_payment_date)

        page_items, pagination = paginate(subscriptions, page, limit)
        return {
            "subscriptions": [s.to_dict() for s in page_items],
            "pagination": pagination,
        }

    async def upcoming_payments(self, days: int = Defaults.UPCOMING_DAYS) -> list[dict[str, Any]]:
        """다가오는 결제 (활성 구독 중 nextPaymentDate ≤ 지금 + days, 가까운 순)"""
        async with self.store.reading() as store:
            subscriptions = await store.subscriptions.list([Status.ACTIVE.value])
        return [s.to_dict() for s in self._due_within(subscriptions, days)]

    async def stats(self) -> dict[str, Any]:
        """구독 통계 (보관 제외)

        월 환산액은 활성 구독만 합산한다.

        Returns:
            {totalMonthly, totalYearly, activeCount, pausedCount,
             upcomingPayments, byFrequency}
        """
        statuses = status_filter(EntityType.SUBSCRIPTIONS, None)
        async with self.store.reading() as store:
            subscriptions = await store.subscriptions.list(statuses)

        active = [s for s in subscriptions if s.status == Status.ACTIVE.value]
        monthly = Money.ZERO
        by_frequency = {frequency.value: 0 for frequency in Frequency}
        for subscription in active:
            monthly += monthly_amount(
                subscription.amount, subscription.frequency, subscription.custom_frequency_days
            )
            by_frequency[subscription.frequency] += 1

        return {
            "totalMonthly": to_money_str(monthly.quantize(Money.QUANTUM)),
            "totalYearly": to_money_str((monthly * 12).quantize(Money.QUANTUM)),
            "activeCount": len(active),
            "pausedCount": sum(1 for s in subscriptions if s.status == Status.PAUSED.value),
            "upcomingPayments": [
                s.to_dict() for s in self._due_within(active, Defaults.UPCOMING_DAYS)
            ],
            "byFrequency": by_frequency,
        }

    @staticmethod
    def _due_within(subscriptions: list[Subscription], days: int) -> list[Subscription]:
        until = now_utc() + timedelta(days=days)
        due = [s for s in subscriptions if s.next_payment_date <= until]
        due.sort(key=lambda s: s.next_payment_date)
        return due

    async def get_subscription(self, subscription_id: str) -> dict[str, Any]:
        async with self.store.reading() as store:
            subscription = await store.subscriptions.require(subscription_id)
        return subscription.to_dict()

    async def create_subscription(self, request: SubscriptionCreateRequest) -> dict[str, Any]:
        """구독 생성 (첫 결제일 = 시작일)"""
        start_date = optional_datetime(request.start_date, "startDate")
        subscription = Subscription(
            id=new_id(),
            name=request.name,
            amount=request.amount,
            frequency=request.frequency.value,
            account_id=request.account_id,
            start_date=start_date,
            next_payment_date=start_date,
            custom_frequency_days=request.custom_frequency_days,
            currency=request.currency or self.default_currency,
            category_id=request.category_id,
            description=request.description,
            auto_payment=request.auto_payment,
        )

        async with self.store.unit_of_work() as store:
            await require_active(store, EntityType.ACCOUNTS, subscription.account_id)
            if subscription.category_id:
                await require_active(store, EntityType.CATEGORIES, subscription.category_id)
            await store.subscriptions.add(subscription)

        logger.info(
            "구독 생성",
            extra={
                "subscription_id": subscription.id,
                "frequency": subscription.frequency,
                "amount": str(subscription.amount),
            },
        )
        return subscription.to_dict()

    async def update_subscription(
        self, subscription_id: str, request: SubscriptionUpdateRequest
    ) -> dict[str, Any]:
        """구독 수정 (보관된 구독은 수정 불가)"""
        fields = request.model_fields_set

        async with self.store.unit_of_work() as store:
            subscription = await require_active(store, EntityType.SUBSCRIPTIONS, subscription_id)

            if request.name is not None:
                subscription.name = request.name
            if request.amount is not None:
                subscription.amount = request.amount
            if request.frequency is not None:
                subscription.frequency = request.frequency.value
            if "custom_frequency_days" in fields:
                subscription.custom_frequency_days = request.custom_frequency_days
            if request.next_payment_date is not None:
                subscription.next_payment_date = optional_datetime(
                    request.next_payment_date, "nextPaymentDate"
                )
            if request.account_id:
                await require_active(store, EntityType.ACCOUNTS, request.account_id)
                subscription.account_id = request.account_id
            if "category_id" in fields:
                if request.category_id:
                    await require_active(store, EntityType.CATEGORIES, request.category_id)
                subscription.category_id = request.category_id or None
            if request.currency:
                subscription.currency = request.currency
            if "description" in fields:
                subscription.description = request.description
            if request.auto_payment is not None:
                subscription.auto_payment = request.auto_payment

            try:
                billing_period(subscription.frequency, subscription.custom_frequency_days)
            except ValueError as e:
                raise ValidationError(str(e)) from e

            subscription.updated_at = now_utc()
            await store.subscriptions.save(subscription)

        return subscription.to_dict()

    async def change_status(self, subscription_id: str, status: str) -> dict[str, Any]:
        """구독 상태 변경 (active / paused / cancelled)

        Raises:
            NotFoundError: 없거나 보관됨
            ValidationError: 이미 같은 상태이거나 허용되지 않은 전이
        """
        async with self.store.unit_of_work() as store:
            subscription = await require_active(store, EntityType.SUBSCRIPTIONS, subscription_id)
            if subscription.status == status:
                raise ValidationError(f"Subscription already has status {status}")

            machine = SubscriptionStateMachine(subscription.status)
            try:
                subscription.status = machine.transition(status)
            except StateMachineError as e:
                raise ValidationError(str(e)) from e
            subscription.updated_at = now_utc()
            await store.subscriptions.save(subscription)

        logger.info(
            "구독 상태 변경",
            extra={"subscription_id": subscription.id, "status": subscription.status},
        )
        return subscription.to_dict()

    async def record_payment(
        self, subscription_id: str, request: SubscriptionPaymentRequest
    ) -> dict[str, Any]:
        """구독 결제"""
        result = await self.ledger.record_subscription_payment(
            subscription_id,
            amount=request.amount,
            description=request.description,
        )
        return result.to_dict()
