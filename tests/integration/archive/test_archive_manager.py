"""
ArchiveManager 통합 테스트

보관 → 복원 → 영구 삭제 생명주기, 보관함 목록/통계
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.archive.manager import ArchiveManager, parse_entity_type
from core.domain.models import Debt, Goal, Subscription, new_id
from core.errors import ConflictError, NotFoundError, ValidationError
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status
from core.utils.timezone import now_utc, to_iso
from tests.helpers import add_account, add_category


class TestParseEntityType:
    def test_known(self) -> None:
        assert parse_entity_type("debts") == EntityType.DEBTS
        assert parse_entity_type(EntityType.GOALS) == EntityType.GOALS

    def test_unknown(self) -> None:
        with pytest.raises(ValidationError):
            parse_entity_type("budgets")


class TestLifecycle:
    """archive / restore / delete 테스트"""

    @pytest.mark.asyncio
    async def test_archive_keeps_balance(
        self, store: EntityStore, archive: ArchiveManager
    ) -> None:
        """보관은 금액 필드를 건드리지 않음"""
        account = await add_account(store, balance="123.45")

        archived = await archive.archive(EntityType.ACCOUNTS, account.id)

        assert archived.status == Status.ARCHIVED.value
        assert archived.balance == Decimal("123.45")
        assert archived.updated_at >= account.updated_at

    @pytest.mark.asyncio
    async def test_archive_twice(self, store: EntityStore, archive: ArchiveManager) -> None:
        category = await add_category(store)
        await archive.archive("categories", category.id)

        with pytest.raises(NotFoundError):
            await archive.archive("categories", category.id)

    @pytest.mark.asyncio
    async def test_archive_missing(self, archive: ArchiveManager) -> None:
        with pytest.raises(NotFoundError):
            await archive.archive("accounts", "missing")

    @pytest.mark.asyncio
    async def test_restore_returns_active(self, store: EntityStore, archive: ArchiveManager) -> None:
        """completed 목표도 복원하면 active"""
        goal = Goal(
            id=new_id(),
            name="Trip",
            target_amount=Decimal("10"),
            progress=Decimal("10"),
            status=Status.COMPLETED.value,
        )
        async with store.unit_of_work() as s:
            await s.goals.add(goal)
        await archive.archive("goals", goal.id)

        restored = await archive.restore("goals", goal.id)

        assert restored.status == Status.ACTIVE.value

    @pytest.mark.asyncio
    async def test_restore_not_archived(self, store: EntityStore, archive: ArchiveManager) -> None:
        account = await add_account(store)

        with pytest.raises(NotFoundError):
            await archive.restore("accounts", account.id)

    @pytest.mark.asyncio
    async def test_delete_requires_archive(self, store: EntityStore, archive: ArchiveManager) -> None:
        """보관되지 않은 엔티티 삭제는 409, 데이터는 그대로"""
        account = await add_account(store)

        with pytest.raises(ConflictError):
            await archive.delete("accounts", account.id)

        async with store.reading() as s:
            assert await s.accounts.get(account.id) is not None

    @pytest.mark.asyncio
    async def test_delete_archived(self, store: EntityStore, archive: ArchiveManager) -> None:
        category = await add_category(store)
        await archive.archive("categories", category.id)

        await archive.delete("categories", category.id)

        async with store.reading() as s:
            assert await s.categories.get(category.id) is None
        with pytest.raises(NotFoundError):
            await archive.delete("categories", category.id)

    @pytest.mark.asyncio
    async def test_paid_debt_lifecycle(self, store: EntityStore, archive: ArchiveManager) -> None:
        debt = Debt(
            id=new_id(),
            name="Loan",
            type="loan",
            initial_amount=Decimal("10"),
            current_amount=Decimal("0"),
            status=Status.PAID.value,
        )
        async with store.unit_of_work() as s:
            await s.debts.add(debt)

        with pytest.raises(ConflictError):
            await archive.delete("debts", debt.id)

        await archive.archive("debts", debt.id)
        await archive.delete("debts", debt.id)

        async with store.reading() as s:
            assert await s.debts.get(debt.id) is None

    @pytest.mark.asyncio
    async def test_archived_account_history_preserved(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        account = await add_account(store, balance="100")
        await ledger.record_transaction(account.id, "expense", "40")

        await archive.archive("accounts", account.id)
        restored = await archive.restore("accounts", account.id)

        assert restored.balance == Decimal("60")
        assert len(restored.history) == 1

    @pytest.mark.asyncio
    async def test_round_trip_account_unchanged(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        """보관 후 복원하면 status/updatedAt 외에는 그대로"""
        account = await add_account(store, balance="100")
        other = await add_account(store, "Savings")
        await ledger.record_transaction(account.id, "income", "25.50")
        await ledger.transfer(account.id, other.id, "10")
        before = await _snapshot(store, EntityType.ACCOUNTS, account.id)

        await archive.archive("accounts", account.id)
        await archive.restore("accounts", account.id)
        after = await _snapshot(store, EntityType.ACCOUNTS, account.id)

        assert _without_lifecycle(after) == _without_lifecycle(before)
        assert after["status"] == "active"
        assert len(after["history"]) == 2

    @pytest.mark.asyncio
    async def test_round_trip_subscription_unchanged(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        account = await add_account(store, balance="100")
        start = now_utc() - timedelta(days=3)
        subscription = Subscription(
            id=new_id(),
            name="Music",
            amount=Decimal("9.99"),
            frequency="monthly",
            account_id=account.id,
            start_date=start,
            next_payment_date=start,
        )
        async with store.unit_of_work() as s:
            await s.subscriptions.add(subscription)
        await ledger.record_subscription_payment(subscription.id)
        before = await _snapshot(store, EntityType.SUBSCRIPTIONS, subscription.id)

        await archive.archive("subscriptions", subscription.id)
        await archive.restore("subscriptions", subscription.id)
        after = await _snapshot(store, EntityType.SUBSCRIPTIONS, subscription.id)

        assert _without_lifecycle(after) == _without_lifecycle(before)
        assert len(after["paymentHistory"]) == 1


class TestStats:
    """보관함 통계"""

    @pytest.mark.asyncio
    async def test_empty(self, archive: ArchiveManager) -> None:
        stats = await archive.stats()

        assert stats["total"] == 0
        assert stats["oldestDate"] is None
        assert set(stats["byType"]) == {t.value for t in EntityType}

    @pytest.mark.asyncio
    async def test_counts(self, store: EntityStore, archive: ArchiveManager) -> None:
        accounts = [await add_account(store, f"A{i}") for i in range(2)]
        category = await add_category(store)
        for account in accounts:
            await archive.archive("accounts", account.id)
        await archive.archive("categories", category.id)

        stats = await archive.stats()

        assert stats["total"] == 3
        assert stats["byType"]["accounts"] == 2
        assert stats["byType"]["categories"] == 1
        assert stats["byType"]["debts"] == 0
        assert stats["oldestDate"] is not None

    @pytest.mark.asyncio
    async def test_oldest_date_in_archive_order(
        self, store: EntityStore, archive: ArchiveManager
    ) -> None:
        first = await add_account(store, "First")
        second = await add_category(store, "Second")

        archived_first = await archive.archive("accounts", first.id)
        await archive.archive("categories", second.id)

        stats = await archive.stats()

        assert stats["oldestDate"] == to_iso(archived_first.updated_at)

    @pytest.mark.asyncio
    async def test_oldest_date_is_earliest_updated_at(
        self, store: EntityStore, archive: ArchiveManager
    ) -> None:
        """보관되지 않은 레코드의 updatedAt은 무시"""
        now = now_utc()
        live = await add_account(store, "Live")
        live.updated_at = now - timedelta(days=30)
        accounts = [await add_account(store, f"A{i}") for i in range(3)]
        for account in accounts:
            await archive.archive("accounts", account.id)

        async with store.unit_of_work() as s:
            await s.accounts.save(live)
            for days, account in zip((2, 9, 5), accounts):
                stored = await s.accounts.require(account.id)
                stored.updated_at = now - timedelta(days=days)
                await s.accounts.save(stored)

        stats = await archive.stats()

        assert stats["oldestDate"] == to_iso(now - timedelta(days=9))


class TestList:
    """보관함 목록"""

    async def archive_categories(
        self, store: EntityStore, archive: ArchiveManager, names: list[str]
    ) -> list:
        result = []
        for name in names:
            category = await add_category(store, name)
            result.append(await archive.archive("categories", category.id))
        return result

    @pytest.mark.asyncio
    async def test_items_newest_first(self, store: EntityStore, archive: ArchiveManager) -> None:
        await self.archive_categories(store, archive, ["First", "Second", "Third"])

        page = await archive.list("categories")

        assert [item["name"] for item in page["items"]] == ["Third", "Second", "First"]
        assert all(item["itemType"] == "categories" for item in page["items"])
        assert page["pagination"] == {"total": 3, "totalPages": 1, "currentPage": 1, "limit": 10}

    @pytest.mark.asyncio
    async def test_only_archived(self, store: EntityStore, archive: ArchiveManager) -> None:
        await add_category(store, "Live")
        await self.archive_categories(store, archive, ["Gone"])

        page = await archive.list("categories")

        assert [item["name"] for item in page["items"]] == ["Gone"]

    @pytest.mark.asyncio
    async def test_pagination(self, store: EntityStore, archive: ArchiveManager) -> None:
        await self.archive_categories(store, archive, [f"C{i}" for i in range(5)])

        page = await archive.list("categories", page=2, limit=2)

        assert len(page["items"]) == 2
        assert page["pagination"]["totalPages"] == 3
        assert page["pagination"]["currentPage"] == 2

    @pytest.mark.asyncio
    async def test_default_page_limit(self, store: EntityStore) -> None:
        manager = ArchiveManager(store, page_limit=2)
        await self.archive_categories(store, manager, ["A", "B", "C"])

        page = await manager.list("categories")

        assert page["pagination"]["limit"] == 2
        assert len(page["items"]) == 2

    @pytest.mark.asyncio
    async def test_search_case_insensitive(
        self, store: EntityStore, archive: ArchiveManager
    ) -> None:
        await self.archive_categories(store, archive, ["Groceries", "Transport"])

        page = await archive.list("categories", search="GROC")

        assert [item["name"] for item in page["items"]] == ["Groceries"]

    @pytest.mark.asyncio
    async def test_date_range(self, store: EntityStore, archive: ArchiveManager) -> None:
        await self.archive_categories(store, archive, ["Today"])
        today = now_utc().date().isoformat()
        tomorrow = (now_utc() + timedelta(days=1)).date().isoformat()

        included = await archive.list("categories", start_date=today, end_date=today)
        excluded = await archive.list("categories", start_date=tomorrow)

        assert included["pagination"]["total"] == 1
        assert excluded["pagination"]["total"] == 0

    @pytest.mark.asyncio
    async def test_end_before_start(self, archive: ArchiveManager) -> None:
        with pytest.raises(ValidationError):
            await archive.list("categories", start_date="2024-02-01", end_date="2024-01-01")

    @pytest.mark.asyncio
    async def test_invalid_date(self, archive: ArchiveManager) -> None:
        with pytest.raises(ValidationError):
            await archive.list("categories", start_date="yesterday")

    @pytest.mark.asyncio
    async def test_unknown_type(self, archive: ArchiveManager) -> None:
        with pytest.raises(ValidationError):
            await archive.list("budgets")

    @pytest.mark.asyncio
    async def test_transaction_type_filter(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        account = await add_account(store, "Card", "100")
        income = await ledger.record_transaction(account.id, "income", "5")
        expense = await ledger.record_transaction(account.id, "expense", "5")
        await archive.archive("transactions", income.id)
        await archive.archive("transactions", expense.id)

        page = await archive.list("transactions", transaction_type="income")

        assert [item["id"] for item in page["items"]] == [income.id]
        # 거래는 계좌 표시 이름이 채워짐
        assert page["items"][0]["accountName"] == "Card"

    @pytest.mark.asyncio
    async def test_unknown_transaction_type(self, archive: ArchiveManager) -> None:
        with pytest.raises(ValidationError):
            await archive.list("transactions", transaction_type="refund")


async def _snapshot(store: EntityStore, kind: EntityType, entity_id: str) -> dict:
    async with store.reading() as s:
        entity = await s.repository(kind).require(entity_id)
    return entity.to_dict()


def _without_lifecycle(data: dict) -> dict:
    return {key: value for key, value in data.items() if key not in ("status", "updatedAt")}
