"""
ReferenceResolver 통합 테스트

영구 삭제된 계좌/카테고리를 참조하는 레코드의 표시 이름 고정
"""

from decimal import Decimal

import pytest

from core.archive.manager import ArchiveManager
from core.archive.resolver import ReferenceResolver, removed_label, resolve_label
from core.constants import Labels
from core.domain.models import Goal, new_id
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from tests.helpers import add_account, add_category


class TestResolveLabel:
    """resolve_label 우선순위"""

    def test_live_name_wins(self) -> None:
        assert resolve_label("Card", "Card (archived/removed)", "x") == "Card"

    def test_frozen_label(self) -> None:
        assert resolve_label(None, "Card (archived/removed)", "x") == "Card (archived/removed)"

    def test_fallback(self) -> None:
        assert resolve_label(None, None, Labels.UNKNOWN_ACCOUNT) == Labels.UNKNOWN_ACCOUNT

    def test_removed_label(self) -> None:
        assert removed_label("Card") == "Card (archived/removed)"


class TestFreeze:
    """영구 삭제 시 라벨 고정"""

    @pytest.mark.asyncio
    async def test_deleted_account_label(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        """삭제된 계좌를 참조하는 거래는 "<이름> (archived/removed)" 표시"""
        card = await add_account(store, "Card", "100")
        savings = await add_account(store, "Savings", "0")
        expense = await ledger.record_transaction(card.id, "expense", "10")
        transfer = await ledger.transfer(card.id, savings.id, "20")

        await archive.archive("accounts", card.id)
        await archive.delete("accounts", card.id)

        async with store.reading() as s:
            stored_expense = await s.transactions.require(expense.id)
            stored_transfer = await s.transactions.require(transfer.transaction.id)
        assert stored_expense.account_id == card.id
        assert stored_expense.account_name == "Card (archived/removed)"
        assert stored_expense.account_deleted is True
        assert stored_transfer.account_deleted is True
        assert stored_transfer.to_account_deleted is False

    @pytest.mark.asyncio
    async def test_labels_survive_after_delete(
        self,
        store: EntityStore,
        ledger: LedgerEngine,
        archive: ArchiveManager,
        resolver: ReferenceResolver,
    ) -> None:
        card = await add_account(store, "Card", "100")
        savings = await add_account(store, "Savings", "0")
        transfer = await ledger.transfer(card.id, savings.id, "20")
        await archive.archive("accounts", savings.id)
        await archive.delete("accounts", savings.id)

        async with store.reading() as s:
            tx = await s.transactions.require(transfer.transaction.id)
            labelled = await resolver.label_transactions(s, [tx])

        assert labelled[0]["accountName"] == "Card"
        assert labelled[0]["toAccountName"] == "Savings (archived/removed)"
        assert labelled[0]["toAccountDeleted"] is True

    @pytest.mark.asyncio
    async def test_deleted_category_label(
        self,
        store: EntityStore,
        ledger: LedgerEngine,
        archive: ArchiveManager,
        resolver: ReferenceResolver,
    ) -> None:
        account = await add_account(store, "Card", "100")
        category = await add_category(store, "Food")
        tx = await ledger.record_transaction(account.id, "expense", "10", category_id=category.id)

        await archive.archive("categories", category.id)
        await archive.delete("categories", category.id)

        async with store.reading() as s:
            stored = await s.transactions.require(tx.id)
            labelled = await resolver.label_transactions(s, [stored])
        assert stored.category_id == category.id
        assert stored.category_deleted is True
        assert labelled[0]["categoryName"] == "Food (archived/removed)"

    @pytest.mark.asyncio
    async def test_goal_transfer_history(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        account = await add_account(store, "Card", "100")
        goal = Goal(id=new_id(), name="Trip", target_amount=Decimal("500"))
        async with store.unit_of_work() as s:
            await s.goals.add(goal)
        await ledger.transfer_to_goal(goal.id, account.id, "30")

        await archive.archive("accounts", account.id)
        await archive.delete("accounts", account.id)

        async with store.reading() as s:
            stored = await s.goals.require(goal.id)
        entry = stored.transfer_history[0]
        assert entry.from_account_id == account.id
        assert entry.from_account_name == "Card (archived/removed)"
        assert entry.from_account_deleted is True

    @pytest.mark.asyncio
    async def test_unrelated_records_untouched(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        keep = await add_account(store, "Keep", "100")
        drop = await add_account(store, "Drop", "0")
        tx = await ledger.record_transaction(keep.id, "income", "1")

        await archive.archive("accounts", drop.id)
        await archive.delete("accounts", drop.id)

        async with store.reading() as s:
            stored = await s.transactions.require(tx.id)
        assert stored.account_name is None
        assert stored.account_deleted is False

    @pytest.mark.asyncio
    async def test_live_names_reflect_renames(
        self, store: EntityStore, ledger: LedgerEngine, resolver: ReferenceResolver
    ) -> None:
        """살아있는 계좌는 현재 이름으로 표시"""
        account = await add_account(store, "Card", "100")
        tx = await ledger.record_transaction(account.id, "income", "1")
        account = (await _reload(store, account.id))
        account.name = "Main card"
        async with store.unit_of_work() as s:
            await s.accounts.save(account)

        async with store.reading() as s:
            labelled = await resolver.label_transactions(s, [await s.transactions.require(tx.id)])

        assert labelled[0]["accountName"] == "Main card"
        assert "categoryName" in labelled[0]
        assert labelled[0]["categoryName"] is None


async def _reload(store: EntityStore, account_id: str):
    async with store.reading() as s:
        return await s.accounts.require(account_id)
