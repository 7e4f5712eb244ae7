"""
데모 데이터 생성 테스트
"""

import pytest

from core.archive.manager import ArchiveManager
from core.ledger.engine import LedgerEngine
from core.seed import is_empty, seed_demo_data
from core.storage.entity_store import EntityStore
from core.types import Status


class TestSeedDemoData:
    """seed_demo_data 테스트"""

    @pytest.mark.asyncio
    async def test_seed_populates_empty_store(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        assert await is_empty(store)

        counts = await seed_demo_data(store, ledger, archive)

        assert counts["accounts"] == 4
        assert not await is_empty(store)
        async with store.reading() as s:
            accounts = await s.accounts.list()
            transactions = await s.transactions.list()
            subscriptions = await s.subscriptions.list()
        assert len(transactions) > 0
        assert len(subscriptions) == 2
        assert sum(1 for a in accounts if a.status == Status.ARCHIVED.value) == 1

    @pytest.mark.asyncio
    async def test_seeded_balances_consistent(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        """시드 데이터도 balance == initial + Σ history"""
        await seed_demo_data(store, ledger, archive)

        async with store.reading() as s:
            accounts = await s.accounts.list()
        for account in accounts:
            assert account.balance == account.history_balance

    @pytest.mark.asyncio
    async def test_seed_skips_non_empty_store(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        await seed_demo_data(store, ledger, archive)

        assert await seed_demo_data(store, ledger, archive) == {}

        async with store.reading() as s:
            assert len(await s.accounts.list()) == 4

    @pytest.mark.asyncio
    async def test_currency(
        self, store: EntityStore, ledger: LedgerEngine, archive: ArchiveManager
    ) -> None:
        await seed_demo_data(store, ledger, archive, currency="EUR")

        async with store.reading() as s:
            accounts = await s.accounts.list()
        assert {a.currency for a in accounts} == {"EUR"}
