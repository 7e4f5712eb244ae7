"""
EntityStore / EntityRepository 통합 테스트

인메모리 SQLite에 JSON 문서로 저장/조회, unit of work 롤백
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from core.domain.models import Category, new_id
from core.errors import NotFoundError
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status
from core.utils.timezone import now_utc
from tests.helpers import add_account, add_category


class TestEntityRepository:
    """EntityRepository 테스트"""

    @pytest.mark.asyncio
    async def test_add_and_get(self, store: EntityStore) -> None:
        account = await add_account(store, "Wallet", "12.34")

        async with store.reading() as s:
            loaded = await s.accounts.get(account.id)

        assert loaded == account
        assert loaded.balance == Decimal("12.34")

    @pytest.mark.asyncio
    async def test_get_missing(self, store: EntityStore) -> None:
        async with store.reading() as s:
            assert await s.accounts.get("missing") is None
            with pytest.raises(NotFoundError):
                await s.accounts.require("missing")

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, store: EntityStore) -> None:
        first = await add_category(store, "B")
        second = await add_category(store, "A")

        async with store.reading() as s:
            categories = await s.categories.list()

        assert [c.id for c in categories] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_list_status_filter(self, store: EntityStore) -> None:
        active = await add_category(store, "Active")
        archived = Category(id=new_id(), name="Old", type="expense", status=Status.ARCHIVED.value)
        async with store.unit_of_work() as s:
            await s.categories.add(archived)

        async with store.reading() as s:
            only_active = await s.categories.list([Status.ACTIVE.value])
            nothing = await s.categories.list([])
            archived_count = await s.categories.count(Status.ARCHIVED.value)

        assert [c.id for c in only_active] == [active.id]
        assert nothing == []
        assert archived_count == 1

    @pytest.mark.asyncio
    async def test_save_updates_document(self, store: EntityStore) -> None:
        category = await add_category(store, "Food")
        category.name = "Groceries"

        async with store.unit_of_work() as s:
            await s.categories.save(category)

        async with store.reading() as s:
            assert (await s.categories.require(category.id)).name == "Groceries"

    @pytest.mark.asyncio
    async def test_save_missing(self, store: EntityStore) -> None:
        ghost = Category(id="ghost", name="Ghost", type="expense")

        with pytest.raises(NotFoundError):
            async with store.unit_of_work() as s:
                await s.categories.save(ghost)

    @pytest.mark.asyncio
    async def test_delete(self, store: EntityStore) -> None:
        category = await add_category(store)

        async with store.unit_of_work() as s:
            assert await s.categories.delete(category.id) is True
            assert await s.categories.delete(category.id) is False

    @pytest.mark.asyncio
    async def test_oldest_updated_at(self, store: EntityStore) -> None:
        old = Category(
            id=new_id(),
            name="Old",
            type="expense",
            status=Status.ARCHIVED.value,
            updated_at=now_utc() - timedelta(days=30),
        )
        recent = Category(id=new_id(), name="Recent", type="expense", status=Status.ARCHIVED.value)
        async with store.unit_of_work() as s:
            await s.categories.add(recent)
            await s.categories.add(old)

        async with store.reading() as s:
            oldest = await s.categories.oldest_updated_at(Status.ARCHIVED.value)
            none = await s.categories.oldest_updated_at(Status.ACTIVE.value)

        assert oldest == old.updated_at
        assert none is None


class TestUnitOfWork:
    """unit of work 테스트"""

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, store: EntityStore) -> None:
        """예외 시 같은 작업 단위의 모든 쓰기 취소"""
        with pytest.raises(RuntimeError):
            async with store.unit_of_work() as s:
                await s.categories.add(Category(id="c1", name="One", type="expense"))
                await s.categories.add(Category(id="c2", name="Two", type="expense"))
                raise RuntimeError("boom")

        async with store.reading() as s:
            assert await s.categories.list() == []

    @pytest.mark.asyncio
    async def test_repository_lookup(self, store: EntityStore) -> None:
        for entity_type in EntityType:
            assert store.repository(entity_type).entity_type == entity_type
