"""
Web API 테스트 fixture

lifespan 대신 인메모리 Runtime을 직접 설정하고 ASGITransport로 호출
"""

import httpx
import pytest_asyncio

from core.archive.manager import ArchiveManager
from core.archive.resolver import ReferenceResolver
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore
from web.app import create_app
from web.dependencies import Runtime, set_runtime


@pytest_asyncio.fixture
async def client(
    store: EntityStore,
    ledger: LedgerEngine,
    archive: ArchiveManager,
    resolver: ReferenceResolver,
):
    set_runtime(Runtime(store=store, ledger=ledger, archive=archive, resolver=resolver))
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    set_runtime(None)
