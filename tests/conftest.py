"""
pytest 공통 fixture 정의

인메모리 SQLite 기반 EntityStore / LedgerEngine / ArchiveManager
"""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.archive.manager import ArchiveManager
from core.archive.resolver import ReferenceResolver
from core.config.loader import Settings
from core.ledger.engine import LedgerEngine
from core.storage.entity_store import EntityStore


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """테스트마다 Settings 싱글턴 초기화 (config/settings.yaml 무시)"""
    monkeypatch.setenv("FINLEDGER_SETTINGS", str(tmp_path / "missing-settings.yaml"))
    Settings.reset()
    yield
    Settings.reset()


@pytest_asyncio.fixture
async def db():
    """스키마가 초기화된 인메모리 DB"""
    adapter = SQLiteAdapter(":memory:")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def store(db: SQLiteAdapter) -> EntityStore:
    return EntityStore(db)


@pytest.fixture
def ledger(store: EntityStore) -> LedgerEngine:
    return LedgerEngine(store)


@pytest.fixture
def resolver() -> ReferenceResolver:
    return ReferenceResolver()


@pytest.fixture
def archive(store: EntityStore, resolver: ReferenceResolver) -> ArchiveManager:
    return ArchiveManager(store, resolver)
