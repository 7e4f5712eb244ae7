"""
SQLite 어댑터

엔티티 저장소의 물리 계층. 파일 DB는 WAL 모드, 기본값은 인메모리 DB.
하나의 연결을 앱 수명 동안 공유하며 트랜잭션 컨텍스트 매니저를 제공한다.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from core.constants import MEMORY_DB
from core.types import EntityType

logger = logging.getLogger(__name__)


def is_memory_path(db_path: Path | str) -> bool:
    """인메모리 DB 경로 여부"""
    return str(db_path) == MEMORY_DB


async def create_connection(db_path: Path | str) -> aiosqlite.Connection:
    """SQLite 연결 생성

    Args:
        db_path: DB 파일 경로 또는 ":memory:"

    Returns:
        aiosqlite 연결 객체
    """
    db_path_str = str(db_path)

    if is_memory_path(db_path_str):
        conn = await aiosqlite.connect(MEMORY_DB)
    else:
        # 디렉토리가 없으면 생성
        Path(db_path_str).parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(db_path_str)

        # WAL 모드 설정
        await conn.execute("PRAGMA journal_mode=WAL")

        # 동시 접근 설정
        await conn.execute("PRAGMA busy_timeout=30000")  # 30초 대기

    logger.info(
        "SQLite 연결 생성",
        extra={"db_path": db_path_str},
    )

    return conn


class SQLiteAdapter:
    """SQLite 어댑터

    트랜잭션 컨텍스트 매니저 제공.

    Args:
        db_path: DB 파일 경로 또는 ":memory:"

    사용 예시:
    ```python
    adapter = SQLiteAdapter(":memory:")
    await adapter.connect()

    async with adapter.transaction() as conn:
        await conn.execute("INSERT INTO ...")

    await adapter.close()
    ```
    """

    def __init__(self, db_path: Path | str = MEMORY_DB):
        self.db_path = db_path if is_memory_path(db_path) else Path(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_connected(self) -> bool:
        """연결 상태 확인"""
        return self._conn is not None

    async def connect(self) -> None:
        """연결 생성"""
        if self._conn is not None:
            return

        self._conn = await create_connection(self.db_path)

    async def close(self) -> None:
        """연결 종료"""
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("SQLite 연결 종료")

    async def execute(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Cursor:
        """SQL 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        if parameters:
            return await self._conn.execute(sql, parameters)
        return await self._conn.execute(sql)

    async def executemany(
        self,
        sql: str,
        parameters: list[tuple[Any, ...]],
    ) -> aiosqlite.Cursor:
        """SQL 다중 실행"""
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        return await self._conn.executemany(sql, parameters)

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회"""
        cursor = await self.execute(sql, parameters)
        return await cursor.fetchone()

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회"""
        cursor = await self.execute(sql, parameters)
        return list(await cursor.fetchall())

    async def commit(self) -> None:
        """커밋"""
        if self._conn is not None:
            await self._conn.commit()

    async def rollback(self) -> None:
        """롤백"""
        if self._conn is not None:
            await self._conn.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """트랜잭션 컨텍스트 매니저

        성공 시 자동 커밋, 예외 시 자동 롤백.

        사용 예시:
        ```python
        async with adapter.transaction() as conn:
            await conn.execute("INSERT INTO ...")
            # 성공 시 자동 커밋
        ```
        """
        if self._conn is None:
            raise RuntimeError("Not connected to database")

        try:
            yield self._conn
            await self._conn.commit()
        except Exception:
            await self._conn.rollback()
            raise

    # -------------------------------------------------------------------------
    # 컨텍스트 매니저
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "SQLiteAdapter":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def init_schema(adapter: SQLiteAdapter) -> None:
    """스키마 초기화 (컬렉션 테이블 생성)

    엔티티 종류마다 하나의 문서 테이블. 조회 필터에 쓰는 status/updated_at만
    컬럼으로 분리하고 나머지는 doc_json에 저장한다.

    Args:
        adapter: 연결된 SQLiteAdapter
    """
    for entity_type in EntityType:
        table = entity_type.value
        await adapter.execute(f"""
            CREATE TABLE IF NOT EXISTS {table} (
                seq          INTEGER PRIMARY KEY AUTOINCREMENT,
                id           TEXT NOT NULL UNIQUE,
                status       TEXT NOT NULL,
                updated_at   TEXT NOT NULL,
                doc_json     TEXT NOT NULL,
                created_at   TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)

        await adapter.execute(f"""
            CREATE INDEX IF NOT EXISTS ix_{table}_status
            ON {table}(status, updated_at)
        """)

    await adapter.commit()

    logger.info("스키마 초기화 완료")
