"""
엔티티 저장소

컬렉션 테이블(accounts, transactions, ...)에 엔티티를 JSON 문서로 저장/조회.
종류별 인스턴스는 EntityStore가 만든다.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Generic, TypeVar

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.errors import NotFoundError
from core.types import EntityType
from core.utils.timezone import parse_datetime, to_iso

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """엔티티 저장소

    쓰기 메서드는 커밋하지 않는다. EntityStore.unit_of_work() 안에서 호출.

    Args:
        db: SQLite 어댑터
        entity_type: 컬렉션 종류 (테이블 이름)
        model: 엔티티 dataclass (to_dict/from_dict 제공)
    """

    def __init__(self, db: SQLiteAdapter, entity_type: EntityType, model: type[T]):
        self.db = db
        self.entity_type = entity_type
        self.model = model
        self._table = entity_type.value

    async def get(self, entity_id: str) -> T | None:
        """ID로 조회"""
        row = await self.db.fetchone(
            f"SELECT doc_json FROM {self._table} WHERE id = ?",
            (entity_id,),
        )
        if row is None:
            return None
        return self._from_row(row)

    async def require(self, entity_id: str) -> T:
        """ID로 조회

        Raises:
            NotFoundError: 존재하지 않는 경우
        """
        entity = await self.get(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} not found: {entity_id}")
        return entity

    async def list(self, statuses: list[str] | None = None) -> list[T]:
        """상태 필터 조회

        Args:
            statuses: 허용 상태 목록 (None이면 전체)

        Returns:
            삽입 순서대로 정렬된 엔티티 목록
        """
        if statuses is None:
            rows = await self.db.fetchall(
                f"SELECT doc_json FROM {self._table} ORDER BY seq"
            )
        elif not statuses:
            return []
        else:
            placeholders = ", ".join("?" for _ in statuses)
            rows = await self.db.fetchall(
                f"SELECT doc_json FROM {self._table} "
                f"WHERE status IN ({placeholders}) ORDER BY seq",
                tuple(statuses),
            )
        return [self._from_row(row) for row in rows]

    async def count(self, status: str) -> int:
        """상태별 개수"""
        row = await self.db.fetchone(
            f"SELECT COUNT(*) FROM {self._table} WHERE status = ?",
            (status,),
        )
        return int(row[0]) if row else 0

    async def oldest_updated_at(self, status: str) -> datetime | None:
        """해당 상태 엔티티 중 가장 오래된 updated_at"""
        row = await self.db.fetchone(
            f"SELECT MIN(updated_at) FROM {self._table} WHERE status = ?",
            (status,),
        )
        if row is None or row[0] is None:
            return None
        return parse_datetime(row[0])

    async def add(self, entity: T) -> None:
        """신규 저장"""
        await self.db.execute(
            f"INSERT INTO {self._table} (id, status, updated_at, doc_json) "
            f"VALUES (?, ?, ?, ?)",
            self._to_params(entity),
        )
        logger.debug(f"{self._table}: added {entity.id}")

    async def save(self, entity: T) -> None:
        """기존 엔티티 갱신

        Raises:
            NotFoundError: 존재하지 않는 경우
        """
        cursor = await self.db.execute(
            f"UPDATE {self._table} SET status = ?, updated_at = ?, doc_json = ? "
            f"WHERE id = ?",
            self._to_update_params(entity),
        )
        if cursor.rowcount == 0:
            raise NotFoundError(f"{self.model.__name__} not found: {entity.id}")

    async def save_many(self, entities: list[T]) -> None:
        """여러 엔티티를 한 번에 갱신"""
        if not entities:
            return
        await self.db.executemany(
            f"UPDATE {self._table} SET status = ?, updated_at = ?, doc_json = ? "
            f"WHERE id = ?",
            [self._to_update_params(entity) for entity in entities],
        )

    async def delete(self, entity_id: str) -> bool:
        """영구 삭제"""
        cursor = await self.db.execute(
            f"DELETE FROM {self._table} WHERE id = ?",
            (entity_id,),
        )
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # 내부
    # -------------------------------------------------------------------------

    def _from_row(self, row: tuple[Any, ...]) -> T:
        return self.model.from_dict(json.loads(row[0]))

    def _to_params(self, entity: T) -> tuple[str, str, str, str]:
        return (
            entity.id,
            entity.status,
            to_iso(entity.updated_at),
            json.dumps(entity.to_dict(), ensure_ascii=False),
        )

    def _to_update_params(self, entity: T) -> tuple[str, str, str, str]:
        return (
            entity.status,
            to_iso(entity.updated_at),
            json.dumps(entity.to_dict(), ensure_ascii=False),
            entity.id,
        )
