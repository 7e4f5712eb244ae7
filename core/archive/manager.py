"""
Archive Manager

엔티티 생명주기 (보관 → 복원 → 영구 삭제)와 보관함 조회/통계.

상태 전이는 core.domain.state_machines의 종류별 머신이 검증하고,
StateMachineError는 NotFoundError / ConflictError로 변환한다.
"""

import logging
from datetime import datetime
from typing import Any

from core.archive.resolver import ReferenceResolver
from core.constants import Defaults
from core.domain.state_machines import StateMachineError, lifecycle_machine
from core.errors import ConflictError, NotFoundError, ValidationError
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status, TransactionType
from core.utils.pagination import paginate
from core.utils.timezone import end_of_day, now_utc, parse_datetime, to_iso

logger = logging.getLogger(__name__)

ARCHIVED = Status.ARCHIVED.value

_LABELS: dict[EntityType, str] = {
    EntityType.ACCOUNTS: "Account",
    EntityType.TRANSACTIONS: "Transaction",
    EntityType.CATEGORIES: "Category",
    EntityType.GOALS: "Goal",
    EntityType.DEBTS: "Debt",
    EntityType.SUBSCRIPTIONS: "Subscription",
}


def parse_entity_type(value: EntityType | str) -> EntityType:
    """경로 세그먼트 → EntityType

    Raises:
        ValidationError: 알 수 없는 종류
    """
    if isinstance(value, EntityType):
        return value
    entity_type = EntityType.parse(value)
    if entity_type is None:
        raise ValidationError(f"Unknown archive type: {value}")
    return entity_type


class ArchiveManager:
    """Archive Manager

    Args:
        store: EntityStore
        resolver: 영구 삭제 시 참조 라벨을 고정할 ReferenceResolver
        page_limit: 보관함 목록 기본 페이지 크기
    """

    def __init__(
        self,
        store: EntityStore,
        resolver: ReferenceResolver | None = None,
        page_limit: int = Defaults.PAGE_LIMIT,
    ):
        self.store = store
        self.resolver = resolver or ReferenceResolver()
        self.page_limit = page_limit

    # =========================================================================
    # 상태 전이
    # =========================================================================

    async def archive(self, entity_type: EntityType | str, entity_id: str) -> Any:
        """보관 (금액 필드는 건드리지 않음)

        Raises:
            NotFoundError: 존재하지 않거나 이미 보관됨
        """
        kind = parse_entity_type(entity_type)

        async with self.store.unit_of_work() as store:
            entity = await self._get(store, kind, entity_id)
            machine = lifecycle_machine(kind, entity.status)
            if machine.is_archived:
                raise NotFoundError(f"{self._label(kind)} is already archived: {entity_id}")
            try:
                entity.status = machine.archive()
            except StateMachineError as e:
                raise NotFoundError(str(e)) from e
            entity.updated_at = now_utc()
            await store.repository(kind).save(entity)

        logger.info("보관", extra={"entity_type": kind.value, "entity_id": entity_id})
        return entity

    async def restore(self, entity_type: EntityType | str, entity_id: str) -> Any:
        """복원 (항상 active로)

        Raises:
            NotFoundError: 존재하지 않거나 보관 상태가 아님
        """
        kind = parse_entity_type(entity_type)

        async with self.store.unit_of_work() as store:
            entity = await self._get(store, kind, entity_id)
            machine = lifecycle_machine(kind, entity.status)
            if not machine.is_archived:
                raise NotFoundError(f"{self._label(kind)} is not archived: {entity_id}")
            try:
                entity.status = machine.restore()
            except StateMachineError as e:
                raise NotFoundError(str(e)) from e
            entity.updated_at = now_utc()
            await store.repository(kind).save(entity)

        logger.info("복원", extra={"entity_type": kind.value, "entity_id": entity_id})
        return entity

    async def delete(self, entity_type: EntityType | str, entity_id: str) -> None:
        """영구 삭제 (보관 상태에서만)

        참조 레코드 라벨 고정과 삭제가 하나의 unit of work.

        Raises:
            NotFoundError: 존재하지 않음
            ConflictError: 보관 상태가 아님
        """
        kind = parse_entity_type(entity_type)

        async with self.store.unit_of_work() as store:
            entity = await self._get(store, kind, entity_id)
            machine = lifecycle_machine(kind, entity.status)
            try:
                machine.delete()
            except StateMachineError as e:
                logger.warning(
                    "보관되지 않은 엔티티 삭제 거부",
                    extra={"entity_type": kind.value, "entity_id": entity_id},
                )
                raise ConflictError(
                    f"Only archived {kind.value} can be deleted permanently"
                ) from e

            await self.resolver.freeze(store, kind, entity)
            await store.repository(kind).delete(entity_id)

        logger.info("영구 삭제", extra={"entity_type": kind.value, "entity_id": entity_id})

    # =========================================================================
    # 조회
    # =========================================================================

    async def stats(self) -> dict[str, Any]:
        """보관함 통계

        Returns:
            {total, byType: {종류: 개수}, oldestDate}
        """
        by_type: dict[str, int] = {}
        oldest: datetime | None = None

        async with self.store.reading() as store:
            for kind in EntityType:
                repository = store.repository(kind)
                by_type[kind.value] = await repository.count(ARCHIVED)
                candidate = await repository.oldest_updated_at(ARCHIVED)
                if candidate is not None and (oldest is None or candidate < oldest):
                    oldest = candidate

        return {
            "total": sum(by_type.values()),
            "byType": by_type,
            "oldestDate": to_iso(oldest),
        }

    async def list(
        self,
        entity_type: EntityType | str,
        page: int = Defaults.PAGE,
        limit: int | None = None,
        search: str | None = None,
        start_date: datetime | str | None = None,
        end_date: datetime | str | None = None,
        transaction_type: TransactionType | str | None = None,
    ) -> dict[str, Any]:
        """보관함 목록

        Args:
            entity_type: 엔티티 종류
            page: 페이지 번호
            limit: 페이지 크기 (None이면 기본값)
            search: 이름/설명 부분 일치 (대소문자 무시)
            start_date: updatedAt 시작일
            end_date: updatedAt 종료일 (그날 끝까지 포함)
            transaction_type: 거래 유형 필터 (transactions 전용)

        Returns:
            {items, pagination: {total, totalPages, currentPage, limit}}

        Raises:
            ValidationError: 알 수 없는 종류, 종료일 < 시작일, 잘못된 날짜
        """
        kind = parse_entity_type(entity_type)
        start = self._parse_date(start_date, "startDate")
        end = self._parse_date(end_date, "endDate")
        if end is not None:
            end = end_of_day(end)
        if start is not None and end is not None and end < start:
            raise ValidationError("endDate must not be earlier than startDate")

        tx_type = None
        if transaction_type:
            try:
                tx_type = TransactionType(transaction_type).value
            except ValueError:
                raise ValidationError(f"Unknown transaction type: {transaction_type}") from None

        async with self.store.reading() as store:
            entities = await store.repository(kind).list([ARCHIVED])

            needle = search.strip().lower() if search else ""
            # updatedAt이 같으면 나중에 저장된 엔티티가 먼저
            matched = [
                entity
                for entity in reversed(entities)
                if self._matches(entity, needle)
                and (start is None or entity.updated_at >= start)
                and (end is None or entity.updated_at <= end)
                and (tx_type is None or getattr(entity, "type", None) == tx_type)
            ]
            matched.sort(key=lambda entity: entity.updated_at, reverse=True)
            page_items, pagination = paginate(matched, page, limit or self.page_limit)

            if kind == EntityType.TRANSACTIONS:
                items = await self.resolver.label_transactions(store, page_items)
            else:
                items = [entity.to_dict() for entity in page_items]

        for item in items:
            item["itemType"] = kind.value

        return {"items": items, "pagination": pagination}

    # =========================================================================
    # 내부
    # =========================================================================

    @staticmethod
    async def _get(store: EntityStore, kind: EntityType, entity_id: str) -> Any:
        entity = await store.repository(kind).get(entity_id)
        if entity is None:
            raise NotFoundError(f"{ArchiveManager._label(kind)} not found: {entity_id}")
        return entity

    @staticmethod
    def _label(kind: EntityType) -> str:
        return _LABELS[kind]

    @staticmethod
    def _matches(entity: Any, needle: str) -> bool:
        if not needle:
            return True
        fields = (entity.display_name, getattr(entity, "description", None))
        return any(needle in value.lower() for value in fields if value)

    @staticmethod
    def _parse_date(value: datetime | str | None, name: str) -> datetime | None:
        try:
            return parse_datetime(value)
        except ValueError:
            raise ValidationError(f"Invalid {name}: {value}") from None
