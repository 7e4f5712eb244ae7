"""
서비스 공통 헬퍼

쿼리 파라미터 필터 파싱, 활성 엔티티 조회 등
"""

from datetime import datetime
from typing import Any

from core.domain.state_machines import statuses_for
from core.errors import NotFoundError, ValidationError
from core.storage.entity_store import EntityStore
from core.types import EntityType, Status
from core.utils.timezone import parse_datetime


def split_csv(value: str | None) -> list[str]:
    """"active,paused" → ["active", "paused"] (빈 항목 제거)"""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def status_filter(
    entity_type: EntityType,
    value: str | None,
    default: list[str] | None = None,
) -> list[str]:
    """상태 필터 파싱 + 검증

    Args:
        entity_type: 엔티티 종류
        value: 쉼표로 구분된 상태 목록 (None/빈 값이면 default)
        default: 기본 상태 목록 (None이면 보관 외 전체)

    Raises:
        ValidationError: 해당 종류가 가질 수 없는 상태
    """
    allowed = statuses_for(entity_type)
    statuses = split_csv(value)
    if not statuses:
        if default is not None:
            return default
        return [s for s in allowed if s != Status.ARCHIVED.value]

    unknown = [s for s in statuses if s not in allowed]
    if unknown:
        raise ValidationError(
            f"Unknown status for {entity_type.value}: {', '.join(unknown)}"
        )
    return statuses


def optional_datetime(value: datetime | str | None, name: str) -> datetime | None:
    """날짜 입력 → UTC datetime (None 유지)

    Raises:
        ValidationError: 형식이 잘못된 경우
    """
    try:
        return parse_datetime(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value}") from None


async def require_active(store: EntityStore, entity_type: EntityType, entity_id: str) -> Any:
    """보관되지 않은 엔티티 조회

    Raises:
        NotFoundError: 존재하지 않거나 보관됨
    """
    repository = store.repository(entity_type)
    entity = await repository.get(entity_id)
    if entity is None or entity.status == Status.ARCHIVED.value:
        raise NotFoundError(f"{repository.model.__name__} not found: {entity_id}")
    return entity
