"""
스토리지 모듈

엔티티 컬렉션 저장소(EntityRepository)와 unit of work를 제공하는 EntityStore
"""

from core.storage.entity_store import EntityStore
from core.storage.repository import EntityRepository

__all__ = [
    "EntityStore",
    "EntityRepository",
]
