"""
보관함 (Archive)

Archive Manager: 보관 → 복원 → 영구 삭제 생명주기, 보관함 목록/통계
Reference Resolver: 영구 삭제된 계좌/카테고리의 표시 이름 고정
"""

from core.archive.manager import ArchiveManager, parse_entity_type
from core.archive.resolver import ReferenceResolver, removed_label, resolve_label

__all__ = [
    "ArchiveManager",
    "ReferenceResolver",
    "parse_entity_type",
    "removed_label",
    "resolve_label",
]
