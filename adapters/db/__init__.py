"""
데이터베이스 어댑터

SQLite 연결 관리 (파일: WAL 모드, 기본: 인메모리).
"""

from adapters.db.sqlite_adapter import (
    SQLiteAdapter,
    create_connection,
    init_schema,
    is_memory_path,
)

__all__ = [
    "SQLiteAdapter",
    "create_connection",
    "init_schema",
    "is_memory_path",
]
