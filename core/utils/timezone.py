"""
타임존 유틸리티

내부 저장: UTC 원칙 준수를 위한 헬퍼 함수.
JSON 경계에서는 ISO 8601 문자열을 사용한다.
"""

from datetime import date, datetime, time, timezone


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주하고, aware datetime은 UTC로 변환

    Args:
        dt: datetime 객체

    Returns:
        UTC datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: str | datetime | date | None) -> datetime | None:
    """ISO 문자열/날짜를 UTC datetime으로 변환

    "2024-01-10", "2024-01-10T12:00:00Z", "2024-01-10T12:00:00+03:00" 모두 허용.

    Args:
        value: ISO 8601 문자열, datetime, date 또는 None

    Returns:
        UTC datetime 또는 None

    Raises:
        ValueError: 형식이 잘못된 경우

    Example:
        >>> parse_datetime("2024-01-10")
        datetime(2024, 1, 10, 0, 0, tzinfo=timezone.utc)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def to_iso(dt: datetime | None) -> str | None:
    """UTC datetime → ISO 8601 문자열 (None 유지)"""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()


def end_of_day(dt: datetime) -> datetime:
    """해당 날짜의 마지막 순간 (23:59:59.999999)

    종료일 필터를 그날 끝까지 포함하기 위해 사용.
    """
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)
