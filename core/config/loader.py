"""
설정 로더

settings.yaml 로드 (파일이 없으면 기본값)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import MEMORY_DB, Defaults, EnvVars, Paths


@dataclass(frozen=True)
class AppSettings:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: str = MEMORY_DB
    seed_demo_data: bool = False
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    default_currency: str = Defaults.CURRENCY
    archive_page_limit: int = Defaults.PAGE_LIMIT
    log_level: str = Defaults.LOG_LEVEL


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def resolve_settings_path(path: Path | None = None) -> Path:
    """설정 파일 경로 결정

    우선순위: 인자 → FINLEDGER_SETTINGS 환경 변수 → config/settings.yaml
    """
    if path is not None:
        return path
    env_path = os.environ.get(EnvVars.SETTINGS_PATH)
    if env_path:
        return Path(env_path)
    return Paths.SETTINGS_FILE


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션은 매핑이어야 합니다")
    return section


def _positive_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsLoadError(f"settings.yaml의 '{key}' 값이 올바르지 않습니다: {value!r}")
    return value


def load_settings(path: Path | None = None) -> AppSettings:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 환경 변수 또는 기본 경로)

    Returns:
        AppSettings 인스턴스 (파일이 없으면 기본값)

    Raises:
        SettingsLoadError: 형식이 잘못되었거나 값이 유효하지 않은 경우
    """
    path = resolve_settings_path(path)

    if not path.exists():
        return AppSettings()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppSettings()
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    storage = _section(data, "storage")
    web = _section(data, "web")
    ledger = _section(data, "ledger")
    archive = _section(data, "archive")
    logging_config = _section(data, "logging")

    db_path = storage.get("db_path", MEMORY_DB)
    if not isinstance(db_path, str) or not db_path:
        raise SettingsLoadError(f"settings.yaml의 'storage.db_path' 값이 올바르지 않습니다: {db_path!r}")
    if db_path == "file":
        db_path = str(Paths.FILE_DB)

    seed_demo_data = storage.get("seed_demo_data", False)
    if not isinstance(seed_demo_data, bool):
        raise SettingsLoadError("settings.yaml의 'storage.seed_demo_data'는 true/false여야 합니다")

    currency = ledger.get("default_currency", Defaults.CURRENCY)
    if not isinstance(currency, str) or not currency:
        raise SettingsLoadError(f"settings.yaml의 'ledger.default_currency' 값이 올바르지 않습니다: {currency!r}")

    page_limit = _positive_int(archive.get("page_limit", Defaults.PAGE_LIMIT), "archive.page_limit")
    if page_limit > Defaults.MAX_PAGE_LIMIT:
        raise SettingsLoadError(
            f"settings.yaml의 'archive.page_limit'는 {Defaults.MAX_PAGE_LIMIT} 이하여야 합니다"
        )

    log_level = str(logging_config.get("level", Defaults.LOG_LEVEL)).upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise SettingsLoadError(f"settings.yaml의 'logging.level' 값이 올바르지 않습니다: {log_level}")

    return AppSettings(
        db_path=db_path,
        seed_demo_data=seed_demo_data,
        web_host=str(web.get("host", Defaults.WEB_HOST)),
        web_port=_positive_int(web.get("port", Defaults.WEB_PORT), "web.port"),
        default_currency=currency,
        archive_page_limit=page_limit,
        log_level=log_level,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _settings: AppSettings | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._settings is None:
            self._settings = load_settings(settings_path)

    @property
    def db_path(self) -> str:
        """DB 경로 (":memory:" 또는 파일 경로)"""
        assert self._settings is not None
        return self._settings.db_path

    @property
    def seed_demo_data(self) -> bool:
        """시작 시 데모 데이터 생성 여부"""
        assert self._settings is not None
        return self._settings.seed_demo_data

    @property
    def web_host(self) -> str:
        assert self._settings is not None
        return self._settings.web_host

    @property
    def web_port(self) -> int:
        assert self._settings is not None
        return self._settings.web_port

    @property
    def default_currency(self) -> str:
        """신규 계좌/구독 기본 통화"""
        assert self._settings is not None
        return self._settings.default_currency

    @property
    def archive_page_limit(self) -> int:
        """보관함 목록 기본 페이지 크기"""
        assert self._settings is not None
        return self._settings.archive_page_limit

    @property
    def log_level(self) -> str:
        assert self._settings is not None
        return self._settings.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._settings = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
