"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → finledger/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

# 인메모리 SQLite 경로
MEMORY_DB: str = ":memory:"


class Defaults:
    """기본값 상수"""

    CURRENCY: str = "RUB"
    CATEGORY_ICON: str = "category"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    PAGE: int = 1
    PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    # 다가오는 상환/결제 조회 기간 (일)
    UPCOMING_DAYS: int = 7
    MAX_UPCOMING_DAYS: int = 366
    # 부채 통계의 다가오는 상환 표시 개수
    STATS_UPCOMING_LIMIT: int = 5

    LOG_LEVEL: str = "INFO"
    VERSION: str = "1.0.0"


class Labels:
    """표시용 문자열 상수"""

    # 영구 삭제된 참조 대상 이름 뒤에 붙는 표식
    REMOVED_SUFFIX: str = " (archived/removed)"
    UNKNOWN_ACCOUNT: str = "Unknown account"
    UNKNOWN_CATEGORY: str = "Uncategorized"

    TRANSFER_DESCRIPTION: str = "Transfer between accounts"
    DEBT_PAYMENT_DESCRIPTION: str = "Debt payment"
    SUBSCRIPTION_PAYMENT_PREFIX: str = "Subscription payment: "
    GOAL_TRANSFER_PREFIX: str = "Transfer to goal: "
    REVERSAL_PREFIX: str = "Reversal: "


class Money:
    """금액 관련 상수"""

    ZERO: Decimal = Decimal("0")

    # 최소 단위 0.01, 정수부 최대 13자리
    PLACES: int = 2
    MAX_DIGITS: int = 15
    QUANTUM: Decimal = Decimal("0.01")
    LIMIT: Decimal = Decimal("10000000000000")


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    WEB_LOGS_DIR: Path = LOGS_DIR / "web"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # 파일 DB (settings.yaml에서 storage.db_path: file 지정 시)
    FILE_DB: Path = DATA_DIR / "finledger.db"


class EnvVars:
    """환경 변수 이름"""

    SETTINGS_PATH: str = "FINLEDGER_SETTINGS"
