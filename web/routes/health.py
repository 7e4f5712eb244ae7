"""
헬스 체크 엔드포인트

GET /api/health - 서버 상태 확인
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import is_memory_path
from core.config.loader import Settings
from core.constants import Defaults
from web.dependencies import get_app_settings
from web.models.responses import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, version, storage 정보
    """
    return HealthResponse(
        status="ok",
        version=Defaults.VERSION,
        storage="memory" if is_memory_path(settings.db_path) else "file",
    )
