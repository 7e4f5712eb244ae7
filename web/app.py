"""
FastAPI 애플리케이션

라우터 등록, 예외 처리, 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.archive.manager import ArchiveManager
from core.archive.resolver import ReferenceResolver
from core.config.loader import get_settings
from core.constants import Defaults
from core.errors import FinanceError
from core.ledger.engine import LedgerEngine
from core.seed import seed_demo_data
from core.storage.entity_store import EntityStore
from web.dependencies import Runtime, set_runtime
from web.models.responses import ErrorResponse
from web.routes import (
    accounts,
    archive,
    categories,
    debts,
    goals,
    health,
    subscriptions,
    transactions,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리

    시작: DB 연결 → 스키마 초기화 → (선택) 데모 데이터 → 의존성 설정
    종료: 의존성 해제 → DB 연결 종료
    """
    settings = get_settings()

    db = SQLiteAdapter(settings.db_path)
    await db.connect()
    await init_schema(db)

    store = EntityStore(db)
    resolver = ReferenceResolver()
    runtime = Runtime(
        store=store,
        ledger=LedgerEngine(store),
        archive=ArchiveManager(store, resolver, settings.archive_page_limit),
        resolver=resolver,
    )

    if settings.seed_demo_data:
        await seed_demo_data(
            store, runtime.ledger, runtime.archive, settings.default_currency
        )

    set_runtime(runtime)
    logger.info("Web: 초기화 완료", extra={"db_path": str(settings.db_path)})

    try:
        yield
    finally:
        set_runtime(None)
        await db.close()


def create_app() -> FastAPI:
    """FastAPI 앱 생성"""
    app = FastAPI(
        title="FinLedger",
        description="Personal finance ledger API",
        version=Defaults.VERSION,
        lifespan=lifespan,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
    )

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FinanceError)
    async def finance_error_handler(request: Request, exc: FinanceError) -> JSONResponse:
        """도메인 예외 → {"message"} + status_code"""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """요청 검증 실패 → 400 {"message", "errors"}"""
        errors = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", ""),
                "type": error.get("type", ""),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request", "errors": errors},
        )

    # 라우터 등록 (보관함 라우터는 /api/{type}/{id}/... 와일드카드를 포함하므로 마지막)
    app.include_router(health.router)
    app.include_router(accounts.router)
    app.include_router(categories.router)
    app.include_router(transactions.router)
    app.include_router(goals.router)
    app.include_router(debts.router)
    app.include_router(subscriptions.router)
    app.include_router(archive.router)

    return app


app = create_app()
