from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from staticapi.api.middleware import LowercasePathMiddleware, secret_gate
from staticapi.core.config import Settings
from staticapi.core.locks import KeyedLocks
from staticapi.core.logging import configure_logging
from staticapi.core.time_utils import utcnow
from staticapi.db.database import DocumentStore
from staticapi.routers.statics import router as statics_router

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    owned = app.state.store is None
    if owned:
        app.state.store = DocumentStore.from_settings(app.state.settings)
    # no migrations: the entities table is created if missing
    await app.state.store.create_all()
    try:
        yield
    finally:
        if owned:
            await app.state.store.dispose()


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Static Tracker Backend",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.clock = clock
    app.state.upsert_locks = KeyedLocks()

    app.middleware("http")(secret_gate)
    app.add_middleware(LowercasePathMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return PlainTextResponse("Invalid payload", status_code=400)

    app.include_router(statics_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    # registered last: any other path or method
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def not_found(path: str):
        return PlainTextResponse("Not found", status_code=404)

    return app


app = create_app()
