import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from core import settings
from core.db import Database
from core.errors import StorageError, ValidationError
from core.log import configure_logging, install_loop_exception_handler
from ledger import router as ledger_router
from ledger.memory import MemoryLedgerStore
from ledger.repository import PostgresLedgerStore
from ledger.store import LedgerStore
from stats import router as stats_router

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Unexpected server error"


async def open_store() -> LedgerStore:
    """
    Build the ledger store selected by LEDGER_BACKEND.

    Fails (and so aborts startup) when the database is unreachable.
    """
    backend = settings.ledger_backend()
    if backend == "memory":
        logger.warning("ledger_backend=memory purchases are not persisted across restarts")
        return MemoryLedgerStore()

    database = Database()
    await database.open()
    logger.info("database_connected")
    return PostgresLedgerStore(database)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    fields = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            return "Request body is not valid JSON."
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return "Invalid or missing fields: " + ", ".join(fields)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(HTTPException)
    async def _http_error(_: Request, exc: HTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.exception("storage_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)

    # Registered before CORSMiddleware so it runs inside it and 500s keep CORS headers.
    @app.middleware("http")
    async def _unexpected_error(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("unexpected_error method=%s path=%s", request.method, request.url.path)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


def create_app(*, store: LedgerStore | None = None) -> FastAPI:
    """
    Build the API. Pass `store` to skip backend selection (tests, embedding).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        install_loop_exception_handler(asyncio.get_running_loop())
        owned = store is None
        if owned:
            try:
                app.state.store = await open_store()
            except Exception:
                logger.exception("startup_failed ledger store could not be opened")
                raise
        try:
            yield
        finally:
            if owned:
                await app.state.store.close()
                logger.info("ledger_store_closed")

    app = FastAPI(lifespan=lifespan)
    if store is not None:
        app.state.store = store

    register_error_handlers(app)

    # Browsers may only call this API from the sale's own sites.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(ledger_router.router, tags=["ledger"])
    app.include_router(stats_router.router, tags=["stats"])

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    configure_logging()
    logger.info("api_starting host=%s port=%s", settings.host(), settings.port())
    uvicorn.run(app, host=settings.host(), port=settings.port())


if __name__ == "__main__":
    run()
