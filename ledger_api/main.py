import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_api.api.deps import get_bank_service
from ledger_api.api.router import api_router
from ledger_api.core.config import settings
from ledger_api.core.exceptions import LedgerError, StoreError
from ledger_api.core.logging_buffer import logging_buffer
from ledger_api.core.logging_setup import setup_logging
from ledger_api.services.bank import BankService

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "Internal server error"}


def _resolve_bank_service(app: FastAPI) -> BankService:
    provider = app.dependency_overrides.get(get_bank_service, get_bank_service)
    return provider()


@asynccontextmanager
async def lifespan(app: FastAPI):
    bank = _resolve_bank_service(app)
    bank.initialize()
    if settings.REQUEST_LOG_BUFFER_ENABLED:
        logging_buffer.start()
    logger.info("%s %s ready, data dir %s", settings.PROJECT_NAME, settings.VERSION, settings.DATA_DIR)

    yield

    logging_buffer.stop()


async def ledger_error_handler(request: Request, exc: LedgerError):
    if isinstance(exc, StoreError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        logging_buffer.record_error(f"Storage failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    loc = tuple(errors[0].get("loc", ())) if errors else ()
    if not loc or loc[0] == "body":
        return "Invalid request body"
    name = ".".join(str(part) for part in loc[1:])
    if loc[0] == "query":
        return f"Invalid query parameter: {name}"
    if loc[0] == "path":
        return f"Invalid path parameter: {name}"
    return f"Invalid {loc[0]}: {name}"


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _describe_validation_error(exc)})


async def logging_middleware(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path
    is_api = path.startswith(f"{settings.API_PREFIX}/") and not path.startswith(f"{settings.API_PREFIX}/logs")

    try:
        response = await call_next(request)
    except Exception as e:
        duration = round((time.time() - start_time) * 1000, 1)
        logger.exception("Unhandled error in %s %s", method, path)
        logging_buffer.record_error(f"Exception in {method} {path} ({duration}ms): {e}")
        return JSONResponse(status_code=500, content=INTERNAL_ERROR)

    if is_api:
        duration = round((time.time() - start_time) * 1000, 1)
        logging_buffer.record_request(method, path, response.status_code, duration)
    return response


def create_app(bank_service: BankService | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    if bank_service is not None:
        app.dependency_overrides[get_bank_service] = lambda: bank_service

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(logging_middleware)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": settings.VERSION}

    return app


app = create_app()


def main() -> None:
    import uvicorn

    setup_logging()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
