import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.deps import Settings, get_settings
from src.api.routes.pages import render_not_found_page
from src.api.schemas import ApiEnvelope
from src.app_shell.config import server_address
from src.components.tasks import TaskStore
from src.ports.clock import ClockPort
from src.rules.loader import load_rules_or_default
from src.rules.models import Rules

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
API_PREFIX = "/api"
INTERNAL_ERROR_MESSAGE = "internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    host, port = app.state.address
    logger.info("Server running on http://%s:%s", host, port)
    logger.info("%d tasks loaded", len(app.state.task_store))
    yield
    # Store is volatile; nothing to flush on shutdown


# --- Error Handlers ---


def _is_api_request(request: Request) -> bool:
    path = request.url.path
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiEnvelope(success=False, error=error).to_content(),
    )


async def http_exception_handler(request: Request, exc: Any) -> Any:
    """
    JSON envelope for API paths; HTML 404 page for unmatched page routes.

    A page URL hit with the wrong method has no handler either, so 405 is
    answered with the same 404 page.
    """
    if exc.status_code in (404, 405) and not _is_api_request(request):
        rules: Rules = getattr(request.app.state, "rules", None) or Rules()
        return HTMLResponse(
            content=render_not_found_page(rules.project.title),
            status_code=404,
        )

    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == 404 and detail == "Not Found":
        detail = "not found"
    return _error_response(exc.status_code, detail)


async def validation_exception_handler(request: Request, exc: Any) -> JSONResponse:
    """Malformed bodies and bad query values become a 400 envelope."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "invalid request")
        error = f"{location}: {message}" if location else message
    else:
        error = "invalid request"
    logger.warning("Invalid request to %s: %s", request.url.path, error)
    return _error_response(400, error)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, INTERNAL_ERROR_MESSAGE)


# --- App Factory ---


def create_app(
    rules: Rules | None = None,
    store: TaskStore | None = None,
    settings: Settings | None = None,
    clock: ClockPort | None = None,
) -> FastAPI:
    """
    Build the application and the single TaskStore it owns.

    When no store is given a fresh one is created and filled from rules.seed.
    """
    settings = settings or get_settings()
    if rules is None:
        rules = load_rules_or_default(settings.rules_path)

    if store is None:
        store = TaskStore(clock=clock)
        store.load_seed(rules.seed)

    app = FastAPI(
        title=rules.project.title,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.rules = rules
    app.state.task_store = store
    app.state.address = server_address(settings, rules)

    # --- Routers ---
    from src.api.routes import pages, tasks

    app.include_router(tasks.router, prefix=API_PREFIX, tags=["Tasks API"])
    app.include_router(pages.router, prefix="", tags=["Pages"])
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "tasks"}

    return app


# Entry point for `uvicorn src.api.main:app`. The CLI builds its own app via create_app.
app = create_app()
