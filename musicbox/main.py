"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from musicbox.api import health
from musicbox.api import router as api_router
from musicbox.core.config import get_settings, settings
from musicbox.core.database import SessionLocal, engine
from musicbox.core.errors import MusicboxError, Unauthenticated
from musicbox.core.gate import authenticate, is_protected
from musicbox.services.bootstrap import ensure_admin, ensure_directories, ensure_schema
from musicbox.services.counters import EventCounters

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Failures here (unwritable directories, broken database) abort startup.
    ensure_directories(settings)
    ensure_schema(engine)
    db = SessionLocal()
    try:
        ensure_admin(db, settings)
    finally:
        db.close()
    logger.info(
        "Musicbox API ready (env=%s, release=%s, port=%s)",
        settings.APP_ENV,
        settings.RELEASE,
        settings.PORT,
    )
    yield
    logger.info("Shutting down Musicbox API")
    engine.dispose()


app = FastAPI(
    title="Musicbox API",
    version="2.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)
app.state.counters = EventCounters()


def _error_response(exc: MusicboxError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


@app.middleware("http")
async def access_gate(request: Request, call_next):
    """Count every request and require a bearer token on protected path prefixes."""
    request.app.state.counters.increment("requests")
    if is_protected(request.url.path):
        try:
            request.state.user = authenticate(
                request.headers.get("authorization"), get_settings()
            )
        except Unauthenticated as e:
            return _error_response(e)
    return await call_next(request)


# Added after the gate so it wraps it: 401 responses carry CORS headers too.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(MusicboxError)
async def musicbox_error_handler(request: Request, exc: MusicboxError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        content = {"error": "not found", "path": request.url.path}
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


app.include_router(api_router, prefix="/api")
app.include_router(health.router, tags=["health"])


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Musicbox API", "env": settings.APP_ENV, "release": settings.RELEASE}
