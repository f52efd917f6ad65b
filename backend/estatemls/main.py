# backend/estatemls/main.py
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from estatemls.core.errors import EstateError
from estatemls.core.logging import setup_logging
from estatemls.core.settings import settings
from estatemls.db import SessionLocal, close_db, init_db

from estatemls.api.properties import router as properties_router        # /api/properties
from estatemls.api.purchases import router as purchases_router          # /api/purchases
from estatemls.api.payments import router as payments_router            # /api/payments
from estatemls.api.invoices import router as invoices_router            # /api/invoices
from estatemls.api.notifications import router as notifications_router  # /api/notifications
from estatemls.api.users import router as users_router                  # /api/users
from estatemls.api.agents import router as agents_router                # /api/agents

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("estate api starting")
    yield
    close_db()
    logger.info("estate api stopped")


app = FastAPI(
    title="Estate MLS API",
    lifespan=lifespan,
)

# ───── CORS ─────
ALLOW_ALL = settings.ESTATE_API_ALLOW_ALL
app.add_middleware(
    CORSMiddleware,
    allow_origins=(["*"] if ALLOW_ALL else settings.cors_origins()),
    allow_origin_regex=(".*" if ALLOW_ALL else None),
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,  # identity travels in signed headers, not cookies
)


# ───── Request timing ─────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    extra = {
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "duration_ms": round(elapsed_ms, 1),
    }
    if elapsed_ms >= settings.LOG_SLOW_REQUEST_MS:
        logger.warning("slow request", extra=extra)
    else:
        logger.info("request", extra=extra)
    return response


# ───── Error handlers ─────
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(EstateError)
async def estate_error_handler(request: Request, exc: EstateError):
    if exc.status_code >= 500:
        logger.error("request failed", extra={"path": request.url.path, "error": exc.message})
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("database error", extra={"path": request.url.path})
    return _error(500, "Internal server error")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error", extra={"path": request.url.path})
    return _error(500, "Internal server error")


# ───── Health ─────
@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"db": True}
    except SQLAlchemyError:
        logger.exception("database health check failed")
        return {"db": False}


# ───── Routers ─────
app.include_router(properties_router)
app.include_router(purchases_router)
app.include_router(payments_router)
app.include_router(invoices_router)
app.include_router(notifications_router)
app.include_router(users_router)
app.include_router(agents_router)
