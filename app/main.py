# app/main.py
"""
FastAPI application entry point.
Includes session cookie + timing middleware, error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.routers import vehicles, orders, contact, health
from app.database import create_tables, SessionLocal
from app.config import settings
from app.exceptions import LeasingError
from app.services.catalog_service import seed_catalog
from app.services.last_order_cache import LastOrderCache
from app.utils.logger import get_logger
import time
import uuid

logger = get_logger(__name__)

app = FastAPI(
    title="Car Leasing API",
    description="Vehicle catalog, rent/buy ordering and contact form.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Last order per browser session, expires with the session cookie
app.state.last_orders = LastOrderCache(ttl_seconds=settings.SESSION_TTL_SECONDS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Session Cookie Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def session_cookie(request: Request, call_next):
    """Give every client an opaque session id cookie; handlers read request.state.session_id."""
    session_id = request.cookies.get(settings.SESSION_COOKIE_NAME)
    is_new = not session_id
    if is_new:
        session_id = uuid.uuid4().hex
    request.state.session_id = session_id

    response = await call_next(request)
    if is_new:
        response.set_cookie(
            settings.SESSION_COOKIE_NAME,
            session_id,
            max_age=settings.SESSION_TTL_SECONDS,
            httponly=True,
            samesite="lax",
        )
    return response


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Error Handlers ───────────────────────────────────────────────────────────
@app.exception_handler(LeasingError)
async def leasing_error_handler(request: Request, exc: LeasingError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"{request.method} {request.url.path} malformed body: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Missing required fields"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(vehicles.router, prefix="/api", tags=["🚘 Catalog"])
app.include_router(orders.router,   prefix="/api", tags=["🧾 Orders"])
app.include_router(contact.router,  prefix="/api", tags=["✉️ Contact"])
app.include_router(health.router,   prefix="/api", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Car Leasing backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_catalog(db)
        finally:
            db.close()
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")


@app.on_event("shutdown")
async def shutdown():
    purged = app.state.last_orders.purge_expired()
    logger.info(f"🛑 Car Leasing backend shutting down ({purged} stale sessions dropped)")
