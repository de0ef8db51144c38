"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes (search, billing, account, Stripe webhook)
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.supabase import connect_to_supabase, close_supabase_connection, check_supabase_health
from app.api import account, billing, search, webhook
from utils.time_utils import utc_now_iso

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

BUILT_AT = utc_now_iso()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("🚀 Starting SmartSaver API...")

    try:
        validate_settings()
        logger.info("✅ Configuration validated")

        if not settings.stripe_configured:
            logger.warning("⚠️ STRIPE_SECRET_KEY not set - checkout and portal will fail")
        if not settings.STRIPE_WEBHOOK_SECRET:
            logger.warning("⚠️ STRIPE_WEBHOOK_SECRET not set - all webhooks will be rejected")

        await connect_to_supabase()

        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"CORS allowed: {settings.allowed_origins}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info("🛑 Shutting down SmartSaver API...")

    try:
        await close_supabase_connection()
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


app = FastAPI(
    title="SmartSaver API",
    description="Grocery price comparison: demo search and Stripe subscription billing",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

# Only the frontends may call from a browser; requests without an
# Origin header (curl, Stripe) are not affected by CORS.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(search.router, prefix="/api", tags=["Search"])
app.include_router(billing.router, prefix="/api", tags=["Billing"])
app.include_router(account.router, prefix="/api", tags=["Account"])
app.include_router(webhook.router, prefix="/webhooks", tags=["Webhooks"])


@app.get("/healthz", tags=["Health"])
async def healthz():
    """Liveness probe."""
    return {"ok": True, "ts": utc_now_iso()}


@app.get("/ready", tags=["Health"])
async def readiness_check():
    """
    Readiness probe - the profile store must answer.
    """
    if await check_supabase_health():
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": "profile_store_unavailable"}
    )


@app.get("/debug/routes", tags=["Health"], include_in_schema=False)
async def debug_routes():
    """
    Lists registered routes and the effective frontend/CORS settings.
    """
    if not settings.DEBUG_ROUTES:
        raise HTTPException(status_code=404, detail="Not Found")

    # app.routes may hold unflattened included routers; the schema does not
    routes = [
        {"methods": sorted(method.upper() for method in operations), "path": path}
        for path, operations in app.openapi()["paths"].items()
    ]
    return {
        "built": BUILT_AT,
        "routes": routes,
        "stripeConfigured": settings.stripe_configured,
        "frontendUrl": settings.FRONTEND_URL,
        "corsAllowed": settings.allowed_origins,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
