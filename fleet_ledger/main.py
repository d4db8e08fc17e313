"""
fleet_ledger/main.py
============================================
FastAPI Application for the Fleet Trip Ledger
============================================

Entry point of the trip ledger service. Admins and drivers record trips;
the service keeps driver/vehicle snapshots on each trip, handles the
soft-delete lifecycle and derives revenue, expense and profit summaries.

Architecture Overview:
---------------------
- REST API: /trips endpoints (also mounted under /api/trips)
- Caller identity: bearer JWT issued by the separate auth service
- Persistence: SQLAlchemy sessions, one per request
- Errors: LedgerError subclasses mapped to JSON bodies by the handlers below

Version: see Settings.PROJECT_VERSION
"""

# Environment Configuration
from dotenv import load_dotenv
import os
import traceback
load_dotenv()

# FastAPI Core
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.middleware.cors import CORSMiddleware

from fleet_ledger.Core.config import settings
from fleet_ledger.Core.errors import LedgerError, UnexpectedError, ValidationError
from fleet_ledger.Controller.Routes import trips
from fleet_ledger.DB.database import create_all_tables, test_db_connection


# ============================================================
# DEPLOYMENT CONFIGURATION #1: ROOT PATH HANDLING
# ============================================================
ROOT_PATH = os.getenv("ROOT_PATH", "").strip()
if ROOT_PATH:
    if not ROOT_PATH.startswith("/"):
        ROOT_PATH = "/" + ROOT_PATH
    if ROOT_PATH.endswith("/"):
        ROOT_PATH = ROOT_PATH[:-1]


class StripPrefixMiddleware(BaseHTTPMiddleware):
    """
    Remove the ROOT_PATH prefix from incoming requests.

    Example:
        ROOT_PATH = "/ledger"
        Incoming request: /ledger/trips/stats
        FastAPI receives: /trips/stats
    """

    def __init__(self, app, prefix: str):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request, call_next):
        if self.prefix:
            path = request.url.path

            # Redirect bare prefix to prefix with trailing slash
            if path == self.prefix:
                return RedirectResponse(url=self.prefix + "/", status_code=307)

            if path.startswith(self.prefix + "/"):
                request.scope["path"] = path[len(self.prefix):] or "/"

        return await call_next(request)


# ============================================================
# DEPLOYMENT CONFIGURATION #2: DYNAMIC CORS CONFIGURATION
# ============================================================
def _parse_origins(csv_value: str):
    """
    Parse comma-separated origin values for CORS configuration.

    Examples:
        "*" → ["*"]
        "https://app.com,https://admin.app.com" → ["https://app.com", "https://admin.app.com"]
        "" → []
    """
    if not csv_value:
        return []

    csv_value = csv_value.strip()
    if csv_value == "*":
        return ["*"]

    return [origin.strip() for origin in csv_value.split(",") if origin.strip()]


_http_origins = _parse_origins(os.getenv("HTTP_ALLOWED_ORIGINS", "*"))


# ============================================================
# APPLICATION LIFESPAN MANAGEMENT
# ============================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
        1. Create missing tables when AUTO_CREATE_TABLES is on
        2. Check database connectivity (logged, not fatal)
    """
    if settings.AUTO_CREATE_TABLES:
        create_all_tables()

    if test_db_connection():
        print("[STARTUP] ✅ Database connection successful")
    else:
        print("[STARTUP] ⚠️  Database not reachable, requests will fail until it is")

    print("[STARTUP] ✅ Application initialization complete")

    yield

    print("[SHUTDOWN] 🛑 Application shutdown initiated")


# ============================================================
# APPLICATION INSTANCE CREATION
# ============================================================
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    lifespan=lifespan
)


# ============================================================
# MIDDLEWARE REGISTRATION
# ============================================================
# Middlewares run in REVERSE order of registration

if ROOT_PATH:
    app.add_middleware(StripPrefixMiddleware, prefix=ROOT_PATH)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_http_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ERROR HANDLERS
# ============================================================
@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    if exc.status_code >= 500:
        print(f"[ERROR] {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Auth failures and unknown routes use the same {"message": ...} body."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report schema violations as 400 with one entry per offending field."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(location) or "body", "message": error.get("msg", "Invalid value")})

    return JSONResponse(status_code=400, content=ValidationError("Validation failed", errors).to_dict())


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    print(f"[ERROR] Database failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=UnexpectedError(str(exc)).to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    print(f"[ERROR] Unhandled exception on {request.method} {request.url.path}: {exc}")
    traceback.print_exc()
    return JSONResponse(status_code=500, content=UnexpectedError(str(exc)).to_dict())


# ============================================================
# HEALTH CHECK ENDPOINT
# ============================================================
@app.get("/health")
def health():
    """Liveness probe for the load balancer."""
    return {"status": "ok"}


# ============================================================
# REST API ROUTE REGISTRATION
# ============================================================
app.include_router(trips.router, prefix="/trips", tags=["trips"])
app.include_router(trips.router, prefix="/api/trips", tags=["trips"])


# ============================================================
# API INFORMATION ENDPOINT
# ============================================================
@app.get("/api")
def api_info():
    """API information and enabled features."""
    return {
        "status": "online",
        "version": settings.PROJECT_VERSION,
        "features": {
            "stats_include_maintenance": settings.STATS_INCLUDE_MAINTENANCE,
            "stats_include_ads": settings.STATS_INCLUDE_ADS
        },
        "endpoints": {
            "trips": "/trips/*",
            "health": "/health"
        }
    }
