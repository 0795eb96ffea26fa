"""Kevo Insurance - agency back-office API."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from app.config import get_settings
from app.errors import AccessDenied, render_access_denied
from app.middleware import SessionGateMiddleware

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    from app.database import Base, engine

    # Import all models so they're registered with Base
    from app import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("%s started", settings.app_name)

    yield


app = FastAPI(
    title=settings.app_name,
    description="Leads, policies, claims and commissions for an insurance agency",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    SessionGateMiddleware,
    cookie_name=settings.session_cookie_name,
    protected_prefixes=settings.protected_prefixes,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied):
    """Render the access-denied view; API clients get JSON."""
    logger.info("Access denied for %s: %s", request.url.path, exc.reason)
    if request.url.path.startswith("/api/"):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.reason})
    return HTMLResponse(render_access_denied(), status_code=exc.status_code)


@app.get("/")
async def root():
    """Public entry page."""
    return {"app": settings.app_name, "login": "/api/auth/login"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}


# Import and include routers
from app.api import (  # noqa: E402
    auth,
    claims,
    commissions,
    dashboard,
    documents,
    leads,
    notifications,
    policies,
    users,
)

app.include_router(auth.router, prefix="/api")
app.include_router(notifications.router, prefix="/api")
app.include_router(notifications.page_router)
app.include_router(dashboard.router)
app.include_router(policies.router)
app.include_router(claims.router)
app.include_router(commissions.router)
app.include_router(leads.router)
app.include_router(documents.router)
app.include_router(users.router)
