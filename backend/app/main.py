"""
PMS Rate Console entry point
Rate plan administration and quoting API.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.database import init_db
from app.routers import (
    auth, room_types, room_rates, rate_plans, rate_tiers, rate_overrides,
    package_components, classification, quotes, audit_logs,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on start-up"""
    init_db()
    logger.info(f"{settings.APP_NAME} started (negative rate policy: {settings.NEGATIVE_RATE_POLICY})")

    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Rate plans, length-of-stay tiers, dated overrides, packages and quotes",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(room_types.router)
app.include_router(room_rates.router)
app.include_router(rate_plans.router)
app.include_router(rate_tiers.router)
app.include_router(rate_overrides.router)
app.include_router(package_components.router)
app.include_router(classification.category_router)
app.include_router(classification.class_router)
app.include_router(classification.type_router)
app.include_router(quotes.router)
app.include_router(quotes.matrix_router)
app.include_router(audit_logs.router)


@app.get("/")
def root():
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    """Liveness"""
    return {"status": "healthy"}
