import json
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.logging_cfg import setup_logging
from api.auth.views import router as auth_router
from api.changes.views import router as changes_router
from api.checklist.views import router as checklist_router
from api.dashboard.views import router as dashboard_router
from api.equipment.views import router as equipment_router
from api.insured.views import router as insured_router
from api.tasks.views import router as tasks_router
from api.tickets.views import router as tickets_router

logger = logging.getLogger(__name__)


def get_cors_origins() -> list[str]:
    """Get CORS origins from environment variable or use defaults."""
    cors_env = os.environ.get("CORS_ORIGINS", "")

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for the dashboard dev servers
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting IT Operations Dashboard API (env=%s)", settings.APP_ENV)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="IT Operations Dashboard API",
    description="Equipment inventory with live depreciation, onboarding checklist, tickets and task boards",
    version="1.0.0",
    lifespan=lifespan,
)

# Get CORS origins from environment or use defaults
cors_origins = get_cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Authentication endpoints
app.include_router(auth_router, prefix="/api/v1")

# Business endpoints
app.include_router(equipment_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(tasks_router, prefix="/api/v1")
app.include_router(checklist_router, prefix="/api/v1")
app.include_router(tickets_router, prefix="/api/v1")
app.include_router(insured_router, prefix="/api/v1")

# Live change notifications
app.include_router(changes_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
