"""
FastAPI application entrypoint for the RideBook backend.

Provides:
- Health check
- Users, vehicles, rides, payments and ratings (/users, /vehicles, /rides, ...)
- Read-only reporting queries (/reports/*)

Configuration (see settings.py):
- DATABASE_URL: SQLAlchemy connection string
- SQL_ECHO, LOG_LEVEL, LOG_JSON
- SEED_SAMPLE_DATA: load the sample dataset on startup when the database is empty
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.db import SessionLocal, engine, init_db
from src.api.errors import RideBookError
from src.api.logging_setup import setup_logging
from src.api.routers import payments as payments_router
from src.api.routers import ratings as ratings_router
from src.api.routers import reports as reports_router
from src.api.routers import rides as rides_router
from src.api.routers import users as users_router
from src.api.routers import vehicles as vehicles_router
from src.api.seed import load_sample_data
from src.api.settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Health and readiness endpoints."},
    {"name": "users", "description": "Rider and driver accounts."},
    {"name": "vehicles", "description": "Driver vehicle registration."},
    {"name": "rides", "description": "Ride booking and lifecycle (requested, ongoing, completed, cancelled)."},
    {"name": "payments", "description": "One payment per ride, settled as completed or failed."},
    {"name": "ratings", "description": "One rating per completed ride."},
    {"name": "reports", "description": "Read-only reporting queries."},
]


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    init_db(engine)
    if settings.seed_sample_data:
        with SessionLocal() as db:
            load_sample_data(db)
    logger.info("RideBook backend started")
    yield


app = FastAPI(
    title="RideBook Backend",
    description="Ride-booking records (riders, drivers, vehicles, rides, payments, ratings) and reports.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Basic permissive CORS for early development; tighten for production later.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router.router)
app.include_router(vehicles_router.router)
app.include_router(rides_router.router)
app.include_router(payments_router.router)
app.include_router(ratings_router.router)
app.include_router(reports_router.router)


@app.exception_handler(RideBookError)
async def ridebook_error_handler(_request: Request, exc: RideBookError) -> JSONResponse:
    """Render domain errors the same way HTTPException is rendered."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get(
    "/",
    tags=["health"],
    summary="Health check",
    description="Simple health check endpoint.",
    operation_id="health_check",
)
def health_check():
    """Return a simple health response."""
    return {"message": "Healthy"}
