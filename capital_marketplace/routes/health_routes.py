# capital_marketplace/routes/health_routes.py
"""
Health Check Endpoints

Endpoints:
- GET /health - Database and upload directory status
- GET /ready - Readiness probe
- GET /live - Liveness probe
- GET /api/status - API status and record counts
"""
import os
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from capital_marketplace.config import Settings
from capital_marketplace.core.database import Database, get_database, get_db
from capital_marketplace.core.logger import get_logger
from capital_marketplace.dependencies import get_app_settings
from capital_marketplace.models import Company, Document, Notification, User
from capital_marketplace.utils.datetime_utils import get_utc_now, to_iso_string

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])

_STARTED_AT = time.time()


@router.get("/health")
async def get_overall_health(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
):
    """
    Overall health.

    Returns 200 when the database answers and the upload directory exists,
    503 otherwise.
    """
    start = time.time()
    db_healthy = database.health_check()
    fs_healthy = os.path.isdir(settings.upload_dir)
    healthy = db_healthy and fs_healthy

    content = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": to_iso_string(get_utc_now()),
        "version": settings.api_version,
        "environment": settings.environment,
        "checks": {
            "database": {
                "status": "up" if db_healthy else "down",
                "responseTime": round((time.time() - start) * 1000),
            },
            "filesystem": {
                "status": "up" if fs_healthy else "down",
                "uploadDir": settings.upload_dir,
            },
        },
        "uptime": round(time.time() - _STARTED_AT, 2),
    }
    return JSONResponse(status_code=200 if healthy else 503, content=content)


@router.get("/ready")
async def readiness(database: Database = Depends(get_database)):
    if database.health_check():
        return {"status": "ready", "timestamp": to_iso_string(get_utc_now())}

    return JSONResponse(
        status_code=503,
        content={
            "status": "not ready",
            "timestamp": to_iso_string(get_utc_now()),
            "reason": "Database not accessible",
        },
    )


@router.get("/live")
async def liveness():
    return {
        "status": "alive",
        "timestamp": to_iso_string(get_utc_now()),
        "uptime": round(time.time() - _STARTED_AT, 2),
    }


@router.get("/api/status")
async def api_status(
    database: Database = Depends(get_database),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """API status with basic record counts"""
    db_healthy = database.health_check()

    try:
        metrics = {
            "users": db.query(func.count(User.id)).scalar(),
            "companies": db.query(func.count(Company.id)).scalar(),
            "documents": db.query(func.count(Document.id)).scalar(),
            "notifications": db.query(func.count(Notification.id)).scalar(),
            "lastUpdated": to_iso_string(get_utc_now()),
        }
    except Exception as e:
        logger.error(f"Error fetching metrics: {e}")
        metrics = {"error": "Failed to fetch metrics"}

    return {
        "status": "operational",
        "timestamp": to_iso_string(get_utc_now()),
        "version": settings.api_version,
        "environment": settings.environment,
        "database": {"status": "connected" if db_healthy else "disconnected"},
        "metrics": metrics,
    }
