"""
Health check API route
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Request

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/health")
async def health_check(request: Request):
    """Report service health and database connectivity"""
    database = request.app.state.database

    try:
        if not database.is_connected or not await database.ping():
            raise RuntimeError("no database session")
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }
