# expense_tracker/api/routes/health.py
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from expense_tracker.core.config import settings
from expense_tracker.core.database import get_async_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

@router.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_async_session)):
    """Health check endpoint, including a database round trip"""
    body = {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "ok",
    }
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {str(e)}")
        body.update(status="unhealthy", database="unavailable")
        return JSONResponse(status_code=503, content=body)
    return body
