# tarot_api/api/routes/reading_routes.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from tarot_api.core.dependencies import get_reading_orchestrator, get_statistics
from tarot_api.core.exceptions import InvalidArgument, NotFound
from tarot_api.models.tarot_models import (
    CreateReadingRequest,
    DailyStatsSchema,
    ReadingHistory,
    ReadingSchema,
    ReadingStatsSchema,
)
from tarot_api.services.reading_services import ReadingOrchestrator
from tarot_api.services.stats_services import StatisticsAccumulator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ReadingSchema)
async def create_reading(
    reading_request: CreateReadingRequest,
    request: Request,
    orchestrator: ReadingOrchestrator = Depends(get_reading_orchestrator),
):
    """
    Draw cards for the requested spread and return the interpreted reading.
    """
    try:
        return await orchestrator.create_reading(
            reading_request.spread_type,
            question=reading_request.question,
            user_id=reading_request.user_id,
            session_id=request.headers.get("x-session-id"),
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/stats", response_model=ReadingStatsSchema)
async def get_reading_stats(stats: StatisticsAccumulator = Depends(get_statistics)):
    try:
        return await stats.get_reading_stats()
    except Exception as e:
        logger.error(f"Failed to compute reading stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/stats/daily", response_model=DailyStatsSchema)
async def get_daily_stats(day: Optional[date] = Query(None), stats: StatisticsAccumulator = Depends(get_statistics)):
    try:
        return await stats.get_daily_stats(day)
    except Exception as e:
        logger.error(f"Failed to read daily stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/user/{user_id}", response_model=ReadingHistory)
async def get_user_readings(
    user_id: int,
    limit: int = Query(10),
    offset: int = Query(0),
    orchestrator: ReadingOrchestrator = Depends(get_reading_orchestrator),
):
    """Fetch a user's reading history, newest first."""
    try:
        return await orchestrator.get_user_readings(user_id, limit=limit, offset=offset)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to load readings for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/{reading_id}", response_model=ReadingSchema)
async def get_reading(reading_id: str, orchestrator: ReadingOrchestrator = Depends(get_reading_orchestrator)):
    try:
        return await orchestrator.get_reading(reading_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to load reading {reading_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
