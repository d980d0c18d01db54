# tarot_api/api/routes/user_routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from tarot_api.core.exceptions import InvalidArgument, NotFound
from tarot_api.data.database import get_db
from tarot_api.models.user_models import UserCreate, UserSchema, UserStats, UserUpdate
from tarot_api.services import user_services

router = APIRouter(tags=["Users"])


@router.post("", response_model=UserSchema)
async def create_user(user_data: UserCreate, db: AsyncSession = Depends(get_db)):
    """Register a new seeker."""
    try:
        return await user_services.create_user(db, user_data)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{user_id}", response_model=UserSchema)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await user_services.get_user(db, user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{user_id}", response_model=UserSchema)
async def update_user(user_id: int, user_data: UserUpdate, db: AsyncSession = Depends(get_db)):
    """Update display name, language or timezone."""
    try:
        return await user_services.update_user(db, user_id, user_data)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{user_id}/stats", response_model=UserStats)
async def get_user_stats(user_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await user_services.get_user_stats(db, user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        raise HTTPException(status_code=500, detail="Internal Server Error")
