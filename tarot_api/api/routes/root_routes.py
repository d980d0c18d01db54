# tarot_api/api/routes/root_routes.py
from datetime import datetime

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
async def read_root():
    return {
        "message": "🔮 Welcome to the Tarot Reading API",
        "timestamp": datetime.now().isoformat(),
        "endpoints": {"cards": "/api/cards", "readings": "/api/readings", "users": "/api/users"},
    }


@router.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
