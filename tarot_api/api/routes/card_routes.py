# tarot_api/api/routes/card_routes.py
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from tarot_api.core.dependencies import get_card_catalog, get_card_sampler
from tarot_api.core.exceptions import InvalidArgument, NotFound
from tarot_api.models.tarot_models import CardSchema, CardSearchResult, CardStats, RandomCardsResponse
from tarot_api.services.card_services import CardCatalog
from tarot_api.services.draw_services import RandomCardSampler

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[CardSchema])
async def list_cards(catalog: CardCatalog = Depends(get_card_catalog)):
    """Return the full Major Arcana deck."""
    try:
        return await catalog.list_cards()
    except Exception as e:
        logger.error(f"Failed to list cards: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/random", response_model=RandomCardsResponse)
async def draw_random_cards(count: int = Query(1), sampler: RandomCardSampler = Depends(get_card_sampler)):
    """Draw `count` distinct cards without creating a reading."""
    try:
        cards = await sampler.draw_cards(count)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to draw cards: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return RandomCardsResponse(
        cards=cards,
        drawn_at=datetime.now(),
        cosmic_message=(
            "🌟 The universe has chosen your destiny card"
            if count == 1
            else f"✨ {count} cards reveal the threads of your fate"
        ),
    )


@router.get("/search", response_model=CardSearchResult)
async def search_cards(q: Optional[str] = Query(None), catalog: CardCatalog = Depends(get_card_catalog)):
    try:
        return await catalog.search_cards(q)
    except Exception as e:
        logger.error(f"Card search failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/stats", response_model=CardStats)
async def get_card_stats(catalog: CardCatalog = Depends(get_card_catalog)):
    try:
        return await catalog.get_card_stats()
    except Exception as e:
        logger.error(f"Failed to compute card stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/arcana/{arcana_id}", response_model=CardSchema)
async def get_card_by_arcana_id(arcana_id: int, catalog: CardCatalog = Depends(get_card_catalog)):
    try:
        return await catalog.get_card_by_arcana_id(arcana_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to fetch arcana {arcana_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/{card_id}", response_model=CardSchema)
async def get_card(card_id: int, catalog: CardCatalog = Depends(get_card_catalog)):
    try:
        return await catalog.get_card(card_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to fetch card {card_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
