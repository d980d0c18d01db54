# tarot_api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tarot_api.api.routes import card_routes, reading_routes, root_routes, user_routes
from tarot_api.core.config import settings
from tarot_api.core.startup import startup_event

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event()
    yield


app = FastAPI(title="Tarot Reading API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_routes.router)
app.include_router(card_routes.router, prefix="/api/cards", tags=["Cards"])
app.include_router(reading_routes.router, prefix="/api/readings", tags=["Readings"])
app.include_router(user_routes.router, prefix="/api/users")
