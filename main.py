import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from api.routes import api_router
from config import settings
from database.base import AsyncSessionLocal, engine, get_db_session
from database.models import Card, Pack, PlayerCard
from database.seed import create_tables, seed_starter_catalog
from game.errors import GameError

# ===== НАСТРОЙКА ЛОГГИРОВАНИЯ =====
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ===== FASTAPI ПРИЛОЖЕНИЕ =====
@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEMO_DATA:
        await create_tables(engine)
        async with AsyncSessionLocal() as session:
            await seed_starter_catalog(
                session,
                settings.DEFAULT_PLAYER_ID,
                settings.STARTING_BALANCE,
            )
    logger.info("🚀 Card System started")
    yield
    await engine.dispose()


app = FastAPI(title="Card System",
              description="Открытие наборов карточек и инвентарь игрока",
              version="0.1.0",
              lifespan=lifespan
             )
app.include_router(api_router)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    """Ошибки игровой логики отдаются как есть"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


# ===== ЭНДПОИНТЫ =====
@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "status": "online",
        "service": "Card System",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """Проверка здоровья сервиса"""
    try:
        # Проверяем подключение к БД
        await session.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.now().isoformat()
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": datetime.now().isoformat()
            }
        )


@app.get("/stats")
async def get_stats(session: AsyncSession = Depends(get_db_session)):
    """Статистика каталога и инвентаря"""
    total_cards = await session.scalar(select(func.count()).select_from(Card))
    total_packs = await session.scalar(select(func.count()).select_from(Pack))
    owned_cards = await session.scalar(
        select(func.coalesce(func.sum(PlayerCard.quantity), 0))
    )

    return {
        "cards_in_catalog": total_cards,
        "packs_in_catalog": total_packs,
        "cards_owned": owned_cards,
        "timestamp": datetime.now().isoformat()
    }
