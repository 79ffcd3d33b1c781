# database/seed.py
"""Стартовый каталог: шесть карточек тёмного фэнтези и один набор"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
import logging

from database.base import Base
from database.crud import get_player_or_create
from database.models.card import Card, CardRarity
from database.models.pack import Pack, PackCard
from game.constants import DEFAULT_PLAYER_ID, STARTING_BALANCE

logger = logging.getLogger(__name__)

STARTER_CARDS = [
    {
        "name": "Забытый рыцарь",
        "description": "Одинокий воин, потерявший память о своём прошлом. Его меч всё ещё помнит вкус крови.",
        "rarity": CardRarity.COMMON,
        "sell_price": 10,
        "image_url": "https://placehold.co/300x400/1a1a1a/ffffff?text=Forgotten+Knight",
        "drop_chance": 0.50,
    },
    {
        "name": "Теневой ассасин",
        "description": "Убийца, существующий между мирами. Его клинки не оставляют следов.",
        "rarity": CardRarity.RARE,
        "sell_price": 50,
        "image_url": "https://placehold.co/300x400/2d1b4e/ffffff?text=Shadow+Assassin",
        "drop_chance": 0.20,
    },
    {
        "name": "Кровавая жрица",
        "description": "Служительница древнего культа. Её ритуалы требуют жертв.",
        "rarity": CardRarity.RARE,
        "sell_price": 50,
        "image_url": "https://placehold.co/300x400/4e1b1b/ffffff?text=Blood+Priestess",
        "drop_chance": 0.20,
    },
    {
        "name": "Проклятый маг",
        "description": "Волшебник, поглощённый запретной магией. Его заклинания питаются его жизненной силой.",
        "rarity": CardRarity.EPIC,
        "sell_price": 150,
        "image_url": "https://placehold.co/300x400/1b3a4e/ffffff?text=Cursed+Mage",
        "drop_chance": 0.05,
    },
    {
        "name": "Костяной дракон",
        "description": "Древнее существо, восставшее из праха. Его рёв заставляет мёртвых танцевать.",
        "rarity": CardRarity.EPIC,
        "sell_price": 150,
        "image_url": "https://placehold.co/300x400/4e3d1b/ffffff?text=Bone+Dragon",
        "drop_chance": 0.05,
    },
    {
        "name": "Повелитель Бездны",
        "description": "Сущность из-за пределов реальности. Смотреть на него - значит терять рассудок.",
        "rarity": CardRarity.LEGENDARY,
        "sell_price": 500,
        "image_url": "https://placehold.co/300x400/0a0a0a/8b0000?text=Void+Lord",
        "drop_chance": 0.01,
    },
]

STARTER_PACK = {
    "name": "Стартовый набор: Тени прошлого",
    "description": "Базовый набор для новичков. Содержит карточки разных редкостей с акцентом на тёмное фэнтези.",
    "cover_image": "https://placehold.co/400x300/1a1a1a/ffffff?text=Starter+Pack",
    "cards_per_open": 5,
}


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_starter_catalog(
    session: AsyncSession,
    player_id: int = DEFAULT_PLAYER_ID,
    starting_balance: int = STARTING_BALANCE
) -> bool:
    """Заполнить пустой каталог. Возвращает False, если набор уже есть"""
    await get_player_or_create(session, player_id, starting_balance)

    existing = await session.execute(
        select(Pack.id).where(Pack.name == STARTER_PACK["name"])
    )
    if existing.scalar_one_or_none() is not None:
        await session.commit()
        return False

    pack = Pack(**STARTER_PACK)
    for data in STARTER_CARDS:
        data = dict(data)
        drop_chance = data.pop("drop_chance")
        pack.entries.append(PackCard(card=Card(**data), drop_chance=drop_chance))

    session.add(pack)
    await session.commit()

    logger.info(f"✅ Seeded starter pack with {len(STARTER_CARDS)} cards")
    return True
