import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import database.models  # noqa: F401
from database.base import Base, create_engine_from_url
from database.crud import get_player_or_create
from database.models import Card, CardRarity, Pack, PackCard
from game.constants import DEFAULT_PLAYER_ID


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine_from_url(f"sqlite+aiosqlite:///{tmp_path / 'cards.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def player(session):
    player = await get_player_or_create(session, DEFAULT_PLAYER_ID, starting_balance=100)
    await session.commit()
    return player


@pytest.fixture
def make_pack(session):
    """make_pack({"CardA": (0.5, 10), ...}, cards_per_open=5) -> (pack, {name: card})"""

    async def _make_pack(cards, cards_per_open=5, name="Test pack"):
        pack = Pack(name=name, cards_per_open=cards_per_open)
        by_name = {}
        for card_name, (drop_chance, sell_price) in cards.items():
            card = Card(name=card_name, rarity=CardRarity.COMMON, sell_price=sell_price)
            pack.entries.append(PackCard(card=card, drop_chance=drop_chance))
            by_name[card_name] = card

        session.add(pack)
        await session.commit()
        return pack, by_name

    return _make_pack
