import pytest

from database import crud
from database.seed import seed_starter_catalog
from database.models import Card, CardRarity, Pack, PackCard
from game.constants import DEFAULT_CARDS_PER_OPEN, DEFAULT_PLAYER_ID, DEFAULT_SELL_PRICE


async def test_seed_creates_starter_catalog_once(session, session_factory):
    assert await seed_starter_catalog(session) is True
    assert await seed_starter_catalog(session) is False

    async with session_factory() as check:
        packs = await crud.list_packs(check)
        assert len(packs) == 1

        pack = await crud.get_pack_with_entries(check, packs[0].id)
        assert pack.cards_per_open == 5
        assert sum(entry.drop_chance for entry in pack.entries) == pytest.approx(1.01)
        assert await crud.get_player_balance(check, DEFAULT_PLAYER_ID) == 1000


async def test_catalog_defaults_come_from_game_constants(session):
    card = Card(name="Безымянная", rarity=CardRarity.COMMON)
    pack = Pack(name="Без настроек")
    pack.entries.append(PackCard(card=card, drop_chance=1.0))
    session.add(pack)
    await session.commit()

    assert card.sell_price == DEFAULT_SELL_PRICE
    assert pack.cards_per_open == DEFAULT_CARDS_PER_OPEN
