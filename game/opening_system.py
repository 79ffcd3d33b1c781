# game/opening_system.py
import random
from typing import List, NamedTuple, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import crud
from database.crud_cards import SaleResult, credit_cards, sell_card
from database.models.card import Card
from database.models.pack_opening import PackOpening
from game.constants import DEFAULT_PLAYER_ID
from game.errors import EconomyCommitError, EmptyPackError, GameError, PackNotFoundError
from game.pack_system import build_cumulative_weights, draw_cards

logger = logging.getLogger(__name__)


class PackOpenResult(NamedTuple):
    cards: List[Card]  # в порядке выпадения, с дубликатами
    new_balance: int


async def open_pack(
    session: AsyncSession,
    pack_id: int,
    player_id: int = DEFAULT_PLAYER_ID,
    rng: Optional[random.Random] = None
) -> PackOpenResult:
    """
    Открыть набор: розыгрыш cards_per_open карточек и начисление в одной транзакции.

    При ошибке хранилища сессия откатывается, загруженные объекты становятся expired.
    """
    try:
        pack = await crud.get_pack_with_entries(session, pack_id)
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception(f"Failed to load pack {pack_id}: {e}")
        raise EconomyCommitError() from e

    if pack is None:
        raise PackNotFoundError()
    if not pack.entries:
        raise EmptyPackError()

    # Розыгрыш - чистое вычисление, БД до начисления не меняется
    weights = build_cumulative_weights(
        (entry.card_id, entry.drop_chance) for entry in pack.entries
    )
    drawn_ids = draw_cards(weights, pack.cards_per_open, rng)
    cards_by_id = {entry.card_id: entry.card for entry in pack.entries}

    try:
        await credit_cards(session, player_id, drawn_ids)
        session.add(PackOpening(player_id=player_id, pack_id=pack.id, card_ids=drawn_ids))
        new_balance = await crud.get_player_balance(session, player_id)
        await session.commit()
    except GameError as e:
        await session.rollback()
        logger.warning(f"Pack {pack_id} open rejected for player {player_id}: {e}")
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception(f"Failed to credit pack {pack_id} for player {player_id}: {e}")
        raise EconomyCommitError() from e

    cards = [cards_by_id[card_id] for card_id in drawn_ids]
    logger.info(
        f"📦 Player {player_id} opened '{pack.name}': "
        f"{', '.join(card.name for card in cards)}"
    )

    return PackOpenResult(cards=cards, new_balance=new_balance)


async def sell_player_card(
    session: AsyncSession,
    card_id: int,
    player_id: int = DEFAULT_PLAYER_ID
) -> SaleResult:
    """Продать одну копию карточки"""
    return await sell_card(session, player_id, card_id)
