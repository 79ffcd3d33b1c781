# database/crud.py
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from typing import List, Optional
import logging

from database.models.pack import Pack, PackCard
from database.models.player import PlayerState
from database.models.player_card import PlayerCard
from database.models.pack_opening import PackOpening
from game.constants import STARTING_BALANCE
from game.errors import PlayerNotFoundError

logger = logging.getLogger(__name__)

# ===== ИГРОК =====

async def get_player_or_create(
    session: AsyncSession,
    player_id: int,
    starting_balance: int = STARTING_BALANCE
) -> PlayerState:
    """Получить игрока или создать его со стартовым балансом"""
    player = await session.get(PlayerState, player_id)
    if player:
        return player

    player = PlayerState(id=player_id, balance=starting_balance)
    session.add(player)
    await session.flush()

    logger.info(f"Created player #{player_id} with balance {starting_balance}")
    return player


async def get_player_balance(session: AsyncSession, player_id: int) -> int:
    result = await session.execute(
        select(PlayerState.balance).where(PlayerState.id == player_id)
    )
    balance = result.scalar_one_or_none()
    if balance is None:
        raise PlayerNotFoundError()
    return balance

# ===== КАТАЛОГ =====

async def list_packs(session: AsyncSession) -> List[Pack]:
    result = await session.execute(select(Pack).order_by(Pack.id))
    return list(result.scalars().all())


async def get_pack_with_entries(session: AsyncSession, pack_id: int) -> Optional[Pack]:
    """Набор вместе с карточками и их весами"""
    result = await session.execute(
        select(Pack)
        .where(Pack.id == pack_id)
        .options(selectinload(Pack.entries).selectinload(PackCard.card))
    )
    return result.scalar_one_or_none()

# ===== ИНВЕНТАРЬ =====

async def get_player_inventory(session: AsyncSession, player_id: int) -> List[PlayerCard]:
    """Карточки игрока с количеством (только quantity > 0)"""
    result = await session.execute(
        select(PlayerCard)
        .where(PlayerCard.player_id == player_id, PlayerCard.quantity > 0)
        .options(selectinload(PlayerCard.card))
        .order_by(desc(PlayerCard.first_obtained_at), PlayerCard.id)
    )
    return list(result.scalars().all())


async def get_player_card(session: AsyncSession, player_id: int, card_id: int) -> Optional[PlayerCard]:
    result = await session.execute(
        select(PlayerCard).where(
            PlayerCard.player_id == player_id,
            PlayerCard.card_id == card_id
        )
    )
    return result.scalar_one_or_none()


async def get_recent_pack_openings(
    session: AsyncSession,
    player_id: int,
    limit: int = 20
) -> List[PackOpening]:
    result = await session.execute(
        select(PackOpening)
        .where(PackOpening.player_id == player_id)
        .order_by(desc(PackOpening.opened_at), desc(PackOpening.id))
        .limit(limit)
    )
    return list(result.scalars().all())
