# database/crud_cards.py
"""
Экономика игрока: единственное место, где меняются баланс и количество карточек.

Все изменения - одиночные SQL-выражения, которые вычисляет сама БД
(quantity = quantity + n, balance = balance + price), поэтому параллельные
запросы одного игрока не теряют обновления.
"""
from collections import Counter
from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Iterable, NamedTuple
import logging

from database.models.card import Card
from database.models.player import PlayerState
from database.models.player_card import PlayerCard
from game.errors import CardNotOwnedError, EconomyCommitError, GameError, PlayerNotFoundError

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SaleResult(NamedTuple):
    card: Card
    price_received: int
    new_balance: int
    remaining_quantity: int


def _insert_for(session: AsyncSession):
    dialect_name = session.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect_name]
    except KeyError:
        raise NotImplementedError(f"Upsert is not supported for dialect {dialect_name}")


async def _ensure_player(session: AsyncSession, player_id: int) -> None:
    result = await session.execute(
        select(PlayerState.id).where(PlayerState.id == player_id)
    )
    if result.scalar_one_or_none() is None:
        raise PlayerNotFoundError()


async def credit_cards(
    session: AsyncSession,
    player_id: int,
    card_ids: Iterable[int]
) -> Dict[int, int]:
    """
    Начислить карточки игроку.

    Новая карточка создаётся с quantity = число выпадений, существующая
    увеличивается. Коммит и откат - на вызывающей стороне, так что весь
    список применяется целиком или не применяется вовсе.

    Возвращает {card_id: новое количество}.
    """
    await _ensure_player(session, player_id)

    insert = _insert_for(session)
    counts = Counter(card_ids)
    quantities = {}

    # По возрастанию id - одинаковый порядок блокировок строк
    for card_id in sorted(counts):
        stmt = insert(PlayerCard).values(
            player_id=player_id,
            card_id=card_id,
            quantity=counts[card_id],
            first_obtained_at=func.now(),
            updated_at=func.now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["player_id", "card_id"],
            set_={
                "quantity": PlayerCard.quantity + stmt.excluded.quantity,
                "updated_at": func.now(),
            },
        ).returning(PlayerCard.quantity)

        result = await session.execute(stmt)
        quantities[card_id] = result.scalar_one()

    return quantities


async def sell_card(session: AsyncSession, player_id: int, card_id: int) -> SaleResult:
    """
    Продать одну карточку: -1 к количеству и +sell_price к балансу, атомарно.

    При ошибке сессия откатывается, а загруженные в неё объекты становятся
    expired - вызывающему коду нужно перечитать их (или заранее сохранить id).
    """
    try:
        # Списываем только если карточка есть, иначе ни одна строка не изменится
        result = await session.execute(
            update(PlayerCard)
            .where(
                PlayerCard.player_id == player_id,
                PlayerCard.card_id == card_id,
                PlayerCard.quantity >= 1,
            )
            .values(quantity=PlayerCard.quantity - 1, updated_at=func.now())
            .returning(PlayerCard.quantity)
            .execution_options(synchronize_session=False)
        )
        remaining = result.scalar_one_or_none()
        if remaining is None:
            raise CardNotOwnedError()

        card = await session.get(Card, card_id)
        if card is None:
            raise CardNotOwnedError()

        result = await session.execute(
            update(PlayerState)
            .where(PlayerState.id == player_id)
            .values(balance=PlayerState.balance + card.sell_price, updated_at=func.now())
            .returning(PlayerState.balance)
            .execution_options(synchronize_session=False)
        )
        new_balance = result.scalar_one_or_none()
        if new_balance is None:
            raise PlayerNotFoundError()

        # Последняя копия продана - строка инвентаря больше не нужна
        if remaining == 0:
            await session.execute(
                delete(PlayerCard)
                .where(
                    PlayerCard.player_id == player_id,
                    PlayerCard.card_id == card_id,
                    PlayerCard.quantity == 0,
                )
                .execution_options(synchronize_session=False)
            )

        await session.commit()
    except GameError as e:
        await session.rollback()
        logger.warning(f"Sale rejected: player={player_id} card={card_id}: {e}")
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception(f"Failed to sell card {card_id} for player {player_id}: {e}")
        raise EconomyCommitError() from e

    logger.info(
        f"💰 Player {player_id} sold {card.name} for {card.sell_price}, "
        f"balance {new_balance}, left {remaining}"
    )

    return SaleResult(
        card=card,
        price_received=card.sell_price,
        new_balance=new_balance,
        remaining_quantity=remaining,
    )
