# api/routes.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas import (
    BalanceResponse,
    CardSchema,
    InventoryItemSchema,
    OpenPackResponse,
    PackDetailSchema,
    PackEntrySchema,
    PackOpeningSchema,
    PackSchema,
    SellCardRequest,
    SellCardResponse,
)
from config import settings
from database import crud
from database.base import get_db_session
from game.errors import EmptyPackError, PackNotFoundError
from game.opening_system import open_pack, sell_player_card
from game.pack_system import drop_probabilities

api_router = APIRouter(prefix="/api")


# ===== НАБОРЫ =====

@api_router.get("/packs", response_model=List[PackSchema])
async def get_packs(session: AsyncSession = Depends(get_db_session)):
    return await crud.list_packs(session)


@api_router.get("/packs/{pack_id}", response_model=PackDetailSchema)
async def get_pack(pack_id: int, session: AsyncSession = Depends(get_db_session)):
    """Набор с карточками и реальной вероятностью выпадения каждой"""
    pack = await crud.get_pack_with_entries(session, pack_id)
    if pack is None:
        raise PackNotFoundError()
    if not pack.entries:
        raise EmptyPackError()

    probabilities = drop_probabilities(
        [(entry.card_id, entry.drop_chance) for entry in pack.entries]
    )
    entries = [
        PackEntrySchema(
            card=CardSchema.model_validate(entry.card),
            drop_chance=entry.drop_chance,
            probability=probabilities[entry.card_id],
        )
        for entry in pack.entries
    ]
    return PackDetailSchema(
        id=pack.id,
        name=pack.name,
        description=pack.description,
        cover_image=pack.cover_image,
        cards_per_open=pack.cards_per_open,
        entries=entries,
    )


@api_router.post("/packs/{pack_id}/open", response_model=OpenPackResponse)
async def post_open_pack(pack_id: int, session: AsyncSession = Depends(get_db_session)):
    result = await open_pack(session, pack_id, settings.DEFAULT_PLAYER_ID)
    return OpenPackResponse(
        cards=[CardSchema.model_validate(card) for card in result.cards],
        new_balance=result.new_balance,
    )


# ===== ИНВЕНТАРЬ =====

@api_router.get("/inventory", response_model=List[InventoryItemSchema])
async def get_inventory(session: AsyncSession = Depends(get_db_session)):
    return await crud.get_player_inventory(session, settings.DEFAULT_PLAYER_ID)


@api_router.get("/inventory/balance", response_model=BalanceResponse)
async def get_balance(session: AsyncSession = Depends(get_db_session)):
    balance = await crud.get_player_balance(session, settings.DEFAULT_PLAYER_ID)
    return BalanceResponse(balance=balance)


@api_router.post("/inventory/sell", response_model=SellCardResponse)
async def post_sell_card(request: SellCardRequest, session: AsyncSession = Depends(get_db_session)):
    sale = await sell_player_card(session, request.card_id, settings.DEFAULT_PLAYER_ID)
    return SellCardResponse(
        new_balance=sale.new_balance,
        price_received=sale.price_received,
        card_name=sale.card.name,
        remaining_quantity=sale.remaining_quantity,
    )


@api_router.get("/inventory/history", response_model=List[PackOpeningSchema])
async def get_history(
    limit: int = Query(20, ge=1, le=100),
    session: AsyncSession = Depends(get_db_session)
):
    """Последние открытия наборов"""
    return await crud.get_recent_pack_openings(session, settings.DEFAULT_PLAYER_ID, limit)
