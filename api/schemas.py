# api/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from database.models.card import CardRarity


class CamelSchema(BaseModel):
    """JSON фронтенда в camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class CardSchema(CamelSchema):
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    rarity: CardRarity
    sell_price: int


class PackSchema(CamelSchema):
    id: int
    name: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    cards_per_open: int


class PackEntrySchema(CamelSchema):
    card: CardSchema
    drop_chance: float
    # drop_chance / сумма весов набора
    probability: float


class PackDetailSchema(PackSchema):
    entries: List[PackEntrySchema]


class OpenPackResponse(CamelSchema):
    cards: List[CardSchema]
    new_balance: int


class InventoryItemSchema(CamelSchema):
    id: int
    card: CardSchema
    quantity: int
    first_obtained_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BalanceResponse(CamelSchema):
    balance: int


class SellCardRequest(CamelSchema):
    card_id: int = Field(gt=0)


class SellCardResponse(CamelSchema):
    new_balance: int
    price_received: int
    card_name: str
    remaining_quantity: int


class PackOpeningSchema(CamelSchema):
    id: int
    pack_id: int
    card_ids: List[int]
    opened_at: Optional[datetime] = None
