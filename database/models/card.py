#database/models/card.py
from sqlalchemy import CheckConstraint, Column, Integer, String, Text, DateTime, Enum
from sqlalchemy.sql import func
from database.base import Base
from game.constants import DEFAULT_SELL_PRICE
import enum


class CardRarity(str, enum.Enum):
    """Редкость влияет только на визуализацию, не на выпадение"""

    COMMON = "COMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"


class Card(Base):
    """Шаблон карточки (это НЕ инвентарь игрока)"""

    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint("sell_price >= 0", name="ck_cards_sell_price"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    image_url = Column(String(500))
    rarity = Column(
        Enum(CardRarity, name="card_rarity", native_enum=False, length=50),
        nullable=False,
        index=True,
    )

    # Цена продажи в игровой валюте
    sell_price = Column(Integer, nullable=False, default=DEFAULT_SELL_PRICE)

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Card {self.name} ({self.rarity})>"
