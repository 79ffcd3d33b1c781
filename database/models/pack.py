#database/models/pack.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database.base import Base
from game.constants import DEFAULT_CARDS_PER_OPEN


class Pack(Base):
    """Набор, из которого выпадают карточки"""

    __tablename__ = "packs"
    __table_args__ = (
        CheckConstraint("cards_per_open > 0", name="ck_packs_cards_per_open"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    cover_image = Column(String(500))

    # Сколько карточек игрок получает при открытии
    cards_per_open = Column(Integer, nullable=False, default=DEFAULT_CARDS_PER_OPEN)

    created_at = Column(DateTime, server_default=func.now())

    entries = relationship(
        "PackCard",
        back_populates="pack",
        order_by="PackCard.id",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Pack {self.name} ({self.cards_per_open} cards)>"


class PackCard(Base):
    """Какие карточки входят в набор и с каким весом"""

    __tablename__ = "pack_cards"
    __table_args__ = (
        UniqueConstraint("pack_id", "card_id", name="uq_pack_cards_pack_card"),
        CheckConstraint(
            "drop_chance >= 0 AND drop_chance <= 1", name="ck_pack_cards_drop_chance"
        ),
    )

    id = Column(Integer, primary_key=True)
    pack_id = Column(Integer, ForeignKey("packs.id", ondelete="CASCADE"), nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True)

    # Вес выпадения от 0.0 до 1.0; сумма по набору НЕ обязана быть равна 1.0
    drop_chance = Column(Float, nullable=False)

    created_at = Column(DateTime, server_default=func.now())

    pack = relationship("Pack", back_populates="entries")
    card = relationship("Card")

    def __repr__(self):
        return f"<PackCard pack={self.pack_id} card={self.card_id} chance={self.drop_chance}>"
