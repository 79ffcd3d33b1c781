#database/models/player_card.py
from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database.base import Base


class PlayerCard(Base):
    """Инвентарь: одна строка на карточку, дубликаты только в quantity"""

    __tablename__ = "player_cards"
    __table_args__ = (
        UniqueConstraint("player_id", "card_id", name="uq_player_cards_player_card"),
        CheckConstraint("quantity >= 0", name="ck_player_cards_quantity"),
    )

    id = Column(Integer, primary_key=True)
    player_id = Column(Integer, ForeignKey("player_state.id", ondelete="CASCADE"), nullable=False, index=True)
    card_id = Column(Integer, ForeignKey("cards.id", ondelete="CASCADE"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False, default=1)

    first_obtained_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())

    # Отношения
    player = relationship("PlayerState", backref="cards")
    card = relationship("Card")

    def __repr__(self):
        return f"<PlayerCard #{self.id} card={self.card_id} x{self.quantity}>"
