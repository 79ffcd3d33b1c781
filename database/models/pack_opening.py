#database/models/pack_opening.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database.base import Base


class PackOpening(Base):
    """Журнал открытий (пишется в той же транзакции, что и начисление карт)"""

    __tablename__ = "pack_openings"

    id = Column(Integer, primary_key=True)
    player_id = Column(Integer, ForeignKey("player_state.id", ondelete="CASCADE"), nullable=False, index=True)
    pack_id = Column(Integer, ForeignKey("packs.id", ondelete="CASCADE"), nullable=False)

    # Выпавшие карты (ID из cards) в порядке выпадения
    card_ids = Column(JSON, nullable=False)

    opened_at = Column(DateTime, server_default=func.now())

    # Отношения
    player = relationship("PlayerState", backref="pack_openings")
    pack = relationship("Pack")

    def __repr__(self):
        return f"<PackOpening #{self.id} pack={self.pack_id} ({len(self.card_ids)} cards)>"
