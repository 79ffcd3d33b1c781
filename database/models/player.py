#database/models/player.py
from sqlalchemy import CheckConstraint, Column, Integer, DateTime
from sqlalchemy.sql import func
from database.base import Base


class PlayerState(Base):
    """Состояние игрока (пока один виртуальный игрок)"""

    __tablename__ = "player_state"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_player_state_balance"),
    )

    id = Column(Integer, primary_key=True)

    # Игровая валюта
    balance = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<PlayerState #{self.id} balance={self.balance}>"
