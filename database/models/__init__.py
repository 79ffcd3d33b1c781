# database/models/__init__.py
from database.models.card import Card, CardRarity
from database.models.pack import Pack, PackCard
from database.models.player import PlayerState
from database.models.player_card import PlayerCard
from database.models.pack_opening import PackOpening

__all__ = [
    'Card',
    'CardRarity',
    'Pack',
    'PackCard',
    'PlayerState',
    'PlayerCard',
    'PackOpening',
]
