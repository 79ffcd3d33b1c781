# game/constants.py

# Виртуальный игрок из стартовой миграции
DEFAULT_PLAYER_ID = 1
STARTING_BALANCE = 1000

DEFAULT_CARDS_PER_OPEN = 5
DEFAULT_SELL_PRICE = 10

# Границы веса выпадения одной карточки в наборе
MIN_DROP_CHANCE = 0.0
MAX_DROP_CHANCE = 1.0
