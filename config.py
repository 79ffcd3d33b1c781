# config.py
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

from game.constants import DEFAULT_PLAYER_ID, STARTING_BALANCE

load_dotenv()


class Settings(BaseSettings):
    DB_URL: str = "sqlite+aiosqlite:///./cards.db"
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Пока один виртуальный игрок
    DEFAULT_PLAYER_ID: int = DEFAULT_PLAYER_ID
    STARTING_BALANCE: int = STARTING_BALANCE

    # Создать таблицы и стартовый набор при запуске
    SEED_DEMO_DATA: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
