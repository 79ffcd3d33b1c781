from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base

from config import settings


def create_engine_from_url(db_url: str, echo: bool = False) -> AsyncEngine:
    """Создать async-движок; настройки пула только для серверных БД"""
    if db_url.startswith("sqlite"):
        return create_async_engine(
            db_url,
            echo=echo,
            connect_args={"timeout": 30},
        )

    return create_async_engine(
        db_url,
        echo=echo,
        pool_size=5,  # Размер пула
        max_overflow=10,  # Максимальное количество дополнительных соединений
        pool_pre_ping=True,  # Проверять соединение перед использованием
        pool_recycle=3600  # Пересоздавать соединение через час
    )


engine = create_engine_from_url(settings.DB_URL, echo=settings.DB_ECHO)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


async def get_db_session():
    """Получить сессию БД"""
    async with AsyncSessionLocal() as session:
        yield session
