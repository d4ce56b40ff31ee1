from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from bootcamp_directory.infrastructure.config.settings import Settings
from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for ``settings.DATABASE_URL``.

    SQLite leaves foreign keys unchecked unless each connection turns them on.
    """
    url = make_url(settings.DATABASE_URL)
    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=settings.DATABASE_ECHO)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_async_engine(url, echo=settings.DATABASE_ECHO, pool_pre_ping=True)

    logger.info(f"Database engine created for {url.render_as_string(hide_password=True)}")
    return engine


class Database:
    engine: Optional[AsyncEngine] = None
    sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def connect(cls, settings: Settings) -> AsyncEngine:
        if cls.engine is None:
            cls.engine = build_engine(settings)
            cls.sessionmaker = async_sessionmaker(cls.engine, expire_on_commit=False)
        return cls.engine

    @classmethod
    async def disconnect(cls) -> None:
        if cls.engine is not None:
            await cls.engine.dispose()
            logger.info("Database engine disposed")
        cls.engine = None
        cls.sessionmaker = None


async def get_session() -> AsyncIterator[AsyncSession]:
    if Database.sessionmaker is None:
        Database.connect(Settings())
    async with Database.sessionmaker() as session:
        yield session
