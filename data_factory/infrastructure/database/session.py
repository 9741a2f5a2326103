"""
Gestión de engines y sesiones de base de datos.

El job usa dos bases independientes: el store origen (solo lectura)
y el store de analítica (destino del upsert).
"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base


# Base para modelos del store origen
SourceBase = declarative_base()

# Base para modelos del store de analítica
AnalyticsBase = declarative_base()


def _create_engine_args(url: str, echo: bool = False) -> dict:
    """
    Construye los argumentos del engine segun el tipo de base de datos.
    PostgreSQL usa pool de conexiones, SQLite no lo soporta.
    """
    args = {
        "echo": echo,
        "future": True,
    }

    if url.startswith("postgres"):
        args.update({
            "pool_size": 2,
            "max_overflow": 0,
            "pool_pre_ping": True,  # Verifica conexion antes de usar
        })

    return args


def create_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Crea un engine async para la URL indicada."""
    return create_async_engine(url, **_create_engine_args(url, echo=echo))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory sin autoflush; el job solo lee del origen."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )
