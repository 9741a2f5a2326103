"""
Construcción de los stores a partir de Settings.

Los stores se crean aquí y se inyectan en el job; el pipeline nunca
los importa como globales.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy.ext.asyncio import AsyncEngine

from data_factory.core.config import Settings
from data_factory.infrastructure.database.session import create_engine, create_session_factory
from data_factory.infrastructure.source.sqlalchemy_source import SqlAlchemySourceStore
from data_factory.infrastructure.target.pg_target import PostgresTargetStore
from data_factory.infrastructure.target.sqlalchemy_target import SqlAlchemyTargetStore
from data_factory.shared.exceptions import SyncConfigError

TargetStoreImpl = Union[PostgresTargetStore, SqlAlchemyTargetStore]


@dataclass
class Stores:
    """Stores listos para el job y los engines que hay que cerrar al terminar."""

    source: SqlAlchemySourceStore
    target: TargetStoreImpl
    source_engine: AsyncEngine
    target_engine: Optional[AsyncEngine] = None

    async def dispose(self) -> None:
        await self.source_engine.dispose()
        if self.target_engine is not None:
            await self.target_engine.dispose()


def _required(settings: Settings, name: str) -> str:
    val = getattr(settings, name)
    if not val:
        raise SyncConfigError(f"Falta variable de entorno obligatoria: {name}", field=name)
    return val


def build_target_store(settings: Settings) -> tuple[TargetStoreImpl, Optional[AsyncEngine]]:
    url = _required(settings, "TARGET_DATABASE_URL")
    driver = settings.TARGET_DRIVER.lower()

    if driver == "psycopg":
        dsn = settings.effective_target_dsn
        if not dsn.startswith("postgres"):
            raise SyncConfigError(
                f"TARGET_DATABASE_URL debe apuntar a Postgres con TARGET_DRIVER=psycopg. Valor actual: {url}",
                field="TARGET_DATABASE_URL",
            )
        return PostgresTargetStore(dsn), None

    if driver == "sqlalchemy":
        engine = create_engine(url, echo=settings.DEBUG)
        return SqlAlchemyTargetStore(engine), engine

    raise SyncConfigError(f"TARGET_DRIVER no soportado: {settings.TARGET_DRIVER}", field="TARGET_DRIVER")


def build_stores(settings: Settings) -> Stores:
    """
    Constructor "oficial" de los stores leyendo la configuración.

    Requeridas:
    - SOURCE_DATABASE_URL
    - TARGET_DATABASE_URL
    """
    source_url = _required(settings, "SOURCE_DATABASE_URL")
    target, target_engine = build_target_store(settings)

    source_engine = create_engine(source_url, echo=settings.DEBUG)
    source = SqlAlchemySourceStore(create_session_factory(source_engine))
    return Stores(
        source=source,
        target=target,
        source_engine=source_engine,
        target_engine=target_engine,
    )
