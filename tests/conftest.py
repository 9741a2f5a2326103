"""
Configuración de fixtures para pytest.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Mapping, Optional, Sequence

import pytest
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from data_factory.application.interfaces.stores import UpsertResponse
from data_factory.domain.entities import SourceRecord
from data_factory.infrastructure.database.session import AnalyticsBase, SourceBase


# URL de base de datos de prueba
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2025, 12, 16, 10, 15, 0, tzinfo=timezone.utc)


class InMemorySourceStore:
    """Origen fake: devuelve los registros cargados, respetando el límite."""

    def __init__(self, records: Sequence[SourceRecord] = (), error: Optional[Exception] = None) -> None:
        self.records = list(records)
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def fetch_page(self, entity: str, *, limit: int, where: Any = None) -> list[SourceRecord]:
        self.calls.append({"entity": entity, "limit": limit, "where": where})
        if self.error is not None:
            raise self.error
        return self.records[:limit]


class InMemoryTargetStore:
    """Destino fake: tabla -> {clave: fila}. Puede configurarse para fallar."""

    def __init__(self, error_message: Optional[str] = None) -> None:
        self.tables: dict[str, dict[Any, dict[str, Any]]] = {}
        self.calls: list[dict[str, Any]] = []
        self.error_message = error_message

    async def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        on_conflict: str,
    ) -> UpsertResponse:
        self.calls.append({"table": table, "rows": [dict(r) for r in rows], "on_conflict": on_conflict})
        if self.error_message is not None:
            return UpsertResponse.failure(self.error_message)
        stored = self.tables.setdefault(table, {})
        for row in rows:
            stored[row[on_conflict]] = dict(row)
        return UpsertResponse(count=len(rows))


def make_records(count: int) -> list[SourceRecord]:
    return [
        SourceRecord(id=f"prop-{i}", fields={"county_name": f"County {i}", "parcel_id": f"P-{i:04d}"})
        for i in range(count)
    ]


@pytest.fixture
def records_factory():
    return make_records


@pytest.fixture
def source_factory():
    return InMemorySourceStore


@pytest.fixture
def target_factory():
    return InMemoryTargetStore


@pytest.fixture
def target_store() -> InMemoryTargetStore:
    return InMemoryTargetStore()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def log_messages():
    """Captura los mensajes emitidos por loguru durante el test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
async def source_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine del origen en memoria con las tablas creadas.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SourceBase.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def source_sessions(source_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(source_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def analytics_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine del store de analítica en memoria con dev_properties creada.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(AnalyticsBase.metadata.create_all)
    yield engine
    await engine.dispose()
