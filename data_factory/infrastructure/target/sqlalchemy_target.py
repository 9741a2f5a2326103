"""
Store destino sobre SQLAlchemy async (PostgreSQL o SQLite).

Usa el insert específico del dialecto para ON CONFLICT DO UPDATE.
Las tablas se resuelven desde la metadata de AnalyticsBase.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from loguru import logger
from sqlalchemy import MetaData
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from data_factory.application.interfaces.stores import UpsertResponse
from data_factory.infrastructure.database.session import AnalyticsBase

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SqlAlchemyTargetStore:
    def __init__(self, engine: AsyncEngine, *, metadata: Optional[MetaData] = None) -> None:
        self._engine = engine
        self._metadata = metadata if metadata is not None else AnalyticsBase.metadata

    async def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        on_conflict: str,
    ) -> UpsertResponse:
        rows_list = [dict(r) for r in rows]
        if not rows_list:
            return UpsertResponse(count=0)

        tbl = self._metadata.tables.get(table)
        if tbl is None:
            return UpsertResponse.failure(f"Tabla destino desconocida: '{table}'", code="UNKNOWN_TABLE")
        if on_conflict not in tbl.c:
            return UpsertResponse.failure(
                f"La tabla '{table}' no tiene la columna de conflicto '{on_conflict}'",
                code="UNKNOWN_COLUMN",
            )

        dialect = self._engine.dialect.name
        insert_fn = _DIALECT_INSERTS.get(dialect)
        if insert_fn is None:
            return UpsertResponse.failure(f"Dialecto sin soporte de upsert: {dialect}", code="UNSUPPORTED_DIALECT")

        stmt = insert_fn(tbl).values(rows_list)
        # Reemplazo completo: toda columna no-PK toma el valor entrante.
        replace = {c.name: stmt.excluded[c.name] for c in tbl.columns if c.name != on_conflict}
        if replace:
            stmt = stmt.on_conflict_do_update(index_elements=[on_conflict], set_=replace)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=[on_conflict])

        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            # asyncpg lanza OSError sin envolver si el host no responde.
            message = str(getattr(e, "orig", None) or e) or e.__class__.__name__
            logger.error(f"UPSERT en '{table}' falló: {message}")
            return UpsertResponse.failure(message, code=e.__class__.__name__)

        affected = result.rowcount
        return UpsertResponse(count=affected if affected and affected > 0 else len(rows_list))
