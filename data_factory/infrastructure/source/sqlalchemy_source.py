"""
Store origen sobre SQLAlchemy async.

Lee páginas de una entidad registrada y las convierte a SourceRecord
(snapshot inmutable, desacoplado de la sesión).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from loguru import logger
from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from data_factory.domain.entities import SourceRecord
from data_factory.infrastructure.database.models import PropertyModel
from data_factory.shared.exceptions import SourceUnavailable, SyncConfigError

DEFAULT_ENTITIES: Mapping[str, type] = {"property": PropertyModel}


def model_to_source_record(obj: Any) -> SourceRecord:
    """Copia las columnas mapeadas de una instancia ORM a un SourceRecord."""
    mapper = inspect(obj).mapper
    fields = {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}
    return SourceRecord(id=str(fields.pop("id")), fields=fields)


class SqlAlchemySourceStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        entities: Optional[Mapping[str, type]] = None,
    ) -> None:
        self._session_factory = session_factory
        self._entities = dict(entities or DEFAULT_ENTITIES)

    async def fetch_page(
        self,
        entity: str,
        *,
        limit: int,
        where: Any = None,
    ) -> list[SourceRecord]:
        model = self._entities.get(entity)
        if model is None:
            raise SyncConfigError(f"Entidad de origen desconocida: '{entity}'", field="entity")

        query = select(model)
        if where is not None:
            query = query.where(where)
        query = query.limit(limit)

        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                rows = result.scalars().all()
                return [model_to_source_record(r) for r in rows]
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Lectura de '{entity}' en el origen falló: {e}")
            raise SourceUnavailable(
                f"Source query failed for '{entity}': {e}",
                details={"entity": entity, "limit": limit},
            ) from e
