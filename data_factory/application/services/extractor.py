"""
Extracción de una página acotada de registros del store origen.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from loguru import logger

from data_factory.application.interfaces.stores import SourceStore
from data_factory.domain.entities import SourceRecord
from data_factory.shared.exceptions import SyncConfigError

# Recibe el tenant de la corrida y devuelve el predicado para el store
# (o None para no filtrar).
ExtractionFilter = Callable[[Optional[str]], Any]


def no_filter(tenant_id: Optional[str]) -> Any:
    """No filtra por tenant: lee la página en el orden por defecto del origen."""
    return None


def tenant_filter(column: Any) -> ExtractionFilter:
    """
    Construye un filtro `column == tenant_id`.

    Sin tenant en la corrida no se aplica ningún predicado.
    """

    def _where(tenant_id: Optional[str]) -> Any:
        if tenant_id is None:
            return None
        return column == tenant_id

    return _where


class RecordExtractor:
    """Lee hasta `limit` registros de una entidad del origen."""

    def __init__(
        self,
        source: SourceStore,
        *,
        entity: str = "property",
        where: ExtractionFilter = no_filter,
    ) -> None:
        self._source = source
        self._entity = entity
        self._where = where

    async def extract(self, limit: int, *, tenant_id: Optional[str] = None) -> list[SourceRecord]:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise SyncConfigError(f"El límite de página debe ser un entero positivo: {limit!r}", field="limit")

        logger.debug(f"Extrayendo hasta {limit} registros de '{self._entity}'")
        records = await self._source.fetch_page(
            self._entity,
            limit=limit,
            where=self._where(tenant_id),
        )
        return list(records)[:limit]
