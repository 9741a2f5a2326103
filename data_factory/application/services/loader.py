"""
Carga de un batch en el destino con un único upsert por clave de conflicto.
"""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from data_factory.application.dto import LoadOutcome
from data_factory.application.interfaces.stores import TargetStore
from data_factory.domain.entities import TargetRecord


class UpsertLoader:
    """
    Escribe TargetRecords en `table` resolviendo conflictos por `conflict_key`.

    En conflicto la fila existente se reemplaza completa (no merge por campo).
    La atomicidad del batch queda en manos del destino.
    """

    def __init__(
        self,
        target: TargetStore,
        *,
        table: str = "dev_properties",
        conflict_key: str = "id",
    ) -> None:
        self._target = target
        self.table = table
        self.conflict_key = conflict_key

    async def load(self, records: Sequence[TargetRecord]) -> LoadOutcome:
        if not records:
            return LoadOutcome.ok(0)

        rows = [r.to_row() for r in records]
        logger.debug(f"Upsert de {len(rows)} filas en '{self.table}' (on_conflict={self.conflict_key})")
        response = await self._target.upsert(self.table, rows, on_conflict=self.conflict_key)

        if response.error is not None:
            return LoadOutcome.failed(response.error.message)
        return LoadOutcome.ok(response.count)
