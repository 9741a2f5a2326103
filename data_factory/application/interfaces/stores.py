"""
Contratos de los stores origen y destino.

Este contrato existe para:
- Que el pipeline no dependa de un ORM o cliente concreto: los stores se
  inyectan en el orquestador.
- Facilitar tests unitarios con fakes en memoria.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence

from data_factory.domain.entities import SourceRecord


@dataclass(frozen=True)
class TargetStoreError:
    """Error estructurado devuelto por el destino."""

    message: str
    code: Optional[str] = None


@dataclass(frozen=True)
class UpsertResponse:
    """
    Respuesta de un upsert.

    El destino no lanza excepciones por errores propios: los reporta aquí.
    """

    count: int = 0
    error: Optional[TargetStoreError] = None

    @classmethod
    def failure(cls, message: str, code: Optional[str] = None) -> "UpsertResponse":
        return cls(count=0, error=TargetStoreError(message=message, code=code))


class SourceStore(Protocol):
    """
    Lectura paginada del store origen.

    Implementaciones:
    - SQLAlchemy async.
    - Fake en memoria para tests.
    """

    async def fetch_page(
        self,
        entity: str,
        *,
        limit: int,
        where: Any = None,
    ) -> list[SourceRecord]:
        """
        Lee hasta `limit` registros de la entidad indicada.

        Si el store no responde o la consulta falla debe lanzar SourceUnavailable.
        """


class TargetStore(Protocol):
    """
    Upsert por batch en el store destino.

    Implementaciones:
    - psycopg (INSERT ... ON CONFLICT).
    - SQLAlchemy (insert().on_conflict_do_update).
    """

    async def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        on_conflict: str,
    ) -> UpsertResponse:
        """
        Inserta o reemplaza las filas usando `on_conflict` como clave única.

        En conflicto la fila existente se reemplaza completa por la entrante.
        """
