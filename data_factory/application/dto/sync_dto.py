"""
DTOs de entrada y salida del job de sincronizacion.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncOptions(BaseModel):
    """Opciones de una corrida del job."""

    model_config = ConfigDict(frozen=True)

    tenant_id: Optional[str] = Field(
        None,
        description="Identificador de tenant para jobs multi-tenant"
    )
    dry_run: bool = Field(
        False,
        description="Si es True, solo lee del origen y no escribe en el destino"
    )


class SyncOutcome(str, Enum):
    """Estado terminal de una corrida exitosa."""
    SYNCED = "synced"
    DRY_RUN = "dry_run"


@dataclass(frozen=True)
class SyncResult:
    """
    Resultado resumido de una corrida.

    Una corrida fallida lanza excepcion, por lo que este objeto
    siempre representa un exito (sync real o dry-run).
    """

    record_count: int
    dry_run: bool
    outcome: SyncOutcome


@dataclass(frozen=True)
class LoadOutcome:
    """Resultado del upsert de un batch en el destino."""

    success: bool
    rows_affected: int = 0
    error: Optional[str] = None

    @classmethod
    def ok(cls, rows_affected: int) -> "LoadOutcome":
        return cls(success=True, rows_affected=rows_affected)

    @classmethod
    def failed(cls, error: str) -> "LoadOutcome":
        return cls(success=False, error=error)
