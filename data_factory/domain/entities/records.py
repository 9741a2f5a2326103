"""
Registros que fluyen por el pipeline origen -> destino.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Optional

Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class SourceRecord:
    """
    Snapshot de una fila del store origen.

    fields contiene las columnas de la entidad por nombre de atributo;
    cualquier campo puede faltar o venir con un tipo inesperado.
    """

    id: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TargetRecord:
    """
    Fila persistida en dev_properties.

    Los campos mapeados son opcionales: si el origen no los trae (o los trae
    con otra forma) quedan en None. updated_at es ISO-8601 UTC.
    """

    id: str
    county_name: Optional[str]
    parcel_id: Optional[str]
    updated_at: str

    def to_row(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FieldMapping:
    """
    Define el mapeo de un campo del origen a una columna del destino.

    - source_field: nombre del campo en SourceRecord.fields
    - target_column: nombre del atributo/columna en TargetRecord
    - expected_type: tipo aceptado; cualquier otro valor se mapea a None
    - transform: función opcional aplicada al valor ya validado
    """

    source_field: str
    target_column: str
    expected_type: type = str
    transform: Optional[Transform] = None


PROPERTY_FIELD_MAPPINGS: tuple[FieldMapping, ...] = (
    FieldMapping(source_field="county_name", target_column="county_name"),
    FieldMapping(source_field="parcel_id", target_column="parcel_id"),
)
