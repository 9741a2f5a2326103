"""
Transformación SourceRecord -> TargetRecord.

Reglas:
- Cada campo mapeado es opcional: si falta, trae un tipo inesperado o su
  transform falla, se guarda None. La transformación nunca lanza.
- updated_at se sella una sola vez por batch para que toda la corrida
  comparta el mismo timestamp.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Sequence

from loguru import logger

from data_factory.domain.entities import (
    PROPERTY_FIELD_MAPPINGS,
    FieldMapping,
    SourceRecord,
    TargetRecord,
)
from data_factory.shared.utils.datetime_utils import DateTimeUtils


def read_optional(record: SourceRecord, mapping: FieldMapping) -> Optional[Any]:
    """Lee un campo del registro; None si falta o no tiene la forma esperada."""
    raw = record.fields.get(mapping.source_field)
    if raw is None or not isinstance(raw, mapping.expected_type):
        return None
    if mapping.transform is None:
        return raw
    try:
        return mapping.transform(raw)
    except Exception as e:
        logger.debug(
            f"Record {record.id}: transform de '{mapping.source_field}' falló ({e}); se usa None"
        )
        return None


class RecordTransformer:
    """Mapea registros del origen a la forma de dev_properties."""

    def __init__(
        self,
        *,
        mappings: Sequence[FieldMapping] = PROPERTY_FIELD_MAPPINGS,
        clock: Callable[[], datetime] = DateTimeUtils.now_utc,
    ) -> None:
        self._mappings = tuple(mappings)
        self._clock = clock

    def transform(self, record: SourceRecord, *, synced_at: Optional[datetime] = None) -> TargetRecord:
        stamp = synced_at if synced_at is not None else self._clock()
        values = {m.target_column: read_optional(record, m) for m in self._mappings}
        return TargetRecord(
            id=record.id,
            county_name=values.get("county_name"),
            parcel_id=values.get("parcel_id"),
            updated_at=DateTimeUtils.to_iso_string(stamp),
        )

    def transform_batch(self, records: Iterable[SourceRecord]) -> list[TargetRecord]:
        synced_at = self._clock()
        return [self.transform(r, synced_at=synced_at) for r in records]
