"""
Entidades del dominio de sincronización.
"""
from .records import (
    FieldMapping,
    PROPERTY_FIELD_MAPPINGS,
    SourceRecord,
    TargetRecord,
)

__all__ = [
    "FieldMapping",
    "PROPERTY_FIELD_MAPPINGS",
    "SourceRecord",
    "TargetRecord",
]
