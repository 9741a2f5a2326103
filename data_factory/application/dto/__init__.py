"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import SyncOptions, SyncOutcome, SyncResult, LoadOutcome

__all__ = [
    "SyncOptions",
    "SyncOutcome",
    "SyncResult",
    "LoadOutcome",
]
