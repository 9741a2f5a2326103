"""
Excepciones del job.
"""
from .base import AppException
from .sync import SyncException, SourceUnavailable, SyncFailed, SyncConfigError

__all__ = [
    "AppException",
    "SyncException",
    "SourceUnavailable",
    "SyncFailed",
    "SyncConfigError",
]
