"""
Casos de uso del job.
"""
from .property_sync_use_cases import PropertySyncJob, build_property_sync, sync_properties

__all__ = [
    "PropertySyncJob",
    "build_property_sync",
    "sync_properties",
]
