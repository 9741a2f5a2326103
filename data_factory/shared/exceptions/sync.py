"""
Excepciones del pipeline de sincronización.

Todas son fatales para la corrida: se propagan sin reintentos al caller
del punto de entrada, que decide si vuelve a ejecutar el job completo.
"""
from typing import Any, Dict, Optional

from data_factory.shared.exceptions.base import AppException


class SyncException(AppException):
    """Excepción base para errores del pipeline."""

    def __init__(self, message: str, error_code: str = "SYNC_ERROR", details=None):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details
        )


class SourceUnavailable(SyncException):
    """El store origen no responde o la consulta de extracción falló."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="SOURCE_UNAVAILABLE",
            details=details
        )


class SyncFailed(SyncException):
    """El upsert en el store destino falló; conserva el mensaje del destino."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="SYNC_FAILED",
            details=details
        )


class SyncConfigError(SyncException):
    """Error de configuración del pipeline."""

    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="SYNC_CONFIG_ERROR",
            details=details
        )
