"""
Utilidades para manejo de fechas y horas.
"""
from datetime import datetime, timezone


class DateTimeUtils:
    """Clase de utilidades para operaciones con fechas y horas."""

    @staticmethod
    def now_utc() -> datetime:
        """
        Obtiene la fecha y hora actual en UTC.

        Returns:
            datetime: Fecha y hora actual en UTC (aware)
        """
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """
        Normaliza datetime a UTC (aware).
        Un datetime naive se interpreta como UTC.
        """
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """
        Convierte un datetime a string ISO 8601 en UTC.

        Args:
            dt: Objeto datetime

        Returns:
            str: Fecha en formato ISO 8601 con sufijo 'Z'
        """
        dt_utc = DateTimeUtils.ensure_utc(dt)
        return dt_utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")
