"""
Configuracion de loguru para ejecuciones del job (cron / manual).
"""
import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {message}"


def configure_logging(level: str = "INFO", log_file: str = "") -> None:
    """
    Reemplaza los sinks por defecto de loguru.

    Args:
        level: Nivel minimo de log (DEBUG, INFO, ...)
        log_file: Ruta de archivo opcional; si se indica, se agrega un sink rotativo
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)

    if log_file:
        logger.add(
            log_file,
            format=LOG_FORMAT,
            rotation="500 MB",
            retention="10 days",
            level=level
        )
