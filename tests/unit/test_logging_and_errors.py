import sys

from loguru import logger

from data_factory.core.logging import configure_logging
from data_factory.shared.exceptions import (
    AppException,
    SourceUnavailable,
    SyncConfigError,
    SyncException,
    SyncFailed,
)


def test_configure_logging_writes_file_sink(tmp_path):
    log_file = tmp_path / "sync.log"
    try:
        configure_logging("INFO", str(log_file))
        logger.debug("oculto")
        logger.info("[data-factory] Would sync 3 properties")
        logger.complete()
    finally:
        logger.remove()
        logger.add(sys.stderr)

    content = log_file.read_text(encoding="utf-8")
    assert "Would sync 3 properties" in content
    assert "oculto" not in content


def test_error_taxonomy():
    failed = SyncFailed("Target upsert failed: constraint violation", details={"table": "dev_properties"})

    assert isinstance(failed, SyncException)
    assert isinstance(failed, AppException)
    assert str(failed) == "Target upsert failed: constraint violation"
    assert failed.error_code == "SYNC_FAILED"
    assert failed.details == {"table": "dev_properties"}

    assert SourceUnavailable("down").error_code == "SOURCE_UNAVAILABLE"
    assert SourceUnavailable("down").details == {}

    config_error = SyncConfigError("limite invalido", field="limit")
    assert config_error.error_code == "SYNC_CONFIG_ERROR"
    assert config_error.details == {"field": "limit"}
