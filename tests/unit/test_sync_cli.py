"""
Tests del runner CLI: parseo de argumentos y códigos de salida.
"""
from unittest.mock import AsyncMock, patch

import pytest

from data_factory.application.dto import SyncOutcome, SyncResult
from data_factory.shared.exceptions import SourceUnavailable, SyncFailed
from data_factory import cli


def test_parse_args_defaults():
    args = cli.parse_args([])

    assert args.dry_run is False
    assert args.tenant_id is None
    assert args.limit is None


def test_parse_args_flags():
    args = cli.parse_args(["--dry-run", "--tenant-id", "acme", "--limit", "50"])

    assert args.dry_run is True
    assert args.tenant_id == "acme"
    assert args.limit == 50


def test_main_returns_zero_on_success():
    result = SyncResult(record_count=4, dry_run=True, outcome=SyncOutcome.DRY_RUN)

    with patch.object(cli, "configure_logging"), \
            patch.object(cli, "run", new_callable=AsyncMock, return_value=result) as mock_run:
        assert cli.main(["--dry-run"]) == 0

    args = mock_run.call_args.args[0]
    assert args.dry_run is True


@pytest.mark.parametrize("error", [SyncFailed("Target upsert failed: boom"), SourceUnavailable("down")])
def test_main_returns_one_on_sync_errors(error):
    with patch.object(cli, "configure_logging"), \
            patch.object(cli, "run", new_callable=AsyncMock, side_effect=error):
        assert cli.main([]) == 1


@pytest.mark.asyncio
async def test_run_applies_limit_override_and_disposes_stores():
    stores = AsyncMock()
    expected = SyncResult(record_count=0, dry_run=False, outcome=SyncOutcome.SYNCED)
    args = cli.parse_args(["--limit", "7", "--tenant-id", "acme"])

    with patch.object(cli, "build_stores", return_value=stores), \
            patch.object(cli, "sync_properties", new_callable=AsyncMock, return_value=expected) as mock_sync:
        result = await cli.run(args, cli.Settings(_env_file=None))

    assert result is expected
    options = mock_sync.call_args.args[0]
    assert options.tenant_id == "acme"
    assert options.dry_run is False
    assert mock_sync.call_args.kwargs["settings"].SYNC_PAGE_LIMIT == 7
    stores.dispose.assert_awaited_once()
