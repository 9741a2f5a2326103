"""
CLI: propiedades (store origen) -> dev_properties (store de analítica).

Uso recomendado:
  - Ejecutar como job (cron / manual). Una sola corrida, sin reintentos.

Variables de entorno requeridas (Settings también las lee de un .env
en el directorio de trabajo, sin pisar el entorno):
  - SOURCE_DATABASE_URL (p.ej. postgresql+asyncpg://...)
  - TARGET_DATABASE_URL

Ejecución:
  data-factory-sync
  data-factory-sync --dry-run
  python -m data_factory.cli --tenant-id acme --limit 50
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Optional, Sequence

from loguru import logger

from data_factory.application.dto import SyncOptions, SyncResult
from data_factory.application.use_cases import sync_properties
from data_factory.core.config import Settings
from data_factory.core.logging import configure_logging
from data_factory.infrastructure.factory import build_stores
from data_factory.shared.exceptions import SyncException


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sync de propiedades hacia dev_properties")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Solo lee del origen y reporta cuántos registros se sincronizarían.",
    )
    parser.add_argument(
        "--tenant-id",
        default=None,
        help="Tenant de la corrida (se registra en logs; el filtro por defecto no lo aplica).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Tamaño máximo de página (override de SYNC_PAGE_LIMIT).",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> SyncResult:
    if args.limit is not None:
        settings = settings.model_copy(update={"SYNC_PAGE_LIMIT": args.limit})

    stores = build_stores(settings)
    try:
        return await sync_properties(
            SyncOptions(tenant_id=args.tenant_id, dry_run=args.dry_run),
            source=stores.source,
            target=stores.target,
            settings=settings,
        )
    finally:
        await stores.dispose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info("Iniciando sync de propiedades...")
    try:
        result = asyncio.run(run(args, settings))
    except SyncException as e:
        logger.error(f"Sync abortado [{e.error_code}]: {e.message}")
        return 1

    logger.info(f"Sync OK: records={result.record_count}, outcome={result.outcome.value}")
    return 0


def cli() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
