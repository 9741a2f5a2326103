"""
Caso de uso: sincronizar una página de propiedades hacia dev_properties.

Flujo (una sola corrida, sin reintentos):
1. Extraer hasta `page_limit` registros del origen.
2. Dry-run: reportar cuántos se sincronizarían y salir sin escribir.
3. Transformar el batch completo (timestamp único por corrida).
4. Upsert del batch en una sola llamada; si falla se lanza SyncFailed.

El origen nunca se modifica, así que un fallo en la carga no requiere
acciones compensatorias: la corrida simplemente termina en error.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from data_factory.application.dto import SyncOptions, SyncOutcome, SyncResult
from data_factory.application.interfaces.stores import SourceStore, TargetStore
from data_factory.application.services.extractor import (
    ExtractionFilter,
    RecordExtractor,
    no_filter,
)
from data_factory.application.services.loader import UpsertLoader
from data_factory.application.services.transformer import RecordTransformer
from data_factory.core.config import Settings, settings as default_settings
from data_factory.shared.exceptions import SyncConfigError, SyncFailed

LOG_PREFIX = "[data-factory]"


class PropertySyncJob:
    """
    Orquestador del pipeline Extractor -> Transformer -> Loader.
    """

    def __init__(
        self,
        *,
        extractor: RecordExtractor,
        transformer: RecordTransformer,
        loader: UpsertLoader,
        page_limit: int = 100,
    ) -> None:
        if page_limit <= 0:
            raise SyncConfigError(f"page_limit debe ser positivo: {page_limit}", field="page_limit")
        self._extractor = extractor
        self._transformer = transformer
        self._loader = loader
        self._page_limit = page_limit

    async def run(self, options: Optional[SyncOptions] = None) -> SyncResult:
        """
        Ejecuta una corrida completa.

        Raises:
            SourceUnavailable: si la extracción falla (antes de cualquier escritura)
            SyncFailed: si el upsert en el destino falla
        """
        options = options or SyncOptions()
        if options.tenant_id:
            logger.info(f"{LOG_PREFIX} Tenant de la corrida: {options.tenant_id}")

        properties = await self._extractor.extract(self._page_limit, tenant_id=options.tenant_id)

        if options.dry_run:
            logger.info(f"{LOG_PREFIX} Would sync {len(properties)} properties")
            return SyncResult(
                record_count=len(properties),
                dry_run=True,
                outcome=SyncOutcome.DRY_RUN,
            )

        rows = self._transformer.transform_batch(properties)

        if rows:
            outcome = await self._loader.load(rows)
            if not outcome.success:
                logger.error(f"{LOG_PREFIX} Upsert en '{self._loader.table}' falló: {outcome.error}")
                raise SyncFailed(
                    f"Target upsert failed: {outcome.error}",
                    details={"table": self._loader.table, "records": len(rows)},
                )

        logger.success(
            f"{LOG_PREFIX} Synced {len(rows)} properties into {self._loader.table}"
        )
        return SyncResult(
            record_count=len(rows),
            dry_run=False,
            outcome=SyncOutcome.SYNCED,
        )


def build_property_sync(
    *,
    source: SourceStore,
    target: TargetStore,
    settings: Optional[Settings] = None,
    where: ExtractionFilter = no_filter,
) -> PropertySyncJob:
    """
    Arma el job con los stores inyectados y la configuración indicada.
    """
    cfg = settings or default_settings
    return PropertySyncJob(
        extractor=RecordExtractor(source, entity="property", where=where),
        transformer=RecordTransformer(),
        loader=UpsertLoader(
            target,
            table=cfg.SYNC_TARGET_TABLE,
            conflict_key=cfg.SYNC_CONFLICT_KEY,
        ),
        page_limit=cfg.SYNC_PAGE_LIMIT,
    )


async def sync_properties(
    options: Optional[SyncOptions] = None,
    *,
    source: SourceStore,
    target: TargetStore,
    settings: Optional[Settings] = None,
    where: ExtractionFilter = no_filter,
) -> SyncResult:
    """
    Punto de entrada único del job.

    Ejemplo:
        result = await sync_properties(SyncOptions(dry_run=True), source=src, target=dst)
    """
    job = build_property_sync(source=source, target=target, settings=settings, where=where)
    return await job.run(options)
