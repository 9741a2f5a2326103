"""
Store destino Postgres (psycopg v3, async).

UPSERT por clave de conflicto con reemplazo completo:
todas las columnas no-PK se pisan con EXCLUDED.
El batch se ejecuta en una sola transacción (commit al cerrar la conexión).
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import psycopg
from loguru import logger

from data_factory.application.interfaces.stores import UpsertResponse


def _quote(identifier: str) -> str:
    if '"' in identifier:
        raise ValueError(f"Identificador inválido: {identifier!r}")
    return f'"{identifier}"'


def build_upsert_sql(
    *,
    schema: str,
    table: str,
    columns: Sequence[str],
    conflict_key: str,
) -> str:
    """
    Genera INSERT ... ON CONFLICT (pk) DO UPDATE SET col = EXCLUDED.col.

    Si la única columna es la PK no hay nada que reemplazar: DO NOTHING.
    """
    if conflict_key not in columns:
        raise ValueError(f"Falta la clave '{conflict_key}' en las filas del UPSERT")

    insert_cols_sql = ", ".join(_quote(c) for c in columns)
    placeholders = ", ".join(["%s"] * len(columns))

    # SET para UPDATE: no actualizamos PK.
    update_cols = [c for c in columns if c != conflict_key]
    if update_cols:
        set_sql = ", ".join(f"{_quote(c)} = EXCLUDED.{_quote(c)}" for c in update_cols)
        action = f"DO UPDATE SET {set_sql}"
    else:
        action = "DO NOTHING"

    return (
        f"INSERT INTO {_quote(schema)}.{_quote(table)} ({insert_cols_sql}) "
        f"VALUES ({placeholders}) "
        f"ON CONFLICT ({_quote(conflict_key)}) {action}"
    )


class PostgresTargetStore:
    def __init__(self, dsn: str, *, schema: str = "public") -> None:
        self._dsn = dsn
        self._schema = schema

    async def connect(self) -> psycopg.AsyncConnection:
        """
        Abre conexión (autocommit False). Al salir del `async with` psycopg
        hace commit, o rollback si hubo excepción.
        """
        return await psycopg.AsyncConnection.connect(self._dsn)

    async def upsert(
        self,
        table: str,
        rows: Sequence[Mapping[str, Any]],
        *,
        on_conflict: str,
    ) -> UpsertResponse:
        rows_list = list(rows)
        if not rows_list:
            return UpsertResponse(count=0)

        # Columnas: asumimos que todas las filas traen el mismo conjunto.
        columns = list(rows_list[0].keys())
        try:
            sql = build_upsert_sql(
                schema=self._schema,
                table=table,
                columns=columns,
                conflict_key=on_conflict,
            )
        except ValueError as e:
            return UpsertResponse.failure(str(e), code="INVALID_ROWS")

        values = [tuple(row.get(c) for c in columns) for row in rows_list]

        try:
            conn = await self.connect()
            async with conn:
                async with conn.cursor() as cur:
                    await cur.executemany(sql, values)
                    affected = cur.rowcount
        except psycopg.Error as e:
            message = str(e).strip() or e.__class__.__name__
            logger.error(f'UPSERT en "{self._schema}"."{table}" falló: {message}')
            return UpsertResponse.failure(message, code=getattr(e, "sqlstate", None))

        return UpsertResponse(count=affected if affected and affected > 0 else len(values))
