"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/_base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
  - Resolver el pool (inyectado en tests / global en producción).
  - Ejecutar SQL parametrizado con errores consistentes:
      log estructurado + DatabaseError envolviendo la causa.

Collaborators:
  - psycopg_pool.ConnectionPool
  - infrastructure.db.pool.get_pool
  - crosscutting.exceptions.DatabaseError
  - crosscutting.logger.logger

Constraints / Notes:
  - Un `with pool.connection()` por llamada: commit al salir, rollback si falla.
  - Nunca interpolar input de usuario en el SQL.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fail(self, context_msg: str, extra: dict, exc: Exception) -> DatabaseError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return DatabaseError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _execute(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """R: Ejecuta DML y devuelve rowcount."""
        try:
            with self._get_pool().connection() as conn:
                cursor = conn.execute(query, tuple(params))
                return max(cursor.rowcount or 0, 0)
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _fetchone_with_row_lock(
        self,
        *,
        lock_query: str,
        lock_params: Iterable[object],
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
    ) -> tuple | None:
        """
        R: `SELECT ... FOR UPDATE` + query en una misma transacción.

        Bajo READ COMMITTED cada statement toma un snapshot nuevo: la query
        corre después de obtener el lock y ve todo lo commiteado hasta ahí.
        Devuelve None si la fila a bloquear no existe.
        """
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    locked = conn.execute(lock_query, tuple(lock_params)).fetchone()
                    if locked is None:
                        return None
                    return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc
