import logging

from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from filmorate_api.core.config import settings

_pool: AsyncConnectionPool | None = None


async def get_pool() -> AsyncConnectionPool:
    """
    Singleton-пул соединений к Postgres. Каждое соединение отдаёт строки
    как dict; выход из ``pool.connection()`` коммитит транзакцию.
    """
    global _pool
    if _pool is None:
        _pool = AsyncConnectionPool(
            settings.pg_dsn,
            min_size=settings.pg_pool_min,
            max_size=settings.pg_pool_max,
            kwargs={"row_factory": dict_row,
                    "application_name": settings.app_name},
            timeout=5,
            open=False,
        )
        await _pool.open()
        # быстрая проверка коннекта (не блокируем запуск дольше таймаута)
        try:
            async with _pool.connection() as conn:
                await conn.execute("SELECT 1")
        except Exception as e:
            logging.getLogger(__name__).warning(
                "postgres_ping_failed", extra={"err": str(e)})
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
