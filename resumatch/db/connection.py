"""Process-wide PostgreSQL connection pool for the job catalog."""

import logging
import threading
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from psycopg2.pool import ThreadedConnectionPool

from resumatch.config import (
    DATABASE_URL,
    PGDATABASE,
    PGHOST,
    PGPASSWORD,
    PGPORT,
    PGSSLMODE,
    PGUSER,
    POOL_IDLE_TIMEOUT,
    POOL_MAX_SIZE,
)
from resumatch.errors import ConfigurationError

logger = logging.getLogger(__name__)

_pool: "CatalogPool | None" = None
_pool_lock = threading.Lock()


class CatalogPool(ThreadedConnectionPool):
    """Bounded, thread-safe connection pool that reclaims idle connections.

    Returned connections are kept for reuse, up to ``max_size`` in total.
    Connections that have sat unused in the pool for longer than
    ``idle_timeout`` seconds are closed on the next checkout.
    """

    def __init__(self, max_size: int, idle_timeout: float, **connect_kwargs: Any):
        # minconn=0: nothing is opened until the first checkout
        super().__init__(0, max_size, **connect_kwargs)
        # psycopg2 keeps a returned connection only while fewer than
        # minconn are pooled, so raise the floor to the bound
        self.minconn = max_size
        self.max_size = max_size
        self.idle_timeout = idle_timeout
        self._returned_at: dict[int, float] = {}

    def getconn(self, key: Any = None) -> Any:
        """Check out a live connection.

        Raises:
            psycopg2.pool.PoolError: If all connections are in use.
            psycopg2.OperationalError: If a new connection cannot be opened.
        """
        self._reclaim_idle()
        while True:
            conn = super().getconn(key)
            with self._lock:
                self._returned_at.pop(id(conn), None)

            if not conn.closed:
                return conn

            # Dropped by the server while pooled
            super().putconn(conn, key=key, close=True)

    def putconn(self, conn: Any, key: Any = None, close: bool = False) -> None:
        """Return a connection; open transactions are rolled back by psycopg2."""
        with self._lock:
            self._returned_at[id(conn)] = time.monotonic()
        super().putconn(conn, key=key, close=close)
        if conn.closed:
            with self._lock:
                self._returned_at.pop(id(conn), None)

    def closeall(self) -> None:
        super().closeall()
        with self._lock:
            self._returned_at.clear()

    def _reclaim_idle(self) -> None:
        now = time.monotonic()
        with self._lock:
            idle = [
                conn for conn in self._pool
                if now - self._returned_at.get(id(conn), now) > self.idle_timeout
            ]
            for conn in idle:
                self._pool.remove(conn)
                del self._returned_at[id(conn)]

        for conn in idle:
            conn.close()
        if idle:
            logger.debug(f"Closed {len(idle)} idle catalog connection(s)")


def _connect_kwargs() -> dict[str, Any]:
    """Build psycopg2 connection arguments from configuration.

    Raises:
        ConfigurationError: If neither DATABASE_URL nor the PG* variables are set.
    """
    if DATABASE_URL:
        return {"dsn": DATABASE_URL.strip()}

    required = {
        "PGHOST": PGHOST,
        "PGDATABASE": PGDATABASE,
        "PGUSER": PGUSER,
        "PGPASSWORD": PGPASSWORD,
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required PostgreSQL environment variables: {', '.join(missing)}",
            config_key=missing[0],
        )

    return {
        "host": PGHOST.strip(),
        "dbname": PGDATABASE.strip(),
        "user": PGUSER.strip(),
        "password": PGPASSWORD.strip(),
        "port": PGPORT,
        "sslmode": PGSSLMODE,
    }


def get_pool() -> CatalogPool:
    """Get the process-wide pool, creating it on first use.

    Initialization is guarded so that concurrent first callers share a
    single pool.
    """
    global _pool
    if _pool is None:
        with _pool_lock:
            if _pool is None:
                kwargs = _connect_kwargs()
                _pool = CatalogPool(POOL_MAX_SIZE, POOL_IDLE_TIMEOUT, **kwargs)
                logger.info(f"Created catalog connection pool (max {POOL_MAX_SIZE} connections)")
    return _pool


def close_pool() -> None:
    """Close all pooled connections and forget the pool."""
    global _pool
    with _pool_lock:
        if _pool is not None:
            _pool.closeall()
            _pool = None


@contextmanager
def get_connection() -> Generator[Any, None, None]:
    """Check out a catalog connection for the duration of the block.

    Yields:
        psycopg2 connection, returned to the pool on exit.
    """
    pool = get_pool()
    conn = pool.getconn()
    try:
        yield conn
    finally:
        pool.putconn(conn)
