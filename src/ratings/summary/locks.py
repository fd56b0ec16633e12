"""Per-provider mutual exclusion for review mutations.

Every mutation that can change a provider's Rating Summary runs under that
provider's lock for the whole write → recompute → commit sequence, so two
concurrent changes to the same provider are linearized. Different providers
use different locks and never wait on each other.

Within a process the lock is a re-entrant thread lock. When the default
database is PostgreSQL the outermost hold also takes a session-level
advisory lock keyed on the provider id, which serializes the same provider
across worker processes.
"""

import threading
from contextlib import contextmanager, nullcontext

from protean.utils.globals import current_domain
from sqlalchemy import create_engine, text

_engines = {}  # database_uri -> Engine


def _default_conn_info():
    return current_domain.providers["default"].conn_info


def _engine_for(database_uri):
    engine = _engines.get(database_uri)
    if engine is None:
        engine = _engines[database_uri] = create_engine(database_uri, pool_pre_ping=True)
    return engine


@contextmanager
def advisory_lock(key):
    """Hold a PostgreSQL advisory lock on ``key``; a no-op on other providers."""
    conn_info = _default_conn_info()
    if conn_info["provider"] != "postgresql":
        yield
        return

    engine = _engine_for(conn_info["database_uri"])
    with engine.connect().execution_options(isolation_level="AUTOCOMMIT") as connection:
        connection.execute(text("SELECT pg_advisory_lock(hashtext(:key))"), {"key": key})
        try:
            yield
        finally:
            connection.execute(text("SELECT pg_advisory_unlock(hashtext(:key))"), {"key": key})


class ProviderLocks:
    """Registry of re-entrant locks keyed by provider id.

    ``cross_process`` is called with the provider key on the outermost hold
    and must return a context manager; nested holds by the same thread do
    not call it again. Idle locks are dropped once no thread holds or waits
    on them.
    """

    def __init__(self, cross_process=None):
        self._guard = threading.Lock()
        self._locks = {}  # provider_id -> [RLock, users, depth]
        self._cross_process = cross_process or (lambda key: nullcontext())

    @contextmanager
    def hold(self, provider_id):
        key = str(provider_id)
        with self._guard:
            entry = self._locks.setdefault(key, [threading.RLock(), 0, 0])
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            # Only the thread owning the RLock touches the depth counter
            entry[2] += 1
            try:
                if entry[2] == 1:
                    with self._cross_process(key):
                        yield
                else:
                    yield
            finally:
                entry[2] -= 1
        finally:
            lock.release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]

    def __len__(self):
        with self._guard:
            return len(self._locks)


provider_locks = ProviderLocks(cross_process=advisory_lock)
