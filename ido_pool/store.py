"""Pool record storage keyed by pool address."""

from __future__ import annotations

import threading

import structlog

from ido_pool.errors import PoolAlreadyExists, PoolNotFound
from ido_pool.models.pool import PoolAccount

logger = structlog.get_logger()


class PoolStore:
    """In-memory store of pool records.

    Creating a record at an address that is already in use fails; this is the
    only guard against initializing the same pool twice.
    """

    def __init__(self) -> None:
        self._pools: dict[str, PoolAccount] = {}
        self._lock = threading.Lock()

    def create(self, address: str, pool: PoolAccount) -> None:
        """Persist a new pool record.

        Raises:
            PoolAlreadyExists: If a record exists at address
        """
        with self._lock:
            if address in self._pools:
                raise PoolAlreadyExists(f"Pool already initialized: {address}")
            self._pools[address] = pool
        logger.debug("pool_record_created", pool=address)

    def get(self, address: str) -> PoolAccount:
        """Load a pool record.

        Raises:
            PoolNotFound: If no record exists at address
        """
        pool = self._pools.get(address)
        if pool is None:
            raise PoolNotFound(f"Unknown pool: {address}")
        return pool

    def __contains__(self, address: object) -> bool:
        return address in self._pools

    def __len__(self) -> int:
        return len(self._pools)

    def addresses(self) -> list[str]:
        return sorted(self._pools)
