import threading
from contextlib import contextmanager


class AssetLocks:
    """Registry of re-entrant locks, one per asset id.

    A check-in that hands the asset straight to the next hold re-enters
    the check-out path while still holding the asset's lock, hence RLock.

    Locks are never evicted: one RLock is kept for every asset id seen,
    so the registry grows to the size of the circulating catalog.
    """

    def __init__(self):
        self._locks = {}
        self._guard = threading.Lock()

    def get(self, asset_id) -> threading.RLock:
        with self._guard:
            if asset_id not in self._locks:
                self._locks[asset_id] = threading.RLock()
            return self._locks[asset_id]

    @contextmanager
    def acquire(self, asset_id):
        with self.get(asset_id):
            yield

# Shared by every CirculationService in the process
ASSET_LOCKS = AssetLocks()
