import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List


class PropertyLockRegistry:
    """One lock per property id, so check-and-insert on a property is serialised
    within this process while different properties proceed in parallel.

    Entries are reference counted over holders and waiters and dropped when the
    last one leaves, so the registry only holds properties in use right now.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # property id -> [lock, holders and waiters]
        self._locks: Dict[str, List] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_entry(self, key: str) -> List:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = self._locks[key] = [threading.Lock(), 0]
            entry[1] += 1
            return entry

    def _release_entry(self, key: str, entry: List) -> None:
        with self._guard:
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, property_id: str) -> Iterator[None]:
        key = str(property_id)
        entry = self._acquire_entry(key)
        try:
            with entry[0]:
                yield
        finally:
            self._release_entry(key, entry)
