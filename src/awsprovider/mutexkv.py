"""Named mutexes for serialising operations on a shared remote object."""

import threading
from contextlib import contextmanager
from typing import Iterator

from awsprovider.helpers.logger import get_logger

logger = get_logger(__name__)


class MutexKV:
    """
    Registry of locks keyed by string.

    A lock is created the first time its key is used and is never removed.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._store: dict[str, threading.Lock] = {}

    def lock(self, key: str) -> None:
        logger.debug("Locking %r", key)
        self._get(key).acquire()
        logger.debug("Locked %r", key)

    def unlock(self, key: str) -> None:
        logger.debug("Unlocking %r", key)
        try:
            self._get(key).release()
        except RuntimeError as e:
            raise RuntimeError(f"unlock of unlocked key {key!r}") from e
        logger.debug("Unlocked %r", key)

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        self.lock(key)
        try:
            yield
        finally:
            self.unlock(key)

    def _get(self, key: str) -> threading.Lock:
        with self._guard:
            mutex = self._store.get(key)
            if mutex is None:
                mutex = threading.Lock()
                self._store[key] = mutex
            return mutex

    def __len__(self) -> int:
        with self._guard:
            return len(self._store)


# Process-wide instance shared by all resources.
aws_mutex_kv = MutexKV()
