# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import IO, Optional

try:
    import fcntl
except ImportError:  # Windows has no flock; locking is skipped there
    fcntl = None  # type: ignore[assignment]


class EntriesLockError(Exception):
    """Raised when another process already holds the entries lock."""

    pass


class EntriesLock:
    """
    Advisory lock held around one load-mutate-save cycle of the entries file.

    Uses flock on a sidecar file, so it only excludes other stint
    processes that take the same lock.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._handle: Optional[IO[str]] = None

    @property
    def is_held(self) -> bool:
        return self._handle is not None

    def acquire(self, blocking: bool = False) -> None:
        if self._handle is not None or fcntl is None:
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(self.path, "a")
        flags = fcntl.LOCK_EX
        if not blocking:
            flags |= fcntl.LOCK_NB
        try:
            fcntl.flock(handle.fileno(), flags)
        except BlockingIOError as e:
            handle.close()
            raise EntriesLockError(
                f"{self.path} is locked by another stint process"
            ) from e
        self._handle = handle

    def release(self) -> None:
        if self._handle is None or fcntl is None:
            return
        try:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "EntriesLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


ENTRIES_LOCK: Optional[EntriesLock] = None


def acquire_entries_lock(path: Path) -> EntriesLock:
    global ENTRIES_LOCK

    if ENTRIES_LOCK is None or ENTRIES_LOCK.path != path:
        release_entries_lock()
        ENTRIES_LOCK = EntriesLock(path)
    ENTRIES_LOCK.acquire()
    return ENTRIES_LOCK


def release_entries_lock() -> None:
    if ENTRIES_LOCK is not None:
        ENTRIES_LOCK.release()
