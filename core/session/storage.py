# =============================================================================
# core/session/storage.py - Key/Value Persistence Boundary
# =============================================================================
# The logout flag lives in two key/value stores: the client-side storage
# (browser local storage) and the cookie jar the server can read. Both are
# external; this module defines the small interface the flag store needs and
# an in-memory implementation used for the client side and in tests.
#
# Any backend error must surface as StorageUnavailableError so callers can
# decide whether to fail open (guards) or abort (logout).
# =============================================================================

import logging
from typing import Protocol, runtime_checkable

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class StorageUnavailableError(ApplicationError):
    """Raised when the backing key/value storage cannot be read or written."""

    def __init__(self, operation: str, key: str, error: str):
        super().__init__(
            message=f"Storage {operation} failed for '{key}': {error}",
            code="STORAGE_UNAVAILABLE",
            suggestion="Check that cookies and site storage are enabled",
            details={"operation": operation, "key": key, "error": error},
        )


@runtime_checkable
class KeyValueStorage(Protocol):
    """Minimal string key/value store (local storage, a cookie jar)."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStorage:
    """
    Dict-backed KeyValueStorage.

    Stands in for browser local storage on the client side. Passing
    `available=False` makes every operation raise StorageUnavailableError,
    the same way a disabled or full browser storage behaves.
    """

    def __init__(self, initial: dict[str, str] | None = None, available: bool = True):
        self._data: dict[str, str] = dict(initial or {})
        self.available = available

    def _check(self, operation: str, key: str) -> None:
        if not self.available:
            raise StorageUnavailableError(operation, key, "storage is disabled")

    def get(self, key: str) -> str | None:
        self._check("read", key)
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check("write", key)
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._check("delete", key)
        self._data.pop(key, None)

    def __repr__(self) -> str:
        return f"MemoryStorage({self._data!r})"
