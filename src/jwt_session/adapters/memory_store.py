from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional

from ..domain.constants import DEFAULT_STORAGE_KEY
from ..domain.exceptions import StorageError
from ..domain.ports import SessionStore

logger = logging.getLogger(__name__)


class MappingSessionStore(SessionStore):
    """
    SessionStore over any mutable mapping, keyed by `key`.

    Suits session-scoped containers such as Starlette's `request.session`.
    Writes overwrite, clears are idempotent, and there is no locking.
    """

    def __init__(
        self,
        backend: MutableMapping[str, Any],
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        if not key:
            raise ValueError("Storage key must not be empty")
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def read(self) -> Optional[str]:
        try:
            value = self._backend.get(self._key)
        except (TypeError, OSError, RuntimeError, AssertionError) as exc:
            raise StorageError(f"Cannot read {self._key!r}: {exc}") from exc
        # anything other than a non-empty string counts as absent
        if not isinstance(value, str) or not value:
            return None
        return value

    def write(self, token: str) -> None:
        try:
            self._backend[self._key] = token
        except (TypeError, OSError, RuntimeError, AssertionError) as exc:
            raise StorageError(f"Cannot write {self._key!r}: {exc}") from exc
        logger.debug("Stored session token under %r", self._key)

    def clear(self) -> None:
        try:
            self._backend.pop(self._key, None)
        except (TypeError, OSError, RuntimeError, AssertionError) as exc:
            raise StorageError(f"Cannot clear {self._key!r}: {exc}") from exc
        logger.debug("Cleared session token under %r", self._key)


class InMemorySessionStore(MappingSessionStore):
    """
    Process-scoped store: the token lives as long as the interpreter does.

    Pass a shared dict as `backend` to keep several keys side by side.
    """

    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        backend: Optional[MutableMapping[str, Any]] = None,
    ) -> None:
        super().__init__(backend if backend is not None else {}, key=key)
