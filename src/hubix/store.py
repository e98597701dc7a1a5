"""Token storage for long-running hubIC consumers.

A store is created by the application and passed to whatever needs the
current tokens; there is no module-level instance.
"""

from __future__ import annotations

import threading
from typing import Protocol

from hubix.auth.models.tokens import TokenState


class TokenStore(Protocol):
    """Holds the current token state for one hubIC account."""

    def get(self) -> TokenState | None:
        ...

    def set(self, state: TokenState | None) -> None:
        ...


class InMemoryTokenStore:
    """Process-local store. Not persisted across restarts."""

    def __init__(self, state: TokenState | None = None):
        self._state = state
        self._lock = threading.Lock()

    def get(self) -> TokenState | None:
        with self._lock:
            return self._state

    def set(self, state: TokenState | None) -> None:
        with self._lock:
            self._state = state
