"""Credential cache - one shared, lazily refreshed vendor bearer token."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from poap_minter.models.poap import Credential

log = logging.getLogger(__name__)


class CredentialCache:
    """Holds the current vendor credential for the whole process.

    Readers get the cached credential only while it is unexpired. A refresh
    replaces the whole (immutable) Credential; concurrent refreshes are
    harmless and the last writer wins.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._credential: Credential | None = None

    def now(self) -> float:
        return self._clock()

    def get(self) -> Credential | None:
        """The cached credential, or None if absent or expired."""
        with self._lock:
            credential = self._credential
        if credential is None or not credential.is_valid(self._clock()):
            return None
        return credential

    def store(self, token: str, expires_in: float, safety_margin: float = 60) -> Credential:
        """Cache a freshly issued token, shortening its lifetime by ``safety_margin``."""
        credential = Credential(
            token=token,
            expires_at=self._clock() + max(expires_in - safety_margin, 0),
        )
        with self._lock:
            self._credential = credential
        log.debug("Cached vendor credential (valid for %ds)", max(expires_in - safety_margin, 0))
        return credential

    def clear(self) -> None:
        with self._lock:
            self._credential = None
