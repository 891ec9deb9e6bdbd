"""
Credential stores.

A credential store persists the access and refresh credentials as plain
key/value pairs. It is the only mutable state shared between concurrent
requests, so every read and write happens under the store's lock and
``set_many``/``clear_many`` are atomic with respect to other readers.
"""

import threading
from typing import Dict, Iterable, Optional

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"

TOKEN_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)


class CredentialStore:
    """
    Base key/value credential store.

    Subclasses implement ``_read``, ``_write`` and ``_delete``; locking is
    handled here.
    """

    def __init__(self):
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._write(key, value)

    def clear(self, key: str) -> None:
        with self._lock:
            self._delete(key)

    def set_many(self, values: Dict[str, str]) -> None:
        """Write several keys so no reader sees a partial update."""
        with self._lock:
            for key, value in values.items():
                self._write(key, value)

    def clear_many(self, keys: Iterable[str] = TOKEN_KEYS) -> None:
        with self._lock:
            for key in keys:
                self._delete(key)

    def _read(self, key):
        raise NotImplementedError

    def _write(self, key, value):
        raise NotImplementedError

    def _delete(self, key):
        raise NotImplementedError


class InMemoryCredentialStore(CredentialStore):
    """Process-local store, used by scripts and tests."""

    def __init__(self, initial=None):
        super().__init__()
        self._values = dict(initial or {})

    def _read(self, key):
        return self._values.get(key)

    def _write(self, key, value):
        self._values[key] = value

    def _delete(self, key):
        self._values.pop(key, None)


class DjangoSessionCredentialStore(CredentialStore):
    """
    Store credentials in the driver's Django session.

    Both tokens live under one session key, so they survive page reloads for
    as long as the browser session does.
    """

    SESSION_KEY = "_hos_credentials"

    def __init__(self, session):
        super().__init__()
        self.session = session

    def _credentials(self):
        return dict(self.session.get(self.SESSION_KEY) or {})

    def _read(self, key):
        return self._credentials().get(key)

    def _write(self, key, value):
        credentials = self._credentials()
        credentials[key] = value
        self.session[self.SESSION_KEY] = credentials

    def _delete(self, key):
        credentials = self._credentials()
        if key not in credentials:
            return
        credentials.pop(key)
        if credentials:
            self.session[self.SESSION_KEY] = credentials
        else:
            self.session.pop(self.SESSION_KEY, None)
