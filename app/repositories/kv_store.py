"""
Key-value store clients for the leaderboard record.

``ReplitDatabase`` speaks the Replit Database HTTP protocol with ``requests``;
``MemoryStore`` keeps values in process and backs the test suite. Both expose
``get(key)`` / ``set(key, value)``; ``ReplitDatabase`` raises ``StoreError`` on
failure, including every call made without a store URL. Values are JSON documents.
"""
from __future__ import annotations

import json
import threading
from copy import deepcopy
from typing import Any, Optional, Protocol
from urllib.parse import quote

import requests

from app.core.errors import StoreError


class KeyValueStore(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class ReplitDatabase:
    """Blocking client for a Replit Database URL."""

    def __init__(self, url: Optional[str], timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.url = (url or "").rstrip("/")
        self.timeout = float(timeout)
        self._session = session or requests.Session()

    def _require_url(self) -> str:
        if not self.url:
            raise StoreError("REPLIT_DB_URL is not configured")
        return self.url

    def get(self, key: str) -> Any:
        """Return the decoded value for ``key``, or ``None`` when the key is missing.

        A body that is not valid JSON is returned as the raw string so the
        caller can decide whether the record is usable.
        """
        url = f"{self._require_url()}/{quote(key, safe='')}"
        try:
            response = self._session.get(url, timeout=self.timeout)
            if response.status_code == 404:
                return None
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise StoreError(f"GET {key} failed: {exc}") from exc

        body = response.text
        if not body:
            return None
        try:
            return json.loads(body)
        except (json.JSONDecodeError, ValueError):
            return body

    def set(self, key: str, value: Any) -> None:
        url = self._require_url()
        payload = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        try:
            response = self._session.post(url, data={key: payload}, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise StoreError(f"SET {key} failed: {exc}") from exc

    def close(self):
        self._session.close()


class MemoryStore:
    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._lock = threading.RLock()
        self._data: dict[str, Any] = deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any:
        with self._lock:
            return deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = deepcopy(value)

    def close(self):
        return None


def build_store(settings) -> ReplitDatabase:
    return ReplitDatabase(settings.store_url, timeout=settings.store_timeout_seconds)
