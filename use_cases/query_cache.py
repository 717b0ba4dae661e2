"""Memoized reads and invalidating writes on top of the API gateway.

Reads (``query``) are keyed by a tuple. A fresh ``success`` entry is
served from memory; otherwise the fetcher runs once and every caller
that arrives while it is running waits for that single result.

Writes (``mutate``) always reach the server once per call. Only after
the call succeeds are the dependent keys marked stale; a stale entry
keeps its data for display until the next ``query`` refetches it.
"""

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Literal, Optional, Tuple

from use_cases.messages import describe_error

log = logging.getLogger(__name__)

CacheKey = Tuple[Any, ...]
EntryStatus = Literal["idle", "loading", "success", "error"]


@dataclass(frozen=True)
class CacheEntry:
    key: CacheKey
    status: EntryStatus = "idle"
    data: Any = None
    error: Optional[Exception] = None
    last_fetched_at: Optional[datetime] = None
    stale: bool = False

    @property
    def is_loading(self) -> bool:
        return self.status == "loading"

    @property
    def is_error(self) -> bool:
        return self.status == "error"

    @property
    def is_success(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    data: Any = None
    error: Optional[Exception] = None

    def message(self, fallback: str) -> str:
        if self.ok:
            return ""
        return describe_error(self.error, fallback)


def _as_key(key: Iterable[Any]) -> CacheKey:
    return key if isinstance(key, tuple) else tuple(key)


def _depends_on(key: CacheKey, prefix: CacheKey) -> bool:
    return key[:len(prefix)] == prefix


class QueryCache:
    def __init__(self, clock: Callable[[], datetime] = datetime.utcnow):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._in_flight: Dict[CacheKey, Future] = {}

    def get(self, key: Iterable[Any]) -> CacheEntry:
        key = _as_key(key)
        with self._lock:
            return self._entries.get(key, CacheEntry(key))

    def query(self, key: Iterable[Any], fetcher: Callable[[], Any]) -> CacheEntry:
        key = _as_key(key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_success and not entry.stale:
                return entry
            waiting = self._in_flight.get(key)
            if waiting is None:
                future: Future = Future()
                self._in_flight[key] = future
                previous = entry or CacheEntry(key)
                self._entries[key] = replace(previous, status="loading", stale=False)

        if waiting is not None:
            log.debug(f"Joining in-flight fetch for {key}")
            return waiting.result()

        try:
            data = fetcher()
        except Exception as e:
            log.warning(f"Query {key} failed: {type(e).__name__}: {e}")
            result = replace(previous, status="error", error=e)
        except BaseException as e:
            with self._lock:
                self._in_flight.pop(key, None)
                self._entries[key] = previous
            future.set_exception(e)
            raise
        else:
            result = CacheEntry(key, status="success", data=data, last_fetched_at=self._clock())

        with self._lock:
            self._in_flight.pop(key, None)
            current = self._entries.get(key)
            # Not stored if the cache was cleared meanwhile; stays stale if invalidated meanwhile.
            if current is not None:
                result = replace(result, stale=current.stale)
                self._entries[key] = result
        future.set_result(result)
        return result

    def invalidate(self, *keys: Iterable[Any]) -> int:
        """Mark every entry under each key prefix stale. Returns how many were marked."""
        prefixes = [_as_key(k) for k in keys]
        marked = 0
        with self._lock:
            for existing_key, entry in list(self._entries.items()):
                if any(_depends_on(existing_key, prefix) for prefix in prefixes):
                    self._entries[existing_key] = replace(entry, stale=True)
                    marked += 1
        if marked:
            log.debug(f"Invalidated {marked} entries for {prefixes}")
        return marked

    def mutate(self, fetcher: Callable[[], Any], invalidates: Iterable[Iterable[Any]] = ()) -> MutationResult:
        try:
            data = fetcher()
        except Exception as e:
            log.warning(f"Mutation failed: {type(e).__name__}: {e}")
            return MutationResult(ok=False, error=e)
        self.invalidate(*list(invalidates))
        return MutationResult(ok=True, data=data)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
