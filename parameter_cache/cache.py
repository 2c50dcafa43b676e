"""
Read-through, time-expiring cache for parameter store values.

Every public operation holds one cache-wide lock for its whole duration,
including the parameter store call on a refresh. Unrelated keys therefore
wait on each other, and at most one fetch is in flight per cache.

Freshness is judged on a monotonic timer so wall clock steps cannot stretch
or cut an entry's lifetime. The wall clock only stamps ``Entry.expires``.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

import boto3

from shared.config import CacheSettings, get_config
from shared.errors import FetchFailure
from shared.logging import get_logger
from shared.metrics import CacheMetrics
from .defaults import CacheDefaults, get_defaults
from .fetcher import ParameterFetcher
from .ssm import SSMParameterFetcher


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Entry:
    """A cached parameter value and the instant it goes stale.

    ``deadline`` is on the cache's monotonic timer; ``expires`` is the same
    instant on the wall clock.
    """
    value: str
    expires: datetime
    deadline: float

    def is_fresh(self, now: float) -> bool:
        return now < self.deadline


class Cache(ABC):
    """Read access to cached parameters."""

    @abstractmethod
    def get(self, key: str) -> str:
        """Return the value for key, refreshing it when missing or stale."""

    @abstractmethod
    def get_with_option(self, key: str, decrypt: bool) -> str:
        """Like get, with an explicit decrypt flag."""

    @abstractmethod
    def force_refresh(self, key: str) -> None:
        """Refresh key from the parameter store regardless of freshness."""

    @abstractmethod
    def force_refresh_with_option(self, key: str, decrypt: bool) -> None:
        """Like force_refresh, with an explicit decrypt flag."""


class ParameterCache(Cache):
    """Parameter cache backed by a ParameterFetcher."""

    def __init__(self,
                 fetcher: ParameterFetcher,
                 defaults: Optional[CacheDefaults] = None,
                 *,
                 clock: Callable[[], datetime] = utcnow,
                 timer: Callable[[], float] = time.monotonic,
                 metrics: Optional[CacheMetrics] = None):
        self.fetcher = fetcher
        self.defaults = defaults or get_defaults()
        self.clock = clock
        self.timer = timer
        self.metrics = metrics or CacheMetrics()
        self.logger = get_logger("parameter_cache.cache")

        self._lock = threading.Lock()
        self._entries: Dict[str, Entry] = {}

    def get(self, key: str) -> str:
        return self.get_with_option(key, self.defaults.decrypt)

    def get_with_option(self, key: str, decrypt: bool) -> str:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return self._refresh(key, decrypt, reason="missing")

            if not entry.is_fresh(self.timer()):
                self.logger.info("Cache entry expired, refreshing value", key=key)
                return self._refresh(key, decrypt, reason="expired")

            self.metrics.record_hit()
            self.logger.debug("Cache hit", key=key)
            return entry.value

    def force_refresh(self, key: str) -> None:
        self.force_refresh_with_option(key, self.defaults.decrypt)

    def force_refresh_with_option(self, key: str, decrypt: bool) -> None:
        with self._lock:
            self._refresh(key, decrypt, reason="forced")

    def entry(self, key: str) -> Optional[Entry]:
        """Current entry for key, without fetching."""
        with self._lock:
            return self._entries.get(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _refresh(self, key: str, decrypt: bool, reason: str) -> str:
        """Fetch key and overwrite its entry. Caller holds the lock."""
        self.metrics.record_refresh(reason)
        self.logger.info("Updating key from parameter store", key=key, decrypt=decrypt)

        try:
            with self.metrics.time_fetch():
                value = self.fetcher.fetch(key, decrypt)
        except Exception as e:
            self.metrics.record_fetch_failure()
            self.logger.warning("Failed to refresh key from parameter store", key=key, error=str(e))
            raise FetchFailure(key, e) from e

        # Expiry policy is read now, not when the cache was built
        expiry = self.defaults.expiry
        expires = self.clock() + expiry
        deadline = self.timer() + expiry.total_seconds()
        self._entries[key] = Entry(value=value, expires=expires, deadline=deadline)

        self.logger.info("Key value refreshed from parameter store", key=key, expires=expires.isoformat())
        return value


def new(fetcher: Optional[ParameterFetcher] = None,
        defaults: Optional[CacheDefaults] = None,
        *,
        session: Optional[boto3.session.Session] = None,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        settings: Optional[CacheSettings] = None,
        **kwargs) -> ParameterCache:
    """
    Create a parameter cache.

    Without a fetcher, an SSM fetcher is built from the given boto3 session,
    or from a default session for region_name. Region and endpoint fall back
    to the PARAMETER_CACHE_AWS_REGION and PARAMETER_CACHE_SSM_ENDPOINT_URL
    settings when not given. No request is made here.

    Args:
        fetcher: Parameter store capability
        defaults: Refresh policy; the process-wide defaults when omitted
        session: boto3 session used to build an SSM client
        region_name: AWS region when no session is given
        endpoint_url: Alternative SSM endpoint
        settings: Settings supplying region and endpoint; read from the
            environment when omitted

    Returns:
        ParameterCache instance
    """
    if fetcher is None:
        if region_name is None or endpoint_url is None:
            settings = settings or get_config()
            region_name = region_name or settings.aws_region
            endpoint_url = endpoint_url or settings.ssm_endpoint_url

        if session is not None:
            fetcher = SSMParameterFetcher.from_session(session, endpoint_url=endpoint_url)
        else:
            fetcher = SSMParameterFetcher.from_region(region_name, endpoint_url=endpoint_url)

    return ParameterCache(fetcher, defaults, **kwargs)
