"""
Read-through, time-expiring cache for parameter store values.
"""

from shared.errors import FetchFailure, ParameterCacheException
from .cache import Cache, Entry, ParameterCache, new
from .defaults import (
    CacheDefaults,
    configure,
    get_defaults,
    set_default_decryption,
    set_default_expiry,
)
from .fetcher import CallableFetcher, ParameterFetcher
from .ssm import SSMParameterFetcher

__all__ = [
    "Cache",
    "CacheDefaults",
    "CallableFetcher",
    "Entry",
    "FetchFailure",
    "ParameterCache",
    "ParameterCacheException",
    "ParameterFetcher",
    "SSMParameterFetcher",
    "configure",
    "get_defaults",
    "new",
    "set_default_decryption",
    "set_default_expiry",
]
