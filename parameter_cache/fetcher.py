"""
Parameter store capability consumed by the cache.
"""

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class ParameterFetcher(Protocol):
    """Fetches one parameter value from a remote store.

    Implementations make a single synchronous attempt per call and raise on
    failure. Any timeout is the implementation's responsibility.
    """

    def fetch(self, key: str, decrypt: bool) -> str:
        ...


class CallableFetcher:
    """Adapts a ``(key, decrypt) -> value`` function to ParameterFetcher."""

    def __init__(self, func: Callable[[str, bool], str]):
        self.func = func

    def fetch(self, key: str, decrypt: bool) -> str:
        return self.func(key, decrypt)
