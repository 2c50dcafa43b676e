"""
Default refresh policy for parameter caches.
"""

from datetime import timedelta
from typing import Optional, Union

from shared.config import CacheSettings, get_config
from shared.logging import configure_logging, get_logger


DEFAULT_EXPIRY = timedelta(seconds=30)
DEFAULT_DECRYPT = False

Duration = Union[timedelta, int, float]


def _as_timedelta(expiry: Duration) -> timedelta:
    if isinstance(expiry, timedelta):
        return expiry
    return timedelta(seconds=expiry)


class CacheDefaults:
    """Expiry duration and decrypt flag applied by cache refreshes.

    Both values are read at the moment a refresh runs, so changes only affect
    entries written afterwards. Zero or negative expiries are allowed and make
    every entry stale as soon as it is written.
    """

    def __init__(self, expiry: Duration = DEFAULT_EXPIRY, decrypt: bool = DEFAULT_DECRYPT):
        self.logger = get_logger("parameter_cache.defaults")
        self._expiry = _as_timedelta(expiry)
        self._decrypt = bool(decrypt)

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> "CacheDefaults":
        """Build defaults from environment-backed settings."""
        return cls(
            expiry=timedelta(seconds=settings.default_expiry_seconds),
            decrypt=settings.default_decrypt
        )

    @property
    def expiry(self) -> timedelta:
        return self._expiry

    @property
    def decrypt(self) -> bool:
        return self._decrypt

    def set_expiry(self, expiry: Duration) -> None:
        """Update the expiry used for entries written by later refreshes."""
        self._expiry = _as_timedelta(expiry)
        self.logger.info("Default expiry updated", expiry_seconds=self._expiry.total_seconds())

    def set_decrypt(self, decrypt: bool) -> None:
        """Update the decrypt flag used when a call does not pass one."""
        self._decrypt = bool(decrypt)
        self.logger.info("Default decryption updated", decrypt=self._decrypt)

    def __repr__(self) -> str:
        return f"CacheDefaults(expiry={self._expiry!r}, decrypt={self._decrypt!r})"


# Process-wide defaults used by caches built without their own
_defaults = CacheDefaults()


def get_defaults() -> CacheDefaults:
    """
    Get the process-wide cache defaults.

    Returns:
        CacheDefaults instance shared by caches built without explicit defaults
    """
    return _defaults


def set_default_expiry(expiry: Duration) -> None:
    """
    Update the default expiry for all caches using the process-wide defaults.

    Cached entries keep the expiry they were written with; the new value
    applies on their next refresh.

    Args:
        expiry: timedelta or number of seconds
    """
    _defaults.set_expiry(expiry)


def set_default_decryption(decrypt: bool) -> None:
    """
    Update whether fetches without an explicit flag request decryption.

    Args:
        decrypt: Decrypt flag passed to the parameter store
    """
    _defaults.set_decrypt(decrypt)


def configure(settings: Optional[CacheSettings] = None) -> CacheDefaults:
    """
    Apply environment-backed settings to the process-wide defaults.

    Also configures structured logging at the configured level.

    Args:
        settings: Settings to apply; read from the environment when omitted

    Returns:
        The process-wide CacheDefaults
    """
    settings = settings or get_config()
    configure_logging("parameter_cache", settings.log_level)
    _defaults.set_expiry(timedelta(seconds=settings.default_expiry_seconds))
    _defaults.set_decrypt(settings.default_decrypt)
    return _defaults
