# =============================================================================
# jdbcurl runtime registry
#
# - Config in the environment: JDBCURL_* variables are read directly. This
#   library NEVER calls load_dotenv(); the application may do that if it wants.
# - No I/O at import time: everything is lazy via get_registry().
# - Every registry is frozen once built; extending one yields a new registry.
# - ContextVar keeps per-context overrides (configure()/using_registry()).
#
# Default registry:
#   built-in drivers
#   + custom drivers from JDBCURL_CUSTOM_DRIVERS_PATH (a directory), if set
#   + entry point drivers, if JDBCURL_LOAD_PLUGINS=true
#   Later sources win on name clashes.
# =============================================================================
from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
from typing import Optional, Tuple

from jdbcurl.drivers import ALL_DRIVERS, Driver, DriverRegistry, load_entry_point_drivers
from .config import JdbcUrlConfigurationError, load_custom_drivers

logger = logging.getLogger(__name__)

# Allow overriding the env prefix if you embed multiple copies/configs
_PREFIX = os.getenv("JDBCURL_PREFIX", "JDBCURL_")

_current_registry: ContextVar[Optional[DriverRegistry]] = ContextVar("jdbcurl_registry", default=None)

def _env_fingerprint(prefix: str = _PREFIX) -> Tuple[Tuple[str, str], ...]:
    """Stable key for caching: all JDBCURL_* envs sorted."""
    return tuple(sorted(
        (k, v) for k, v in os.environ.items() if k.startswith(prefix)
    ))


@lru_cache(maxsize=8)
def _load_default_cached(_fp: Tuple[Tuple[str, str], ...]) -> DriverRegistry:
    env = dict(_fp)
    extra: list[Driver] = []

    custom_path = env.get(f"{_PREFIX}CUSTOM_DRIVERS_PATH")
    if custom_path:
        strict = env.get(f"{_PREFIX}STRICT", "false").lower() == "true"
        extra.extend(load_custom_drivers(custom_path, strict=strict))

    if env.get(f"{_PREFIX}LOAD_PLUGINS", "false").lower() == "true":
        extra.extend(load_entry_point_drivers())

    registry = ALL_DRIVERS.with_drivers(*extra) if extra else ALL_DRIVERS
    logger.debug(f"Default driver registry: {sorted(registry)}")
    return registry

def _load_default() -> DriverRegistry:
    # include env fingerprint as cache key to auto-refresh when env changes
    return _load_default_cached(_env_fingerprint())

def get_registry() -> DriverRegistry:
    """Active registry (context override > lazily loaded default)."""
    registry = _current_registry.get()
    return registry if registry is not None else _load_default()

def require_driver(name: str) -> Driver:
    """Resolve a driver by name from the active registry or raise."""
    drv = get_registry().get(name)
    if drv is None:
        raise JdbcUrlConfigurationError(f"Unknown driver: {name!r}")
    return drv

def configure(registry: DriverRegistry | None) -> None:
    """Set an override for this context (tests/embedded apps); None clears it."""
    _current_registry.set(registry)

def reload_default() -> None:
    """Drop cached auto-loaded registry (e.g., after adding definition files)."""
    _load_default_cached.cache_clear()

@contextmanager
def using_registry(registry: DriverRegistry):
    tok = _current_registry.set(registry)
    try:
        yield registry
    finally:
        _current_registry.reset(tok)
