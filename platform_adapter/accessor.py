"""
Process-wide resolver access.

current_resolver() hands out one lazily created ProbingResolver per process,
configured from the environment (see ResolverSettings.from_env). Creation
happens exactly once even under concurrent first access.

set_resolver() installs an override that takes precedence over the default
instance. It exists for test harnesses and alternate configurations wired to
their own modules and strategies.
"""

import logging
import threading

from .config import ResolverSettings
from .exceptions import ResolverConfigurationError
from .resolver import ProbingResolver
from .strategies import strategy_name

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_default_resolver: ProbingResolver | None = None
_override_resolver: ProbingResolver | None = None


def _create_default_resolver() -> ProbingResolver:
    return ProbingResolver.from_settings(ResolverSettings.from_env())


def current_resolver() -> ProbingResolver:
    """
    Return the process-wide resolver.

    Returns:
        The installed override if any, otherwise the default resolver

    Raises:
        ResolverConfigurationError: The default resolver could not be created
    """
    override = _override_resolver
    if override is not None:
        return override

    resolver = _default_resolver
    if resolver is not None:
        return resolver

    return _create_once()


def _create_once() -> ProbingResolver:
    global _default_resolver

    with _lock:
        if _default_resolver is None:
            try:
                resolver = _create_default_resolver()
            except Exception as e:
                raise ResolverConfigurationError(f"Could not create platform adapter resolver: {e}") from e
            logger.info(
                f"Created process-wide resolver with strategies "
                f"{[strategy_name(s) for s in resolver.strategies]}"
            )
            _default_resolver = resolver
        return _default_resolver


def set_resolver(resolver: ProbingResolver | None) -> None:
    """Install an override resolver, or remove it with None."""
    global _override_resolver

    with _lock:
        _override_resolver = resolver
    if resolver is None:
        logger.debug("Removed resolver override")
    else:
        logger.debug(f"Installed resolver override {resolver!r}")
