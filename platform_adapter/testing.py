"""
Testing utilities for the platform adapter.
Provides a spy module loader and an override helper for the process-wide resolver.
"""

import threading
import types
from collections.abc import Iterator
from contextlib import contextmanager

from . import accessor
from .capabilities import ModuleLoader
from .capabilities import import_module_loader
from .identity import ModuleIdentity
from .resolver import ProbingResolver


class RecordingModuleLoader:
    """Module loader that records every identity it is asked for, then delegates."""

    def __init__(self, inner: ModuleLoader | None = None):
        self.inner = inner or import_module_loader
        self.calls: list[ModuleIdentity] = []
        self._lock = threading.Lock()

    def __call__(self, identity: ModuleIdentity) -> types.ModuleType:
        with self._lock:
            self.calls.append(identity)
        return self.inner(identity)

    @property
    def names(self) -> list[str]:
        """Requested module names, in call order."""
        with self._lock:
            return [identity.name for identity in self.calls]

    def count(self, name: str) -> int:
        """Number of load requests for ``name``."""
        return self.names.count(name)

    def clear(self):
        """Clear recorded calls."""
        with self._lock:
            self.calls.clear()


@contextmanager
def override_resolver(resolver: ProbingResolver) -> Iterator[ProbingResolver]:
    """
    Install ``resolver`` as the process-wide override for the duration of the block.

    The previous override (or its absence) is restored on exit.
    """
    previous = accessor._override_resolver
    accessor.set_resolver(resolver)
    try:
        yield resolver
    finally:
        accessor.set_resolver(previous)
