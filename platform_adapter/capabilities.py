"""
Capability interfaces consumed by the probing resolver.
Uses Protocol classes for structural subtyping (no inheritance required).

The resolver never imports modules, inspects them or constructs objects
itself. It orchestrates three narrow capabilities:

- ModuleLoader: module identity -> module handle (or PlatformModuleNotFoundError)
- ClassLookup: (module handle, class name) -> class or None
- Instantiator: (class, args, kwargs) -> instance (or InstantiationFailedError)

Defaults wrap importlib, module attributes and a plain constructor call.
RegistryModuleLoader replaces dynamic import with an explicit name -> module
mapping for environments that cannot (or should not) import by name.
"""

import importlib
import inspect
import logging
import threading
import types
from collections.abc import Mapping
from typing import Any
from typing import Protocol
from typing import runtime_checkable

from .exceptions import InstantiationFailedError
from .exceptions import PlatformModuleNotFoundError
from .exceptions import qualified_name
from .identity import ModuleIdentity

logger = logging.getLogger(__name__)


@runtime_checkable
class ModuleLoader(Protocol):
    """Loads the module named by an identity."""

    def __call__(self, identity: ModuleIdentity) -> types.ModuleType:
        """
        Load a module.

        Args:
            identity: Module identity, possibly carrying a version qualifier

        Returns:
            The loaded module

        Raises:
            PlatformModuleNotFoundError: Module cannot be located or loaded
        """
        ...


@runtime_checkable
class ClassLookup(Protocol):
    """Finds a class by name inside a loaded module."""

    def __call__(self, module: types.ModuleType, class_name: str) -> type | None:
        """
        Look up a class.

        Must return None for "not found". Raising is reserved for real
        failures, which the resolver logs and also treats as "not found".
        """
        ...


@runtime_checkable
class Instantiator(Protocol):
    """Constructs an object from a class and constructor arguments."""

    def __call__(
        self, class_descriptor: type, args: tuple[Any, ...], kwargs: Mapping[str, Any]
    ) -> Any:
        """
        Construct an instance.

        Raises:
            InstantiationFailedError: No matching constructor, or it raised
        """
        ...


def _check_version(identity: ModuleIdentity, module: types.ModuleType) -> None:
    if identity.version is None:
        return
    loaded_version = getattr(module, "__version__", None)
    if loaded_version is not None and str(loaded_version) != identity.version:
        raise PlatformModuleNotFoundError(
            f"Module '{identity.name}' has version {loaded_version}, expected {identity.version}",
            module_name=str(identity),
        )


def import_module_loader(identity: ModuleIdentity) -> types.ModuleType:
    """Default loader: import by dotted name, honoring a version qualifier."""
    try:
        module = importlib.import_module(identity.name)
    except Exception as e:
        # A module that exists but blows up on import is as unusable as a missing one
        logger.debug(f"Could not import '{identity.name}': {e}")
        raise PlatformModuleNotFoundError(
            f"Module '{identity}' could not be imported: {e}",
            module_name=str(identity),
        ) from e

    _check_version(identity, module)
    return module


class RegistryModuleLoader:
    """
    Loader backed by an explicit name -> module mapping.

    Values may be real modules or plain attribute mappings, which are wrapped
    in a synthetic module named after their key.
    """

    def __init__(
        self, modules: Mapping[str, types.ModuleType | Mapping[str, Any]] | None = None
    ):
        self._modules: dict[str, types.ModuleType] = {}
        self._lock = threading.Lock()
        for name, module in (modules or {}).items():
            self.register(name, module)

    def register(self, name: str, module: types.ModuleType | Mapping[str, Any]) -> None:
        """Register (or replace) the module served under ``name``."""
        if not isinstance(module, types.ModuleType):
            synthetic = types.ModuleType(name)
            for attr, value in module.items():
                setattr(synthetic, attr, value)
            module = synthetic
        with self._lock:
            self._modules[name] = module
        logger.debug(f"Registered module '{name}'")

    @property
    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._modules)

    def __call__(self, identity: ModuleIdentity) -> types.ModuleType:
        with self._lock:
            module = self._modules.get(identity.name)
        if module is None:
            raise PlatformModuleNotFoundError(
                f"Module '{identity}' is not registered", module_name=str(identity)
            )
        _check_version(identity, module)
        return module


def attribute_class_lookup(module: types.ModuleType, class_name: str) -> type | None:
    """Default lookup: the last dotted component of ``class_name`` as a module attribute."""
    short_name = class_name.rpartition(".")[2]
    if not short_name:
        return None
    candidate = getattr(module, short_name, None)
    return candidate if inspect.isclass(candidate) else None


def call_constructor(
    class_descriptor: type, args: tuple[Any, ...], kwargs: Mapping[str, Any]
) -> Any:
    """Default instantiator: call the class."""
    try:
        return class_descriptor(*args, **kwargs)
    except Exception as e:
        raise InstantiationFailedError(
            f"Could not create an instance of "
            f"{qualified_name(class_descriptor)}: {e}",
            class_descriptor=class_descriptor,
        ) from e
