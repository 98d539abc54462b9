"""Probing strategies: naming conventions from contract to implementation.

A strategy answers two questions for the resolver:
- which module should hold the platform-specific implementation, and
- which class name inside it implements the contract.

Both transforms are pure. Strategies are tried in priority order and the
first one that yields a class wins, so ordering is policy.
"""

from __future__ import annotations

import abc
import inspect
from collections.abc import Callable
from collections.abc import Iterable
from typing import Generic
from typing import Protocol
from typing import runtime_checkable

from .exceptions import InvalidContractError
from .identity import ModuleIdentity

INTERFACE_MARKER = "I"
DEFAULT_PLATFORM_SUFFIX = ".platform"

# Platform-suffixed module first, same-module fallback second
DEFAULT_STRATEGY_ORDER: tuple[str, ...] = ("platform", "default")


@runtime_checkable
class ProbingStrategy(Protocol):
    """Conversion rules from platform-agnostic contract to platform-specific class."""

    def platform_module_name(self, identity: ModuleIdentity) -> str:
        """Transform the agnostic module identity into the platform module name."""
        ...

    def implementation_class_name(self, contract: type) -> str:
        """Transform the contract into the fully-qualified implementation class name."""
        ...


def strategy_name(strategy: object) -> str:
    """Diagnostic name of a strategy."""
    return getattr(strategy, "name", None) or type(strategy).__name__


def is_interface(contract: type) -> bool:
    """True for Protocol classes, direct ABC subclasses and abstract classes."""
    if getattr(contract, "_is_protocol", False):
        return True
    if abc.ABC in contract.__bases__:
        return True
    return inspect.isabstract(contract)


def _protocol_members(contract: type) -> set[str]:
    members: set[str] = set()
    for base in contract.__mro__:
        if base in (Protocol, Generic, object):
            continue
        members.update(inspect.get_annotations(base))
        members.update(name for name in vars(base) if not name.startswith("_"))
    return members


def implements(candidate: type, contract: type) -> bool:
    """
    True if ``candidate`` is an implementation of ``contract``.

    ABCs and plain classes require subclassing (including ``register``).
    Protocols also accept structural conformance: every public member the
    protocol declares must exist on the candidate. An empty protocol only
    accepts explicit subclasses.
    """
    if not inspect.isclass(candidate) or candidate is contract:
        return False
    if not getattr(contract, "_is_protocol", False):
        return issubclass(candidate, contract)
    if contract in candidate.__mro__:
        return True
    members = _protocol_members(contract)
    return bool(members) and all(hasattr(candidate, member) for member in members)


def ensure_class(contract: object) -> type:
    """Raise InvalidContractError unless ``contract`` is a class."""
    if not inspect.isclass(contract):
        raise InvalidContractError(
            f"Contract must be a class, got {type(contract).__name__}", contract=contract
        )
    return contract


def ensure_interface(contract: object) -> type:
    """Raise InvalidContractError unless ``contract`` is a top-level ``I``-prefixed interface."""
    contract = ensure_class(contract)
    if not is_interface(contract):
        raise InvalidContractError(
            f"{contract.__qualname__} is not an interface (Protocol or ABC)", contract=contract
        )
    if "." in contract.__qualname__:
        raise InvalidContractError(
            f"{contract.__qualname__} is nested; contracts must be module-level", contract=contract
        )
    name = contract.__name__
    if not name.startswith(INTERFACE_MARKER) or len(name) <= len(INTERFACE_MARKER):
        raise InvalidContractError(
            f"{name} must start with '{INTERFACE_MARKER}' followed by the implementation name",
            contract=contract,
        )
    return contract


class DefaultProbingStrategy:
    """
    Probes inside the module that declares the contract.

    The implementation class is the contract name without its leading "I",
    in the contract's own namespace: ``pkg.mod.IClock`` -> ``pkg.mod.Clock``.
    """

    name = "default"

    def platform_module_name(self, identity: ModuleIdentity) -> str:
        return identity.name

    def implementation_class_name(self, contract: type) -> str:
        ensure_interface(contract)
        return f"{contract.__module__}.{contract.__name__[len(INTERFACE_MARKER):]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PlatformProbingStrategy(DefaultProbingStrategy):
    """
    Probes in a sibling module named after the agnostic one plus a suffix.

    ``pkg.mod`` -> ``pkg.mod.platform`` by default. Class naming is inherited.
    """

    name = "platform"

    def __init__(self, suffix: str = DEFAULT_PLATFORM_SUFFIX):
        self.suffix = suffix

    def platform_module_name(self, identity: ModuleIdentity) -> str:
        return f"{identity.name}{self.suffix}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(suffix={self.suffix!r})"


class CustomProbingStrategy(DefaultProbingStrategy):
    """Strategy assembled from plain callables; a missing callable falls back to the default rule."""

    def __init__(
        self,
        module_name: Callable[[ModuleIdentity], str] | None = None,
        class_name: Callable[[type], str] | None = None,
        name: str = "custom",
    ):
        self._module_name = module_name
        self._class_name = class_name
        self.name = name

    def platform_module_name(self, identity: ModuleIdentity) -> str:
        if self._module_name is None:
            return super().platform_module_name(identity)
        return self._module_name(identity)

    def implementation_class_name(self, contract: type) -> str:
        if self._class_name is None:
            return super().implementation_class_name(contract)
        return self._class_name(contract)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def default_strategies(
    order: Iterable[str] = DEFAULT_STRATEGY_ORDER,
    platform_suffix: str = DEFAULT_PLATFORM_SUFFIX,
) -> list[ProbingStrategy]:
    """Build the built-in strategies in the given order.

    Raises:
        ValueError: Unknown strategy name
    """
    factories: dict[str, Callable[[], ProbingStrategy]] = {
        "default": DefaultProbingStrategy,
        "platform": lambda: PlatformProbingStrategy(suffix=platform_suffix),
    }
    strategies = []
    for name in order:
        factory = factories.get(name)
        if factory is None:
            raise ValueError(f"Unknown probing strategy '{name}'. Valid strategies: {sorted(factories)}")
        strategies.append(factory())
    return strategies
