"""Platform adapter error taxonomy.

Provides a shared vocabulary for everything that can go wrong while probing
for a platform-specific implementation of a contract.

Two families exist:
- Probe errors (``PlatformModuleNotFoundError``, ``PlatformClassNotFoundError``)
  describe a single strategy miss. The resolver collects them per strategy and
  only surfaces them inside an ``AggregateResolutionError`` (or alone, on the
  single-strategy path) when the caller demanded success.
- Misuse and downstream faults (``InvalidContractError``,
  ``InstantiationFailedError``) surface immediately and are never aggregated.

Chain preservation: the resolver and the default capabilities use
``raise X(...) from original`` so the underlying error stays available via
``__cause__``.
"""

from __future__ import annotations

from collections.abc import Sequence


def qualified_name(obj: object) -> str | None:
    """Dotted ``module.qualname`` of a class, or its repr for anything else."""
    if obj is None:
        return None
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    return repr(obj)


class PlatformAdapterError(Exception):
    """Base for all platform adapter errors."""

    pass


class ProbeError(PlatformAdapterError):
    """A single probing strategy could not produce an implementation class.

    Attributes:
        contract: The contract that was being resolved.
        module_name: Platform module identity that was attempted.
        class_name: Implementation class name that was attempted, if the
            strategy got far enough to derive one.
        strategy: Name of the strategy that produced this cause.
    """

    def __init__(
        self,
        message: str,
        *,
        contract: type | None = None,
        module_name: str | None = None,
        class_name: str | None = None,
        strategy: str | None = None,
    ) -> None:
        super().__init__(message)
        self.contract = contract
        self.module_name = module_name
        self.class_name = class_name
        self.strategy = strategy

    def __repr__(self) -> str:
        parts = [repr(str(self))]
        if self.strategy is not None:
            parts.append(f"strategy={self.strategy!r}")
        if self.module_name is not None:
            parts.append(f"module_name={self.module_name!r}")
        if self.class_name is not None:
            parts.append(f"class_name={self.class_name!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class PlatformModuleNotFoundError(ProbeError):
    """Platform module is absent or could not be loaded (after the relaxed retry)."""

    pass


class PlatformClassNotFoundError(ProbeError):
    """Platform module loaded, but the expected class is in neither it nor the fallback module."""

    pass


class InvalidContractError(PlatformAdapterError, TypeError):
    """Contract does not have the shape a naming convention requires.

    Also a ``TypeError`` so callers treating it as plain argument misuse keep working.
    """

    def __init__(self, message: str, *, contract: object | None = None) -> None:
        super().__init__(message)
        self.contract = contract

    def __repr__(self) -> str:
        parts = [repr(str(self))]
        if self.contract is not None:
            parts.append(f"contract={qualified_name(self.contract)!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class InstantiationFailedError(PlatformAdapterError):
    """Implementation class was found but constructing it failed.

    Attributes:
        class_descriptor: The class that could not be constructed.
    """

    def __init__(self, message: str, *, class_descriptor: type | None = None) -> None:
        super().__init__(message)
        self.class_descriptor = class_descriptor

    def __repr__(self) -> str:
        parts = [repr(str(self))]
        if self.class_descriptor is not None:
            parts.append(f"class_descriptor={qualified_name(self.class_descriptor)!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class AggregateResolutionError(PlatformAdapterError):
    """Every configured strategy failed for a contract.

    Carries one cause per attempted strategy, in attempt order. An empty
    strategy list yields an instance with zero causes.
    """

    def __init__(
        self,
        message: str,
        causes: Sequence[ProbeError] = (),
        *,
        contract: type | None = None,
    ) -> None:
        super().__init__(message)
        self.causes: tuple[ProbeError, ...] = tuple(causes)
        self.contract = contract

    def __str__(self) -> str:
        base = super().__str__()
        if not self.causes:
            return base
        lines = [base]
        for index, cause in enumerate(self.causes, start=1):
            lines.append(f"  [{index}] {type(cause).__name__}: {cause}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        parts = [repr(self.args[0] if self.args else "")]
        parts.append(f"causes={len(self.causes)}")
        if self.contract is not None:
            parts.append(f"contract={qualified_name(self.contract)!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


class ResolverConfigurationError(PlatformAdapterError):
    """The process-wide resolver could not be created."""

    pass
