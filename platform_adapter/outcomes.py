"""
Probe outcome types.

Provides ProbeOutcome (one strategy attempt) and ProbeReport (all attempts for
one contract) used by the resolver to decide between returning a class,
returning nothing and raising an aggregate failure.
"""

from dataclasses import dataclass
from dataclasses import field

from .exceptions import AggregateResolutionError
from .exceptions import ProbeError
from .exceptions import qualified_name


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of a single strategy attempt: a class or a cause, never both."""

    strategy: str
    class_descriptor: type | None = None
    cause: ProbeError | None = None

    def __post_init__(self) -> None:
        if (self.class_descriptor is None) == (self.cause is None):
            raise ValueError("ProbeOutcome needs exactly one of class_descriptor or cause")

    @property
    def succeeded(self) -> bool:
        return self.class_descriptor is not None

    @classmethod
    def success(cls, strategy: str, class_descriptor: type) -> "ProbeOutcome":
        return cls(strategy=strategy, class_descriptor=class_descriptor)

    @classmethod
    def failure(cls, strategy: str, cause: ProbeError) -> "ProbeOutcome":
        return cls(strategy=strategy, cause=cause)


@dataclass
class ProbeReport:
    """All strategy attempts made for one contract, in attempt order."""

    contract: type
    outcomes: list[ProbeOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        """True if the last attempt produced a class (probing stops on first success)."""
        return bool(self.outcomes) and self.outcomes[-1].succeeded

    @property
    def class_descriptor(self) -> type | None:
        if self.succeeded:
            return self.outcomes[-1].class_descriptor
        return None

    @property
    def causes(self) -> list[ProbeError]:
        """Failure causes in attempt order."""
        return [o.cause for o in self.outcomes if o.cause is not None]

    def add(self, outcome: ProbeOutcome) -> None:
        self.outcomes.append(outcome)

    def summary(self) -> str:
        """Return a human-readable summary."""
        name = qualified_name(self.contract)
        if self.succeeded:
            winner = self.outcomes[-1]
            return f"RESOLVED: {name} via '{winner.strategy}' after {len(self.outcomes)} attempt(s)"
        return f"UNRESOLVED: {name} ({len(self.causes)} strategies failed)"

    def to_error(self) -> AggregateResolutionError:
        """Build the aggregate failure carrying every cause in attempt order."""
        return AggregateResolutionError(
            f"No platform-specific implementation found for "
            f"{qualified_name(self.contract)} "
            f"({len(self.causes)} strategies attempted).",
            self.causes,
            contract=self.contract,
        )
