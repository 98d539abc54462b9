"""
Probing resolver for platform-specific implementations of contracts.

For each probing strategy, in priority order:
1. Derive the platform module identity and load it (one relaxed retry
   without version qualifiers if the exact identity fails)
2. Derive the implementation class name and look it up in that module,
   then in the module declaring the resolver class itself; a class found
   under that name only counts if it implements the contract
3. Stop at the first class found

Misses are recorded per strategy and only surfaced, as one aggregate
failure, when the caller asked for a guaranteed result. Nothing is cached:
every call probes again.
"""

import logging
import sys
import threading
import types
from collections.abc import Iterable
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any
from typing import TypeVar

from .capabilities import ClassLookup
from .capabilities import Instantiator
from .capabilities import ModuleLoader
from .capabilities import attribute_class_lookup
from .capabilities import call_constructor
from .capabilities import import_module_loader
from .exceptions import PlatformClassNotFoundError
from .exceptions import PlatformModuleNotFoundError
from .exceptions import qualified_name
from .identity import ModuleIdentity
from .outcomes import ProbeOutcome
from .outcomes import ProbeReport
from .strategies import ProbingStrategy
from .strategies import default_strategies
from .strategies import ensure_class
from .strategies import implements
from .strategies import strategy_name

if TYPE_CHECKING:
    from .config import ResolverSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProbingResolver:
    """
    Resolves contracts to platform-specific classes by probing naming conventions.

    Safe for concurrent use: the strategy list is snapshotted under a lock,
    probing itself runs unlocked unless ``serialize_loader`` is set.
    """

    def __init__(
        self,
        strategies: Iterable[ProbingStrategy] | None = None,
        *,
        module_loader: ModuleLoader | None = None,
        class_lookup: ClassLookup | None = None,
        instantiator: Instantiator | None = None,
        serialize_loader: bool = False,
    ):
        """
        Initialize resolver.

        Args:
            strategies: Strategies in priority order; None for the built-in order,
                an empty iterable for no strategies at all
            module_loader: Loads modules by identity (default: importlib)
            class_lookup: Finds classes in loaded modules (default: module attributes)
            instantiator: Constructs resolved classes (default: call the class)
            serialize_loader: Serialize module loader calls
        """
        self._strategies: list[ProbingStrategy] = list(
            default_strategies() if strategies is None else strategies
        )
        self._module_loader = module_loader or import_module_loader
        self._class_lookup = class_lookup or attribute_class_lookup
        self._instantiator = instantiator or call_constructor
        self._lock = threading.Lock()
        self._loader_lock = threading.Lock() if serialize_loader else None

    @classmethod
    def from_settings(cls, settings: "ResolverSettings", **capabilities: Any) -> "ProbingResolver":
        """Build a resolver from settings; capabilities are passed through as keywords."""
        return cls(
            settings.build_strategies(),
            serialize_loader=settings.serialize_loader,
            **capabilities,
        )

    @property
    def strategies(self) -> tuple[ProbingStrategy, ...]:
        """Snapshot of the strategies in priority order."""
        with self._lock:
            return tuple(self._strategies)

    def add_strategy(self, strategy: ProbingStrategy) -> None:
        """Append a strategy with the lowest priority."""
        with self._lock:
            self._strategies.append(strategy)
        logger.debug(f"Added probing strategy '{strategy_name(strategy)}'")

    # ------------------------------------------------------------------
    # Instances
    # ------------------------------------------------------------------

    def resolve(self, contract: type[T], *args: Any, **kwargs: Any) -> T:
        """Create the platform-specific implementation of ``contract`` or raise."""
        return self.resolve_instance(contract, args, kwargs, must_succeed=True)

    def try_resolve(self, contract: type[T], *args: Any, **kwargs: Any) -> T | None:
        """Create the platform-specific implementation of ``contract``, or return None."""
        return self.resolve_instance(contract, args, kwargs, must_succeed=False)

    def resolve_instance(
        self,
        contract: type[T],
        args: Iterable[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
        *,
        must_succeed: bool = True,
    ) -> T | None:
        """
        Resolve the implementation class and construct it.

        Args:
            contract: Contract to resolve
            args: Positional constructor arguments
            kwargs: Keyword constructor arguments
            must_succeed: Raise instead of returning None

        Returns:
            The new instance, or None when best-effort resolution or construction failed

        Raises:
            AggregateResolutionError: No strategy found a class (must_succeed only)
            InstantiationFailedError: The class could not be constructed (must_succeed only)
            InvalidContractError: The contract fails a strategy's precondition
        """
        class_descriptor = self.resolve_class_descriptor(contract, must_succeed=must_succeed)
        if class_descriptor is None:
            return None

        try:
            return self._instantiator(class_descriptor, tuple(args), dict(kwargs or {}))
        except Exception as e:
            if must_succeed:
                raise
            logger.debug(
                f"Could not construct {qualified_name(class_descriptor)} for {qualified_name(contract)}: {e}",
                exc_info=True,
            )
            return None

    # ------------------------------------------------------------------
    # Classes
    # ------------------------------------------------------------------

    def resolve_class(self, contract: type[T]) -> type[T]:
        """Resolve the implementation class of ``contract`` or raise."""
        return self.resolve_class_descriptor(contract, must_succeed=True)  # type: ignore[return-value]

    def try_resolve_class(self, contract: type[T]) -> type[T] | None:
        """Resolve the implementation class of ``contract``, or return None."""
        return self.resolve_class_descriptor(contract, must_succeed=False)

    def resolve_class_descriptor(self, contract: type[T], *, must_succeed: bool = True) -> type[T] | None:
        """
        Probe every strategy in priority order until one yields a class.

        Args:
            contract: Contract to resolve
            must_succeed: Raise an aggregate failure instead of returning None

        Returns:
            The implementation class, or None if nothing matched and must_succeed is False

        Raises:
            AggregateResolutionError: One cause per attempted strategy, in order
            InvalidContractError: The contract fails a strategy's precondition
        """
        report = self.probe_all(contract)
        if report.succeeded:
            return report.class_descriptor

        if must_succeed:
            raise report.to_error()

        logger.debug(report.summary())
        return None

    def resolve_class_with(
        self, strategy: ProbingStrategy, contract: type[T], *, must_succeed: bool = True
    ) -> type[T] | None:
        """
        Probe a single strategy, ignoring the configured list.

        Raises the strategy's own cause rather than an aggregate.

        Raises:
            PlatformModuleNotFoundError: Platform module could not be loaded
            PlatformClassNotFoundError: Class not found in the platform or fallback module
        """
        outcome = self.probe(strategy, contract)
        if outcome.succeeded:
            return outcome.class_descriptor
        if must_succeed:
            raise outcome.cause  # type: ignore[misc]
        return None

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------

    def probe_all(self, contract: type) -> ProbeReport:
        """Run the configured strategies in order, stopping at the first success."""
        report = ProbeReport(contract=contract)
        for strategy in self.strategies:
            outcome = self.probe(strategy, contract)
            report.add(outcome)
            if outcome.succeeded:
                break
        return report

    def probe(self, strategy: ProbingStrategy, contract: type) -> ProbeOutcome:
        """
        Attempt a single strategy.

        Module and class misses come back as failure outcomes; only contract
        misuse (InvalidContractError) is raised.
        """
        name = strategy_name(strategy)
        identity = ModuleIdentity.of(ensure_class(contract))
        platform_identity = identity.with_name(strategy.platform_module_name(identity))

        module, load_error = self._load_platform_module(platform_identity)
        if module is None:
            cause = PlatformModuleNotFoundError(
                f"Platform-specific module '{platform_identity}' providing an implementation for "
                f"{qualified_name(contract)} could not be found. Make sure all necessary "
                f"platform-specific modules are installed.",
                contract=contract,
                module_name=str(platform_identity),
                strategy=name,
            )
            cause.__cause__ = load_error
            logger.debug(f"[probe:{name}] {qualified_name(contract)}: module '{platform_identity}' not found")
            return ProbeOutcome.failure(name, cause)

        class_name = strategy.implementation_class_name(contract)
        class_descriptor = self._find_class(module, class_name, contract)
        if class_descriptor is None:
            cause = PlatformClassNotFoundError(
                f"Contract {qualified_name(contract)} could not be resolved to class "
                f"'{class_name}' in module '{module.__name__}'.",
                contract=contract,
                module_name=module.__name__,
                class_name=class_name,
                strategy=name,
            )
            logger.debug(f"[probe:{name}] {qualified_name(contract)}: class '{class_name}' not found")
            return ProbeOutcome.failure(name, cause)

        logger.debug(f"[probe:{name}] {qualified_name(contract)} -> {qualified_name(class_descriptor)}")
        return ProbeOutcome.success(name, class_descriptor)

    def _load_platform_module(
        self, identity: ModuleIdentity
    ) -> tuple[types.ModuleType | None, Exception | None]:
        module, error = self._try_load(identity)
        if module is not None or identity.is_relaxed:
            return module, error

        # Exact versioned identity is not always knowable in advance
        relaxed = identity.relaxed()
        logger.debug(f"Loading '{identity}' failed, retrying as '{relaxed}'")
        return self._try_load(relaxed)

    def _try_load(self, identity: ModuleIdentity) -> tuple[types.ModuleType | None, Exception | None]:
        try:
            return self._load(identity), None
        except (ImportError, PlatformModuleNotFoundError) as e:
            return None, e
        except Exception as e:
            logger.warning(f"Module loader failed for '{identity}': {e}", exc_info=True)
            return None, e

    def _load(self, identity: ModuleIdentity) -> types.ModuleType:
        if self._loader_lock is None:
            return self._module_loader(identity)
        with self._loader_lock:
            return self._module_loader(identity)

    def _find_class(self, module: types.ModuleType, class_name: str, contract: type) -> type | None:
        class_descriptor = self._lookup(module, class_name, contract)
        if class_descriptor is not None:
            return class_descriptor

        # Co-located implementations: the module declaring this resolver class
        own_module = sys.modules.get(type(self).__module__)
        if own_module is None or own_module is module:
            return None
        return self._lookup(own_module, class_name, contract)

    def _lookup(self, module: types.ModuleType, class_name: str, contract: type) -> type | None:
        try:
            candidate = self._class_lookup(module, class_name)
        except Exception as e:
            logger.warning(
                f"Class lookup for '{class_name}' in module '{module.__name__}' failed: {e}",
                exc_info=True,
            )
            return None

        if candidate is None or implements(candidate, contract):
            return candidate
        # Same short name, unrelated class (often just imported into the module)
        logger.debug(
            f"Ignoring {qualified_name(candidate)} in module '{module.__name__}': "
            f"does not implement {qualified_name(contract)}"
        )
        return None
