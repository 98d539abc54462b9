"""
Platform Adapter - resolve platform-agnostic contracts to platform-specific implementations.
"""

__version__ = "1.0.0"

from .accessor import current_resolver
from .accessor import set_resolver
from .capabilities import ClassLookup
from .capabilities import Instantiator
from .capabilities import ModuleLoader
from .capabilities import RegistryModuleLoader
from .capabilities import attribute_class_lookup
from .capabilities import call_constructor
from .capabilities import import_module_loader
from .config import ResolverSettings
from .exceptions import AggregateResolutionError
from .exceptions import InstantiationFailedError
from .exceptions import InvalidContractError
from .exceptions import PlatformAdapterError
from .exceptions import PlatformClassNotFoundError
from .exceptions import PlatformModuleNotFoundError
from .exceptions import ProbeError
from .exceptions import ResolverConfigurationError
from .identity import ModuleIdentity
from .outcomes import ProbeOutcome
from .outcomes import ProbeReport
from .resolver import ProbingResolver
from .strategies import DEFAULT_STRATEGY_ORDER
from .strategies import CustomProbingStrategy
from .strategies import DefaultProbingStrategy
from .strategies import PlatformProbingStrategy
from .strategies import ProbingStrategy
from .strategies import default_strategies
from .strategies import implements

__all__ = [
    "ProbingResolver",
    "current_resolver",
    "set_resolver",
    "ResolverSettings",
    "ModuleIdentity",
    # Strategies
    "ProbingStrategy",
    "DefaultProbingStrategy",
    "PlatformProbingStrategy",
    "CustomProbingStrategy",
    "DEFAULT_STRATEGY_ORDER",
    "default_strategies",
    "implements",
    # Capabilities
    "ModuleLoader",
    "ClassLookup",
    "Instantiator",
    "RegistryModuleLoader",
    "import_module_loader",
    "attribute_class_lookup",
    "call_constructor",
    # Outcomes
    "ProbeOutcome",
    "ProbeReport",
    # Error taxonomy
    "PlatformAdapterError",
    "ProbeError",
    "PlatformModuleNotFoundError",
    "PlatformClassNotFoundError",
    "InstantiationFailedError",
    "InvalidContractError",
    "AggregateResolutionError",
    "ResolverConfigurationError",
]
