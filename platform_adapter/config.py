"""
Resolver configuration.
Uses Pydantic for validation; values come from keyword arguments or the
environment (PLATFORM_ADAPTER_* variables).
"""

import logging
import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from .strategies import DEFAULT_PLATFORM_SUFFIX
from .strategies import DEFAULT_STRATEGY_ORDER
from .strategies import ProbingStrategy
from .strategies import default_strategies

logger = logging.getLogger(__name__)

ENV_STRATEGIES = "PLATFORM_ADAPTER_STRATEGIES"
ENV_PLATFORM_SUFFIX = "PLATFORM_ADAPTER_PLATFORM_SUFFIX"
ENV_SERIALIZE_LOADER = "PLATFORM_ADAPTER_SERIALIZE_LOADER"

_TRUTHY = {"1", "true", "yes", "on"}

StrategyName = Literal["platform", "default"]


class ResolverSettings(BaseModel):
    """Configuration for a ProbingResolver built from settings."""

    model_config = ConfigDict(frozen=True)

    strategy_order: tuple[StrategyName, ...] = Field(
        default=DEFAULT_STRATEGY_ORDER,  # type: ignore[arg-type]
        description="Built-in strategies in priority order",
    )
    platform_suffix: str = Field(
        default=DEFAULT_PLATFORM_SUFFIX,
        description="Suffix appended to the agnostic module name by the platform strategy",
    )
    serialize_loader: bool = Field(
        default=False,
        description="Serialize module loader calls (for loaders unsafe under concurrency)",
    )

    @field_validator("strategy_order")
    @classmethod
    def _unique_strategies(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one strategy is required")
        if len(set(value)) != len(value):
            raise ValueError(f"duplicate strategies in {list(value)}")
        return value

    @field_validator("platform_suffix")
    @classmethod
    def _dotted_suffix(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"suffix must look like '.name', got {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ResolverSettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            pydantic.ValidationError: A variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if raw := env.get(ENV_STRATEGIES):
            values["strategy_order"] = tuple(part.strip() for part in raw.split(",") if part.strip())
        if raw := env.get(ENV_PLATFORM_SUFFIX):
            values["platform_suffix"] = raw.strip()
        if raw := env.get(ENV_SERIALIZE_LOADER):
            values["serialize_loader"] = raw.strip().lower() in _TRUTHY

        if values:
            logger.debug(f"Resolver settings from environment: {values}")
        return cls.model_validate(values)

    def build_strategies(self) -> list[ProbingStrategy]:
        """Materialize the configured strategies in priority order."""
        return default_strategies(self.strategy_order, platform_suffix=self.platform_suffix)
