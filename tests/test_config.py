"""Tests for resolver settings."""

import pytest
from platform_adapter import DefaultProbingStrategy
from platform_adapter import PlatformProbingStrategy
from platform_adapter import ProbingResolver
from platform_adapter import ResolverSettings
from pydantic import ValidationError


class TestResolverSettings:
    """Tests for ResolverSettings."""

    def test_defaults(self) -> None:
        settings = ResolverSettings()
        assert settings.strategy_order == ("platform", "default")
        assert settings.platform_suffix == ".platform"
        assert settings.serialize_loader is False

    def test_rejects_unknown_strategy(self) -> None:
        with pytest.raises(ValidationError):
            ResolverSettings(strategy_order=("platform", "magic"))

    def test_rejects_duplicate_strategy(self) -> None:
        with pytest.raises(ValidationError, match="duplicate"):
            ResolverSettings(strategy_order=("default", "default"))

    def test_rejects_empty_order(self) -> None:
        with pytest.raises(ValidationError):
            ResolverSettings(strategy_order=())

    def test_rejects_undotted_suffix(self) -> None:
        with pytest.raises(ValidationError):
            ResolverSettings(platform_suffix="platform")

    def test_is_frozen(self) -> None:
        settings = ResolverSettings()
        with pytest.raises(ValidationError):
            settings.platform_suffix = ".other"  # type: ignore[misc]

    def test_build_strategies(self) -> None:
        strategies = ResolverSettings(strategy_order=("default", "platform"), platform_suffix=".mac").build_strategies()
        assert isinstance(strategies[0], DefaultProbingStrategy)
        assert isinstance(strategies[1], PlatformProbingStrategy)
        assert strategies[1].suffix == ".mac"


class TestFromEnv:
    """Tests for ResolverSettings.from_env."""

    def test_empty_environment_gives_defaults(self) -> None:
        assert ResolverSettings.from_env({}) == ResolverSettings()

    def test_reads_all_variables(self) -> None:
        settings = ResolverSettings.from_env(
            {
                "PLATFORM_ADAPTER_STRATEGIES": " default , platform ",
                "PLATFORM_ADAPTER_PLATFORM_SUFFIX": ".native",
                "PLATFORM_ADAPTER_SERIALIZE_LOADER": "Yes",
            }
        )
        assert settings.strategy_order == ("default", "platform")
        assert settings.platform_suffix == ".native"
        assert settings.serialize_loader is True

    def test_falsy_serialize_flag(self) -> None:
        assert ResolverSettings.from_env({"PLATFORM_ADAPTER_SERIALIZE_LOADER": "0"}).serialize_loader is False

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("PLATFORM_ADAPTER_STRATEGIES", "default")
        assert ResolverSettings.from_env().strategy_order == ("default",)

    def test_invalid_environment(self) -> None:
        with pytest.raises(ValidationError):
            ResolverSettings.from_env({"PLATFORM_ADAPTER_STRATEGIES": "bogus"})


def test_resolver_from_settings() -> None:
    resolver = ProbingResolver.from_settings(ResolverSettings(strategy_order=("default",)))
    assert [type(s) for s in resolver.strategies] == [DefaultProbingStrategy]
