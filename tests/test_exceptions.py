"""Tests for the platform adapter error taxonomy."""

from demo_abstraction import DemoService
from demo_abstraction import IDemoService
from platform_adapter.exceptions import AggregateResolutionError
from platform_adapter.exceptions import InstantiationFailedError
from platform_adapter.exceptions import InvalidContractError
from platform_adapter.exceptions import PlatformAdapterError
from platform_adapter.exceptions import PlatformClassNotFoundError
from platform_adapter.exceptions import PlatformModuleNotFoundError
from platform_adapter.exceptions import ProbeError
from platform_adapter.exceptions import ResolverConfigurationError
from platform_adapter.exceptions import qualified_name


class TestHierarchy:
    """Tests for exception relationships."""

    def test_all_errors_are_platform_adapter_errors(self) -> None:
        errors = [
            PlatformModuleNotFoundError("missing module"),
            PlatformClassNotFoundError("missing class"),
            InstantiationFailedError("bad ctor"),
            InvalidContractError("bad contract"),
            AggregateResolutionError("all failed"),
            ResolverConfigurationError("no resolver"),
        ]
        for err in errors:
            assert isinstance(err, PlatformAdapterError), f"{type(err).__name__} is not a PlatformAdapterError"

    def test_probe_errors(self) -> None:
        assert isinstance(PlatformModuleNotFoundError("x"), ProbeError)
        assert isinstance(PlatformClassNotFoundError("x"), ProbeError)
        assert not isinstance(InstantiationFailedError("x"), ProbeError)

    def test_invalid_contract_is_type_error(self) -> None:
        assert isinstance(InvalidContractError("x"), TypeError)


class TestProbeError:
    """Tests for ProbeError attributes."""

    def test_basic_creation(self) -> None:
        err = PlatformModuleNotFoundError("Module not found")
        assert str(err) == "Module not found"
        assert err.contract is None
        assert err.module_name is None
        assert err.class_name is None
        assert err.strategy is None

    def test_full_creation_and_repr(self) -> None:
        err = PlatformClassNotFoundError(
            "Class not found",
            contract=IDemoService,
            module_name="demo_abstraction",
            class_name="demo_abstraction.DemoService",
            strategy="default",
        )
        assert err.contract is IDemoService
        assert repr(err) == (
            "PlatformClassNotFoundError('Class not found', strategy='default', "
            "module_name='demo_abstraction', class_name='demo_abstraction.DemoService')"
        )


class TestAggregateResolutionError:
    """Tests for AggregateResolutionError."""

    def test_zero_causes(self) -> None:
        err = AggregateResolutionError("nothing configured")
        assert err.causes == ()
        assert str(err) == "nothing configured"

    def test_str_lists_causes_in_order(self) -> None:
        err = AggregateResolutionError(
            "all failed",
            [PlatformModuleNotFoundError("first"), PlatformClassNotFoundError("second")],
            contract=IDemoService,
        )
        assert str(err).splitlines() == [
            "all failed",
            "  [1] PlatformModuleNotFoundError: first",
            "  [2] PlatformClassNotFoundError: second",
        ]
        assert repr(err) == "AggregateResolutionError('all failed', causes=2, contract='demo_abstraction.IDemoService')"


class TestInstantiationFailedError:
    def test_carries_class(self) -> None:
        err = InstantiationFailedError("boom", class_descriptor=DemoService)
        assert err.class_descriptor is DemoService
        assert "demo_abstraction.DemoService" in repr(err)


def test_qualified_name() -> None:
    assert qualified_name(DemoService) == "demo_abstraction.DemoService"
    assert qualified_name(None) is None
    assert qualified_name(42) == "42"
