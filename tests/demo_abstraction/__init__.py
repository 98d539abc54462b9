"""Platform-agnostic demo contracts.

There is deliberately no ``demo_abstraction.platform`` module: every
implementation here is co-located with its contract.
"""

from abc import ABC
from abc import abstractmethod
from typing import Protocol


class IDemoService(ABC):
    @abstractmethod
    def greet(self, name: str) -> str: ...


class DemoService(IDemoService):
    def greet(self, name: str) -> str:
        return f"Hello, {name}"


class IDemoServiceWithNoImplementation(ABC):
    """No implementation exists for this contract anywhere."""


class ICounter(ABC):
    @abstractmethod
    def increment(self) -> int: ...


class Counter(ICounter):
    def __init__(self, start: int = 0):
        self.value = start

    def increment(self) -> int:
        self.value += 1
        return self.value


class IClock(Protocol):
    def now(self) -> float: ...


class Clock:
    def now(self) -> float:
        return 0.0


class ICoLocatedService(ABC):
    """Implemented next to a resolver subclass, not here."""


class IConcrete:
    """Has the marker but is a plain concrete class."""


class Repository(ABC):
    """An interface without the marker."""


class IOuter(ABC):
    class IInner(ABC):
        pass
