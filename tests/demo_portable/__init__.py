"""Versioned platform-agnostic contracts with a ``.platform`` sibling module."""

from abc import ABC
from abc import abstractmethod

__version__ = "2.0.0"


class IStorage(ABC):
    @abstractmethod
    def location(self) -> str: ...


class Storage(IStorage):
    def location(self) -> str:
        return "agnostic"


class ISensor(ABC):
    @abstractmethod
    def read(self) -> int: ...
