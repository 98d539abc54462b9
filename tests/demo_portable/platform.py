"""Platform-specific implementations for demo_portable (released separately, hence the version)."""

from demo_portable import ISensor
from demo_portable import IStorage

__version__ = "2.1.0"


class Storage(IStorage):
    def location(self) -> str:
        return "platform"


class Sensor(ISensor):
    def __init__(self, reading: int = 7):
        self.reading = reading

    def read(self) -> int:
        return self.reading
