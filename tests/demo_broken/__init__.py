"""Contracts whose platform module fails at import time."""

from abc import ABC


class IWidget(ABC):
    pass


class Widget(IWidget):
    pass
