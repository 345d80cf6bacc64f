"""
Shared pytest fixtures and configuration for viewmock tests.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from viewmock import NotifyPropertyChanged
from viewmock.fields import _reset_default_registry


@dataclass
class PersonViewModel(NotifyPropertyChanged):
    """View model with a notifying setter and a field nobody sets up front."""

    name: str = "Default"
    unobserved_property: Optional[str] = None

    def change_name_and_notify(self, value: str) -> None:
        self.name = value
        self.notify_property_changed("name")

    def notify_with_empty_string(self) -> None:
        self.notify_property_changed("")

    def notify_unknown(self) -> None:
        self.notify_property_changed("no_such_field")


class CounterViewModel(NotifyPropertyChanged):
    """Plain class exposing its state through properties."""

    def __init__(self, count: int = 0):
        self._count = count

    @property
    def count(self) -> int:
        return self._count

    @property
    def doubled(self) -> int:
        return self._count * 2

    def increment(self) -> None:
        self._count += 1
        self.notify_property_changed("count")

    def reset(self) -> None:
        self._count = 0


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Reset the default field registry before each test to prevent state leakage."""
    _reset_default_registry()
    yield
    _reset_default_registry()


@pytest.fixture
def person_cls():
    return PersonViewModel


@pytest.fixture
def person():
    """Provide a person view model named "One"."""
    return PersonViewModel(name="One")


@pytest.fixture
def counter_cls():
    return CounterViewModel


@pytest.fixture
def counter():
    return CounterViewModel(count=1)
