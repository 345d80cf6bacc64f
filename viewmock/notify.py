"""
ViewMock Notify - Change-Notification Contract for Models
=========================================================

A view mock listens to a model the same way a bound view would: through a
change-notification stream that names the field which changed. Any object can
act as a model as long as it offers

```python
model.subscribe(handler)      # handler(sender, field_name)
```

where `field_name` is either a declared field name or the empty string, which
means "every field may have changed, refresh all of them".

`NotifyPropertyChanged` is a small base class implementing that contract, so
tests can declare view models without any other machinery:

```python
from dataclasses import dataclass
from viewmock import NotifyPropertyChanged

@dataclass
class PersonViewModel(NotifyPropertyChanged):
    name: str = ""

    def rename(self, value):
        self.name = value
        self.notify_property_changed("name")
```

Delivery is synchronous and ordered: handlers run in subscription order, on the
caller's thread, before `notify_property_changed` returns. Exceptions raised
by a handler propagate to the code that notified.
"""

from typing import Any, Callable, List, Optional, Protocol

PropertyChangedHandler = Callable[[Any, Optional[str]], None]

# Sentinel field name meaning "all fields changed"
REFRESH_ALL = ""


class NotifiesPropertyChanged(Protocol):
    """Structural type of a model a view mock can observe."""

    def subscribe(self, handler: PropertyChangedHandler) -> Any:
        ...


def is_refresh_all(field_name: Optional[str]) -> bool:
    """Return True if the notified name is the refresh-all sentinel."""
    return field_name is None or field_name == REFRESH_ALL


class NotifyPropertyChanged:
    """
    Minimal model base class with a property-changed stream.

    Handlers are stored per instance and created lazily, so subclasses (including
    dataclasses, which do not call `super().__init__`) need no setup.
    """

    def _handlers(self) -> List[PropertyChangedHandler]:
        try:
            return self.__dict__["_property_changed_handlers"]
        except KeyError:
            handlers: List[PropertyChangedHandler] = []
            self.__dict__["_property_changed_handlers"] = handlers
            return handlers

    def subscribe(self, handler: PropertyChangedHandler) -> "NotifyPropertyChanged":
        """Register a handler called as `handler(sender, field_name)`."""
        self._handlers().append(handler)
        return self

    def unsubscribe(self, handler: PropertyChangedHandler) -> None:
        """Remove a previously registered handler."""
        self._handlers().remove(handler)

    def notify_property_changed(self, field_name: str = REFRESH_ALL) -> None:
        """Tell every subscriber that `field_name` changed ("" for all fields)."""
        # Copy so a handler may unsubscribe while being notified
        for handler in list(self._handlers()):
            handler(self, field_name)
