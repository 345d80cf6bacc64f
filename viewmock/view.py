"""
ViewMock View - What a Bound View Would Display
===============================================

A `ViewMock` plays the part of a data-bound view in a unit test. It remembers
the value of each field as the view last received it and refreshes that memory
only when the model notifies a change, never by reading the model on its own.
Comparing the *displayed* value with the model's *actual* value therefore
reveals the classic binding bug: a field was assigned but nobody raised the
change notification.

Basic Usage
-----------

```python
from viewmock import observe

model = PersonViewModel(name="One")
view = observe(model)

model.name = "X"                       # assigned, not notified
view.displayed_value("name")           # "One"
view.actual_value("name")              # "X"

assert view.is_displayed_as(lambda m: m.name, "X"), view.last_error()
# AssertionError: The viewModel is correct but the view was never notified
# with NotifyPropertyChanged.

model.notify_property_changed("name")
view.displayed_value("name")           # "X"
```

Partial Observation
-------------------

`observe` captures every declared field up front. Some models initialize
fields late, so `observe_partial` starts empty and captures only what the test
opts into:

```python
view = observe_partial(model).with_field("name").with_field(lambda m: m.age)
view.displayed_value("email")          # FieldNotObserved
```

A notification still updates (and starts tracking) the field it names, and an
empty-name notification refreshes every declared field, exactly as a view
listening to the model would.

Lifetime
--------

The view subscribes to the model when it is created and never unsubscribes,
so it lives as long as the model does. Delivery is synchronous; the cache is
updated on whatever thread the model notifies from.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

from .exceptions import FieldNotObserved, TypeMismatch, UnknownNotifiedField
from .fields import FieldDescriptor, FieldRegistry
from .notify import is_refresh_all
from .resolver import MemberResolver, Selector

M = TypeVar("M")

NEVER_NOTIFIED_MESSAGE = (
    "The viewModel is correct but the view was never notified "
    "with NotifyPropertyChanged."
)


# ============================================================================
# VIEW MOCK - the observation cache
# ============================================================================


class ViewMock(Generic[M]):
    """
    Cache of the values a view displays for one model instance.

    Args:
        model: Object exposing `subscribe(handler)`; see `viewmock.notify`.
        populate: Capture every declared field immediately (`observe`) or start
            empty and let fields be opted into (`observe_partial`).
        registry: Field registry to resolve fields with; defaults to the
            process-wide one.
    """

    def __init__(
        self,
        model: M,
        *,
        populate: bool = True,
        registry: Optional[FieldRegistry] = None,
    ):
        self._model = model
        self._resolver = MemberResolver(type(model), registry)
        self._registry = self._resolver.registry
        self._displayed: Dict[str, Any] = {}
        self._last_error = ""

        if populate:
            self._save_full_state()
        model.subscribe(self._on_property_changed)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def _save_full_state(self) -> None:
        """Capture every field currently declared on the model's type."""
        fields = self._registry.fields_of(type(self._model))
        for descriptor in fields.values():
            self._displayed[descriptor.name] = descriptor.read(self._model)
        logging.debug(
            f"ViewMock captured {len(fields)} fields of {type(self._model).__name__}"
        )

    def _save_state_for(self, descriptor: FieldDescriptor) -> None:
        self._displayed[descriptor.name] = descriptor.read(self._model)

    def capture(self, selector: Selector) -> FieldDescriptor:
        """Start displaying a field, taking its current value from the model."""
        descriptor = self._resolver.resolve(selector)
        self._save_state_for(descriptor)
        return descriptor

    def _on_property_changed(self, sender: Any, field_name: Optional[str]) -> None:
        if is_refresh_all(field_name):
            logging.debug("ViewMock received refresh-all notification")
            self._save_full_state()
            return

        descriptor = self._registry.find(type(self._model), field_name)
        if descriptor is None:
            raise UnknownNotifiedField(field_name, type(self._model))
        self._save_state_for(descriptor)
        logging.debug(
            f"ViewMock received change of '{field_name}': "
            f"{self._displayed[field_name]!r}"
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def model(self) -> M:
        return self._model

    @property
    def observed_fields(self) -> List[str]:
        """Names of the fields the view currently displays."""
        return list(self._displayed)

    def field_info(self, selector: Selector) -> FieldDescriptor:
        """Resolve a selector to the model field it names."""
        return self._resolver.resolve(selector)

    def displayed_value(
        self, selector: Selector, expected_type: Optional[type] = None
    ) -> Any:
        """
        Return the value of a field as the view displays it.

        Raises FieldNotObserved if the field was never captured, and
        TypeMismatch if `expected_type` is given and the displayed value is
        not an instance of it.
        """
        name = self._resolver.name_of(selector)
        try:
            value = self._displayed[name]
        except KeyError:
            raise FieldNotObserved(name) from None
        if expected_type is not None and not isinstance(value, expected_type):
            raise TypeMismatch(name, expected_type, value)
        return value

    def actual_value(self, selector: Selector) -> Any:
        """Read the field straight from the model, ignoring notifications."""
        return self._resolver.resolve(selector).read(self._model)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def is_displayed_as(self, selector: Selector, expected: Any) -> bool:
        """
        Return True if the view displays `expected` for the field.

        When the model already holds `expected` but the view shows something
        else (or nothing), `last_error()` explains that the notification is
        missing. Intended use:

            assert view.is_displayed_as(lambda m: m.name, "X"), view.last_error()
        """
        displayed = self.displayed_value(selector)
        actual = self.actual_value(selector)
        if displayed is None or (actual == expected and displayed != expected):
            self._last_error = NEVER_NOTIFIED_MESSAGE
        return displayed == expected

    def last_error(self) -> str:
        """Return the last diagnostic message and clear it."""
        message = self._last_error
        self._last_error = ""
        return message

    def stale_fields(self) -> List[str]:
        """Names of observed fields whose displayed value differs from the model."""
        stale = []
        for name, displayed in self._displayed.items():
            if self.actual_value(name) != displayed:
                stale.append(name)
        return stale

    def __repr__(self) -> str:
        return (
            f"ViewMock({type(self._model).__name__}, "
            f"observing={self.observed_fields!r})"
        )


# ============================================================================
# BUILDER - partial observation
# ============================================================================


class ViewMockBuilder(Generic[M]):
    """
    Fluent front for a `ViewMock` that starts with no observed fields.

    Every read and diagnostic method of the underlying view is available
    directly on the builder.
    """

    def __init__(self, model: M, *, registry: Optional[FieldRegistry] = None):
        self._view: ViewMock[M] = ViewMock(model, populate=False, registry=registry)

    def with_field(self, selector: Selector) -> "ViewMockBuilder[M]":
        """Start observing a field, capturing its current value."""
        self._view.capture(selector)
        return self

    @property
    def view(self) -> ViewMock[M]:
        return self._view

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._view, name)

    def __repr__(self) -> str:
        return f"ViewMockBuilder({self._view!r})"


# ============================================================================
# FACTORIES
# ============================================================================


def observe(model: M, *, registry: Optional[FieldRegistry] = None) -> ViewMock[M]:
    """Create a view that displays every declared field of `model`."""
    return ViewMock(model, populate=True, registry=registry)


def observe_partial(
    model: M, *, registry: Optional[FieldRegistry] = None
) -> ViewMockBuilder[M]:
    """Create a view that displays only the fields added with `with_field`."""
    return ViewMockBuilder(model, registry=registry)
