"""
ViewMock Exceptions
===================

Every failure in viewmock is local and synchronous. Errors are raised where the
problem is found and propagate to the test that caused it; nothing is retried
and no default value is substituted, since a silent fallback would hide exactly
the synchronization bugs a view mock exists to expose.

Each exception also derives from the builtin it most resembles, so callers can
write `except AttributeError` or `pytest.raises(LookupError)` when they prefer.
"""

from typing import Any, Optional


class ViewMockError(Exception):
    """Base class for all viewmock errors."""

    pass


# ============================================================================
# RESOLUTION ERRORS
# ============================================================================


class UnknownField(ViewMockError, AttributeError):
    """A name-based lookup found no declared field on the model type."""

    def __init__(self, field_name: str, model_type: type):
        self.field_name = field_name
        self.model_type = model_type
        super().__init__(
            f"{model_type.__name__} has no declared field named '{field_name}'"
        )


class UnsupportedExpression(ViewMockError, ValueError):
    """An accessor expression is not a plain field read."""

    def __init__(self, message: str, accessor: Any = None):
        self.accessor = accessor
        super().__init__(message)


class DynamicComponentNotSupported(UnsupportedExpression):
    """An accessor reads an indexed (dynamic) component, e.g. `m["key"]`."""

    pass


class NotAMethodExpression(ViewMockError, ValueError):
    """Method extraction was asked for an expression that is not a call."""

    def __init__(self, accessor: Any = None):
        self.accessor = accessor
        super().__init__("expression does not invoke a method")


# ============================================================================
# OBSERVATION ERRORS
# ============================================================================


class UnknownNotifiedField(ViewMockError, AttributeError):
    """The model notified a change of a field its own type does not declare."""

    def __init__(self, field_name: str, model_type: type):
        self.field_name = field_name
        self.model_type = model_type
        super().__init__(
            f"Field of name '{field_name}' does not exist on {model_type.__name__}"
        )


class FieldNotObserved(ViewMockError, LookupError):
    """A displayed value was requested for a field that was never captured."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            f"The field '{field_name}' is not being observed in this test. "
            "To observe a specific field use "
            "observe_partial(model).with_field(<field>)"
        )


class TypeMismatch(ViewMockError, TypeError):
    """A typed read found a displayed value of an incompatible type."""

    def __init__(self, field_name: str, expected_type: type, value: Optional[Any]):
        self.field_name = field_name
        self.expected_type = expected_type
        self.value = value
        super().__init__(
            f"The field '{field_name}' is not of specified type: "
            f"{getattr(expected_type, '__name__', expected_type)} "
            f"(displayed {type(value).__name__})"
        )
