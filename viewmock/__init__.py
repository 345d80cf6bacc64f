"""
ViewMock - A Test Double for Data-Bound Views

Simulates what a view bound to a change-notifying model would display, so
tests can tell "what the model holds" apart from "what the view was told".
"""

from .exceptions import (
    DynamicComponentNotSupported,
    FieldNotObserved,
    NotAMethodExpression,
    TypeMismatch,
    UnknownField,
    UnknownNotifiedField,
    UnsupportedExpression,
    ViewMockError,
)
from .fields import (
    FieldDescriptor,
    FieldRegistry,
    get_default_registry,
    register_fields,
)
from .notify import REFRESH_ALL, NotifiesPropertyChanged, NotifyPropertyChanged
from .resolver import MemberResolver, name_of, resolve
from .view import (
    NEVER_NOTIFIED_MESSAGE,
    ViewMock,
    ViewMockBuilder,
    observe,
    observe_partial,
)

__all__ = [
    # Entry points
    "observe",
    "observe_partial",
    "ViewMock",
    "ViewMockBuilder",
    "NEVER_NOTIFIED_MESSAGE",
    # Models
    "NotifyPropertyChanged",
    "NotifiesPropertyChanged",
    "REFRESH_ALL",
    # Field resolution
    "FieldDescriptor",
    "FieldRegistry",
    "MemberResolver",
    "get_default_registry",
    "register_fields",
    "name_of",
    "resolve",
    # Exceptions
    "ViewMockError",
    "UnknownField",
    "UnsupportedExpression",
    "DynamicComponentNotSupported",
    "NotAMethodExpression",
    "UnknownNotifiedField",
    "FieldNotObserved",
    "TypeMismatch",
]
