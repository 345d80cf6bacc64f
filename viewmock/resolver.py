"""
ViewMock Resolver - From Field Selectors to Field Descriptors
=============================================================

Tests name the field they care about in one of two equivalent ways:

```python
view.displayed_value("name")            # by name
view.displayed_value(lambda m: m.name)  # by accessor expression
```

The accessor form keeps refactoring tools and linters aware of the field. It is
never executed against the real model. Instead it is called once with a
recording stand-in that notes what the expression reads, and the recorded shape
decides the outcome:

==============================  ==============================================
Accessor                        Shape
==============================  ==============================================
`lambda m: m.name`              plain field read -> FieldDescriptor
`lambda m: cast(str, m.name)`   plain read behind a no-op conversion
`lambda m: m["key"]`            indexed/dynamic component -> rejected
`lambda m: m.items["key"]`      indexed/dynamic component -> rejected
`lambda m: m.refresh()`         zero-argument method call (`method_of` only)
anything else                   UnsupportedExpression
==============================  ==============================================

`operator.attrgetter("name")`, a `property` taken from the class
(`Model.name`) and an already resolved `FieldDescriptor` are accepted as
selectors as well.
"""

from typing import Any, Callable, Optional, Union

from .exceptions import (
    DynamicComponentNotSupported,
    NotAMethodExpression,
    UnknownField,
    UnsupportedExpression,
)
from .fields import FieldDescriptor, FieldRegistry, get_default_registry

Selector = Union[str, Callable[[Any], Any], property, FieldDescriptor]


# ============================================================================
# EXPRESSION RECORDING
# ============================================================================


class _ShapeError(Exception):
    """Raised inside a traced accessor when it leaves the supported shapes."""

    pass


class _Node:
    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        raise _ShapeError(f"nested access '.{name}' after {self!r}")

    def __getitem__(self, key: Any) -> Any:
        raise _ShapeError(f"indexing {self!r}")

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise _ShapeError(f"calling {self!r}")

    def __bool__(self) -> bool:
        raise _ShapeError(f"{self!r} used as a condition")

    def __iter__(self):
        raise _ShapeError(f"iterating {self!r}")


class _Recorder(_Node):
    """Stand-in for the model while an accessor is traced."""

    __slots__ = ()

    def __getattr__(self, name: str) -> "_MemberRead":
        return _MemberRead(name)

    def __getitem__(self, key: Any) -> "_IndexedRead":
        return _IndexedRead(None, key)

    def __repr__(self) -> str:
        return "model"


class _MemberRead(_Node):
    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __getitem__(self, key: Any) -> "_IndexedRead":
        return _IndexedRead(self.name, key)

    def __call__(self, *args: Any, **kwargs: Any) -> "_MethodCall":
        return _MethodCall(self.name, bool(args or kwargs))

    def __repr__(self) -> str:
        return f"model.{self.name}"


class _IndexedRead(_Node):
    __slots__ = ("name", "key")

    def __init__(self, name: Optional[str], key: Any):
        self.name = name
        self.key = key

    def __repr__(self) -> str:
        target = "model" if self.name is None else f"model.{self.name}"
        return f"{target}[{self.key!r}]"


class _MethodCall(_Node):
    __slots__ = ("name", "has_arguments")

    def __init__(self, name: str, has_arguments: bool):
        self.name = name
        self.has_arguments = has_arguments

    def __repr__(self) -> str:
        return f"model.{self.name}(...)" if self.has_arguments else f"model.{self.name}()"


def trace(accessor: Callable[[Any], Any]) -> Any:
    """
    Run `accessor` against a recording stand-in and return what it produced.

    The result is one of the recorded shapes, or whatever foreign value the
    accessor returned (a constant, a string built from the stand-in, ...).
    """
    try:
        return accessor(_Recorder())
    except (_ShapeError, TypeError) as e:
        raise UnsupportedExpression(
            f"Not a member access: {e}", accessor
        ) from e


# ============================================================================
# NAME EXTRACTION
# ============================================================================


def _property_name(prop: property, model_type: Optional[type]) -> str:
    if model_type is not None:
        for klass in model_type.__mro__:
            for name, attr in vars(klass).items():
                if attr is prop:
                    return name
    if prop.fget is None:
        raise UnsupportedExpression("property has no getter", prop)
    return prop.fget.__name__


def _read_from(shape: Any, accessor: Any) -> str:
    """Return the field name of a plain-read shape or raise for any other."""
    if isinstance(shape, _MemberRead):
        return shape.name
    if isinstance(shape, _IndexedRead):
        raise DynamicComponentNotSupported(
            f"Indexed access {shape!r} reads a dynamic component, "
            f"which cannot be observed as a field",
            accessor,
        )
    if isinstance(shape, _MethodCall):
        raise UnsupportedExpression(
            f"Not a member access: {shape!r} is a method call", accessor
        )
    raise UnsupportedExpression(
        f"Not a member access: accessor produced {shape!r}", accessor
    )


def name_of(selector: Selector, model_type: Optional[type] = None) -> str:
    """
    Extract the field name a selector denotes, without validating it.

    Used for cache keys. `model_type` only helps to name a `property` whose
    getter function is called differently from the attribute.
    """
    if isinstance(selector, str):
        return selector
    if isinstance(selector, FieldDescriptor):
        return selector.name
    if isinstance(selector, property):
        return _property_name(selector, model_type)
    if callable(selector):
        return _read_from(trace(selector), selector)
    raise UnsupportedExpression(
        f"Cannot select a field with {type(selector).__name__!r}", selector
    )


# ============================================================================
# MEMBER RESOLVER
# ============================================================================


class MemberResolver:
    """
    Resolves selectors against one model type.

    Example:
        ```python
        resolver = MemberResolver(PersonViewModel)
        resolver.resolve(lambda m: m.name)   # FieldDescriptor(name='name', ...)
        resolver.resolve("age")
        resolver.method_of(lambda m: m.rename())
        ```
    """

    def __init__(self, model_type: type, registry: Optional[FieldRegistry] = None):
        self.model_type = model_type
        self.registry = registry if registry is not None else get_default_registry()

    def resolve(self, selector: Selector) -> FieldDescriptor:
        """Resolve a name or accessor to the declared field it reads."""
        if isinstance(selector, FieldDescriptor):
            return selector
        return self.registry.field(self.model_type, self.name_of(selector))

    def name_of(self, selector: Selector) -> str:
        return name_of(selector, self.model_type)

    def method_of(self, accessor: Callable[[Any], Any]) -> Callable:
        """
        Return the function an accessor like `lambda m: m.refresh()` calls.

        Raises NotAMethodExpression unless the accessor is a single call with
        no arguments on the model.
        """
        if isinstance(accessor, (str, property, FieldDescriptor)) or not callable(
            accessor
        ):
            raise NotAMethodExpression(accessor)
        try:
            shape = trace(accessor)
        except UnsupportedExpression as e:
            raise NotAMethodExpression(accessor) from e
        if not isinstance(shape, _MethodCall) or shape.has_arguments:
            raise NotAMethodExpression(accessor)

        try:
            method = getattr(self.model_type, shape.name)
        except AttributeError:
            raise UnknownField(shape.name, self.model_type) from None
        if not callable(method):
            raise NotAMethodExpression(accessor)
        return method


def resolve(
    model_type: type, selector: Selector, registry: Optional[FieldRegistry] = None
) -> FieldDescriptor:
    """Shorthand for `MemberResolver(model_type, registry).resolve(selector)`."""
    return MemberResolver(model_type, registry).resolve(selector)

