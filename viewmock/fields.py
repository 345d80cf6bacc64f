"""
ViewMock Fields - Declared Fields of a Model Type
=================================================

A view can only bind to what a model type declares. This module answers the
question "which fields does this type have, and how is each one read?" once per
type and caches the answer in a `FieldRegistry`.

Declared Fields
---------------

For a type that has not been registered explicitly, the declared fields are the
public names found while walking its MRO (base classes first):

- dataclass fields
- class annotations (`ClassVar` and `InitVar` excluded)
- `property` objects
- `__slots__` entries

Names starting with an underscore are never fields. Attributes that are only
assigned inside `__init__` are not declared; annotate them on the class or
register the type explicitly.

Explicit Registration
---------------------

```python
registry = FieldRegistry()
registry.register(Legacy, "title", total=lambda m: m.compute_total())

registry.names(Legacy)  # ['title', 'total']
```

Registration replaces introspection for that exact type. Subclasses are
introspected independently unless registered themselves.
"""

import dataclasses
import inspect
import logging
import operator
import sys
import typing
import weakref
from typing import Any, Callable, Dict, List, Optional

from .exceptions import UnknownField

Getter = Callable[[Any], Any]


# ============================================================================
# FIELD DESCRIPTOR
# ============================================================================


class FieldDescriptor:
    """
    One declared field of a model type and the getter that reads it.

    The owner type is held weakly so a cached descriptor never keeps its
    type alive.
    """

    __slots__ = ("name", "getter", "_owner_ref", "__weakref__")

    def __init__(self, name: str, owner: type, getter: Getter):
        self.name = name
        self.getter = getter
        self._owner_ref = weakref.ref(owner)

    @property
    def owner(self) -> Optional[type]:
        """The declaring type, or None once it has been garbage collected."""
        return self._owner_ref()

    def read(self, model: Any) -> Any:
        """Read the live value of this field from `model`."""
        return self.getter(model)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FieldDescriptor):
            return NotImplemented
        return self.name == other.name and self.owner is other.owner

    def __hash__(self) -> int:
        return hash((self.name, id(self.owner)))

    def __repr__(self) -> str:
        owner = self.owner
        owner_name = owner.__name__ if owner is not None else "<collected>"
        return f"FieldDescriptor(name={self.name!r}, owner={owner_name})"


# ============================================================================
# INTROSPECTION
# ============================================================================


def _is_pseudo_field(annotation: Any) -> bool:
    """True for ClassVar/InitVar annotations, which never hold instance state."""
    if isinstance(annotation, str):
        bare = annotation.split("[", 1)[0].rsplit(".", 1)[-1]
        return bare in ("ClassVar", "InitVar")
    if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
        return True
    return annotation is dataclasses.InitVar or isinstance(
        annotation, dataclasses.InitVar
    )


def _class_annotations(klass: type) -> Dict[str, Any]:
    """Annotations declared directly on `klass`, without resolving unknown names."""
    if sys.version_info >= (3, 14):
        import annotationlib

        return annotationlib.get_annotations(
            klass, format=annotationlib.Format.FORWARDREF
        )
    return inspect.get_annotations(klass)


def _slot_names(klass: type) -> List[str]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return [slots]
    return list(slots)


def declared_field_names(model_type: type) -> List[str]:
    """Collect the public declared field names of `model_type` in MRO order."""
    names: List[str] = []
    if dataclasses.is_dataclass(model_type):
        names.extend(f.name for f in dataclasses.fields(model_type))

    for klass in reversed(model_type.__mro__):
        if klass is object:
            continue
        for name, annotation in _class_annotations(klass).items():
            if not _is_pseudo_field(annotation):
                names.append(name)
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                names.append(name)
        names.extend(_slot_names(klass))

    seen = set()
    result = []
    for name in names:
        if name.startswith("_") or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result


# ============================================================================
# REGISTRY
# ============================================================================


class FieldRegistry:
    """
    Per-type cache of field descriptors.

    Entries are weakly keyed by type, so registering or introspecting a
    throwaway test class does not keep it alive.
    """

    def __init__(self):
        self._fields: "weakref.WeakKeyDictionary[type, Dict[str, FieldDescriptor]]" = (
            weakref.WeakKeyDictionary()
        )
        self._explicit: "weakref.WeakSet[type]" = weakref.WeakSet()

    def register(self, model_type: type, *names: str, **getters: Getter) -> None:
        """
        Declare the fields of `model_type` explicitly.

        Positional names are read with plain attribute access; keyword
        arguments map a field name to a one-argument getter.
        """
        fields: Dict[str, FieldDescriptor] = {}
        for name in names:
            fields[name] = FieldDescriptor(name, model_type, operator.attrgetter(name))
        for name, getter in getters.items():
            fields[name] = FieldDescriptor(name, model_type, getter)
        self._fields[model_type] = fields
        self._explicit.add(model_type)
        logging.debug(f"Registered fields {list(fields)} for {model_type.__name__}")

    def is_registered(self, model_type: type) -> bool:
        return model_type in self._explicit

    def fields_of(self, model_type: type) -> Dict[str, FieldDescriptor]:
        """Return the name -> descriptor mapping for `model_type`, building it once."""
        try:
            return self._fields[model_type]
        except KeyError:
            pass
        fields = {
            name: FieldDescriptor(name, model_type, operator.attrgetter(name))
            for name in declared_field_names(model_type)
        }
        self._fields[model_type] = fields
        return fields

    def names(self, model_type: type) -> List[str]:
        return list(self.fields_of(model_type))

    def find(self, model_type: type, name: str) -> Optional[FieldDescriptor]:
        """Return the descriptor for `name`, or None if the type has no such field."""
        return self.fields_of(model_type).get(name)

    def field(self, model_type: type, name: str) -> FieldDescriptor:
        """Return the descriptor for `name`; raise UnknownField if absent."""
        descriptor = self.find(model_type, name)
        if descriptor is None:
            raise UnknownField(name, model_type)
        return descriptor

    def clear(self) -> None:
        """Forget every cached and registered type."""
        self._fields.clear()
        self._explicit = weakref.WeakSet()


_default_registry: Optional[FieldRegistry] = None


def get_default_registry() -> FieldRegistry:
    """Get the process-wide registry used when none is passed explicitly."""
    global _default_registry
    if _default_registry is None:
        _default_registry = FieldRegistry()
    return _default_registry


def _reset_default_registry() -> None:
    """Reset the default registry (for testing purposes)."""
    global _default_registry
    _default_registry = None


def register_fields(model_type: type, *names: str, **getters: Getter) -> None:
    """Register fields of `model_type` in the default registry."""
    get_default_registry().register(model_type, *names, **getters)
