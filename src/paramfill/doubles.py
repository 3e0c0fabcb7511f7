"""
Test-doubles handed to definition callables in place of real objects.

All doubles come from `unittest.mock`: they record calls, accept any
arguments and never raise when a capability is invoked.
"""

from typing import Any, List, Optional
from unittest.mock import MagicMock, Mock


def _annotated_fields(cls: type) -> List[str]:
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        for name in klass.__dict__.get("__annotations__", {}):
            if name not in names:
                names.append(name)
    return names


def mock_instance(type_name: Optional[str], annotation: Any = None) -> MagicMock:
    """
    Creates a fresh double standing in for an instance of the named type.

    When the annotation is a real class the double is specced against it, so
    it passes `isinstance` checks and only exposes that class's attributes.
    Annotated fields (dataclass fields without defaults, for instance) are
    exposed too. Attributes assigned only in `__init__` without a class-level
    annotation are invisible to the spec and raise `AttributeError`.
    """
    if isinstance(annotation, type) and annotation is not object:
        double = MagicMock(spec=annotation, name=type_name)
        for field_name in _annotated_fields(annotation):
            if field_name not in dir(annotation):
                setattr(double, field_name, MagicMock(name=f"{type_name}.{field_name}"))
        return double
    return MagicMock(name=type_name)


def mock_object() -> MagicMock:
    return MagicMock(name="object")


def stub(return_value: Any = None) -> Mock:
    """A callable double which records its calls and returns `return_value`."""
    return Mock(return_value=return_value)
