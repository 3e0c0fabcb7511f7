import logging
import types
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from . import doubles
from .config import load_factory
from .reflection import is_object_type_supported
from .spec import ParameterDescriptor

log = logging.getLogger(__name__)

Factory = Callable[[ParameterDescriptor], Any]


def _noop(*args: Any, **kwargs: Any) -> None:
    return None


def _exhausted_generator() -> Iterator[Any]:
    return
    yield


_BUILTIN_FACTORIES: Dict[str, Factory] = {
    "bool": lambda p: False,
    "int": lambda p: 0,
    "float": lambda p: 0.0,
    "str": lambda p: "",
    "string": lambda p: "",
    "bytes": lambda p: b"",
    "list": lambda p: [],
    "array": lambda p: [],
    "iterable": lambda p: [],
    "sequence": lambda p: [],
    "collection": lambda p: [],
    "tuple": lambda p: (),
    "dict": lambda p: {},
    "mapping": lambda p: {},
    "set": lambda p: set(),
    "frozenset": lambda p: frozenset(),
    "simplenamespace": lambda p: types.SimpleNamespace(),
    "types.simplenamespace": lambda p: types.SimpleNamespace(),
    "callable": lambda p: doubles.stub(),
    "function": lambda p: _noop,
    "functiontype": lambda p: _noop,
    "lambdatype": lambda p: _noop,
    "generator": lambda p: _exhausted_generator(),
    "iterator": lambda p: _exhausted_generator(),
}


class ParameterResolver:
    """
    Computes placeholder arguments for the parameters of a definition callable.

    Each parameter is resolved by its declared type name, case-insensitively:
    nullable parameters get `None`, well-known types get an empty value and
    anything else gets a test-double standing in for the declared type.

    Args:
        object_type_supported: Whether `object` parameters may receive a plain
            empty namespace. `None` defers to the cached reflection probe.
        factories: Extra type name -> "module:callable" entries, consulted
            before the built-in table.
    """

    def __init__(
        self,
        object_type_supported: Optional[bool] = None,
        factories: Optional[Dict[str, str]] = None,
    ):
        self._object_type_supported = object_type_supported
        self._factories: Dict[str, Factory] = dict(_BUILTIN_FACTORIES)
        self._factories["object"] = self._resolve_object

        for type_name, entry_point in (factories or {}).items():
            self.register(type_name, self._wrap_user_factory(load_factory(entry_point)))

    @property
    def object_type_supported(self) -> bool:
        if self._object_type_supported is None:
            return is_object_type_supported()
        return self._object_type_supported

    def register(self, type_name: str, factory: Factory) -> None:
        """Registers a factory for a type name, replacing any existing entry."""
        log.debug(f"Registering placeholder factory for '{type_name}'")
        self._factories[type_name.lower()] = factory

    def resolve(self, parameters: Sequence[ParameterDescriptor]) -> List[Any]:
        return [self.resolve_parameter(p) for p in parameters]

    def resolve_parameter(self, parameter: ParameterDescriptor) -> Any:
        if parameter.allows_null:
            return None

        factory = self._factories.get((parameter.type_name or "").lower())
        if factory is None:
            return doubles.mock_instance(parameter.type_name, parameter.annotation)
        return factory(parameter)

    def _resolve_object(self, parameter: ParameterDescriptor) -> Any:
        if self.object_type_supported:
            return types.SimpleNamespace()
        return doubles.mock_object()

    @staticmethod
    def _wrap_user_factory(factory: Callable[[], Any]) -> Factory:
        return lambda p: factory()


def resolve(parameters: Sequence[ParameterDescriptor]) -> List[Any]:
    return ParameterResolver().resolve(parameters)
