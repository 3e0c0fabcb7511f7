import functools
import inspect
import logging
import types
import typing
from typing import Any, Callable, Dict, List, Optional

from .exceptions import ReflectionError
from .spec import ParameterDescriptor, ParameterKind

log = logging.getLogger(__name__)

# Classes from these modules are reported by their bare name ("int", "Iterable"),
# everything else by its dotted path.
_BARE_NAME_MODULES = {"builtins", "typing", "collections.abc", "types"}

_POSITIONAL_KINDS = {ParameterKind.POSITIONAL_ONLY, ParameterKind.POSITIONAL_OR_KEYWORD}

_NONE_TYPE = type(None)

# Prefixes dropped from string annotations that cannot be evaluated
_STRING_PREFIXES = ("typing.", "collections.abc.", "typing_extensions.")


def _map_param_kind(kind: inspect._ParameterKind) -> ParameterKind:
    """Maps inspect's ParameterKind enum to our own."""
    if kind == inspect.Parameter.POSITIONAL_ONLY:
        return ParameterKind.POSITIONAL_ONLY
    if kind == inspect.Parameter.POSITIONAL_OR_KEYWORD:
        return ParameterKind.POSITIONAL_OR_KEYWORD
    if kind == inspect.Parameter.VAR_POSITIONAL:
        return ParameterKind.VAR_POSITIONAL
    if kind == inspect.Parameter.KEYWORD_ONLY:
        return ParameterKind.KEYWORD_ONLY
    if kind == inspect.Parameter.VAR_KEYWORD:
        return ParameterKind.VAR_KEYWORD
    raise ValueError(f"Unknown parameter kind: {kind}")


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is typing.Union or origin is types.UnionType


def _split_top_level(text: str, separator: str) -> List[str]:
    """Splits on a separator outside of any brackets."""
    parts: List[str] = []
    depth = 0
    current = ""
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == separator and depth == 0:
            parts.append(current.strip())
            current = ""
        else:
            current += char
    parts.append(current.strip())
    return parts


def _strip_module_prefix(text: str) -> str:
    for prefix in _STRING_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix) :]
    return text


def _string_union_members(text: str) -> Optional[List[str]]:
    """
    Returns the members of a union written as a string ("Optional[X]",
    "Union[X, Y]", "X | Y"), or None when the string is not a union.
    """
    text = _strip_module_prefix(text.strip())
    if text.startswith("Optional[") and text.endswith("]"):
        return [text[len("Optional[") : -1].strip(), "None"]
    if text.startswith("Union[") and text.endswith("]"):
        return _split_top_level(text[len("Union[") : -1], ",")

    members = _split_top_level(text, "|")
    return members if len(members) > 1 else None


def _unwrap_string(text: str) -> Optional[str]:
    members = _string_union_members(text)
    if members is not None:
        remaining = [m for m in members if m not in ("None", "NoneType")]
        return _unwrap_string(remaining[0]) if remaining else None

    base = _strip_module_prefix(text.strip()).split("[", 1)[0].strip()
    return base or None


def _unwrap(annotation: Any) -> Any:
    """
    Reduces an annotation to the object its type name is taken from:
    the first non-None member of a union, the origin of a generic alias.
    """
    if isinstance(annotation, str):
        return _unwrap_string(annotation)

    if _is_union(annotation):
        members = [a for a in typing.get_args(annotation) if a is not _NONE_TYPE]
        return _unwrap(members[0]) if members else None

    origin = typing.get_origin(annotation)
    if origin is not None:
        return origin
    return annotation


def _allows_null(annotation: Any, default: Any) -> bool:
    if default is None:
        return True
    if annotation is inspect.Parameter.empty:
        return True
    if annotation is None or annotation is _NONE_TYPE or annotation is typing.Any:
        return True
    if _is_union(annotation):
        return _NONE_TYPE in typing.get_args(annotation)
    if isinstance(annotation, str):
        # Unresolved string annotation, e.g. a forward reference to an undefined name
        text = _strip_module_prefix(annotation.strip())
        if text in ("None", "NoneType", "Any"):
            return True
        members = _string_union_members(text)
        return members is not None and any(m in ("None", "NoneType") for m in members)
    return False


def _get_type_name(target: Any) -> Optional[str]:
    """Gets the nominal type name of an unwrapped annotation."""
    if target is None or target is inspect.Parameter.empty:
        return None

    if isinstance(target, str):
        return target.strip() or None

    if isinstance(target, type):
        module = getattr(target, "__module__", "builtins")
        if module in _BARE_NAME_MODULES:
            return target.__qualname__
        return f"{module}.{target.__qualname__}"

    name = getattr(target, "__name__", None)
    if name:
        return name

    return str(target).replace("typing.", "")


def _evaluate_annotation(annotation: str, definition: Callable[..., Any]) -> Any:
    globalns = getattr(inspect.unwrap(definition), "__globals__", None) or {}
    try:
        return eval(annotation, dict(globalns))
    except (NameError, AttributeError, TypeError, SyntaxError):
        return annotation


def _resolve_hints(
    definition: Callable[..., Any], parameters: List[inspect.Parameter]
) -> Dict[str, Any]:
    """
    Resolves the annotation of every parameter. When the callable's hints
    cannot be evaluated as a whole, each string annotation is evaluated on its
    own and only the ones that still fail are kept as strings.
    """
    try:
        return typing.get_type_hints(definition)
    except (NameError, TypeError, AttributeError, SyntaxError) as e:
        log.debug(f"Resolving annotations one by one for {definition!r}: {e}")

    hints: Dict[str, Any] = {}
    for param in parameters:
        annotation = param.annotation
        if isinstance(annotation, str):
            annotation = _evaluate_annotation(annotation, definition)
        hints[param.name] = annotation
    return hints


def _describe(definition: Callable[..., Any]) -> str:
    return getattr(definition, "__qualname__", None) or repr(definition)


def reflect_parameters(definition: Callable[..., Any]) -> List[ParameterDescriptor]:
    """
    Extracts the positional parameters of a definition callable as an ordered
    list of ParameterDescriptor objects.

    Only parameters a host can bind positionally are reported; `*args`,
    `**kwargs` and keyword-only parameters are skipped.

    Args:
        definition: The suite or test definition callable.

    Returns:
        One descriptor per positional parameter, in declaration order.

    Raises:
        ReflectionError: If the callable's signature cannot be inspected.
    """
    try:
        signature = inspect.signature(definition)
    except (TypeError, ValueError) as e:
        raise ReflectionError(_describe(definition), str(e)) from e

    hints = _resolve_hints(definition, list(signature.parameters.values()))

    descriptors: List[ParameterDescriptor] = []
    for param in signature.parameters.values():
        kind = _map_param_kind(param.kind)
        if kind not in _POSITIONAL_KINDS:
            continue

        annotation = hints.get(param.name, param.annotation)
        target = _unwrap(annotation) if annotation is not inspect.Parameter.empty else None

        descriptors.append(
            ParameterDescriptor(
                name=param.name,
                type_name=_get_type_name(target),
                allows_null=_allows_null(annotation, param.default),
                annotation=target,
                kind=kind,
            )
        )

    return descriptors


def _object_probe(a: object) -> None:
    pass


@functools.lru_cache(maxsize=None)
def is_object_type_supported() -> bool:
    """
    Reports whether the reflection facility names an `object` annotation as
    the generic object pseudo-type rather than as a concrete class path.

    Computed once and cached for the process lifetime; call
    `is_object_type_supported.cache_clear()` to probe again.
    """
    try:
        parameters = reflect_parameters(_object_probe)
    except ReflectionError as e:
        log.warning(f"Object type probe failed, assuming unsupported: {e}")
        return False

    supported = bool(parameters) and (parameters[0].type_name or "").lower() == "object"
    log.debug(f"Object type supported: {supported}")
    return supported
