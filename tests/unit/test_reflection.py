from typing import Any, Callable, Dict, Generator, Iterator, Optional

import pytest

import paramfill.reflection
from paramfill.exceptions import ReflectionError
from paramfill.reflection import is_object_type_supported, reflect_parameters
from paramfill.spec import ParameterKind


class Widget:
    def spin(self, speed: int) -> int:
        return speed


def test_reflect_parameters_keeps_positional_order():
    def definition(name: str, count: int, flag: bool = True, *rest, key: str, **extra):
        pass

    # Act
    params = reflect_parameters(definition)

    # Assert
    assert [p.name for p in params] == ["name", "count", "flag"]
    assert [p.type_name for p in params] == ["str", "int", "bool"]
    assert not any(p.allows_null for p in params)
    assert all(p.kind == ParameterKind.POSITIONAL_OR_KEYWORD for p in params)


def test_reflect_parameters_reports_positional_only_kind():
    def definition(a: int, /, b: int):
        pass

    params = reflect_parameters(definition)

    assert params[0].kind == ParameterKind.POSITIONAL_ONLY
    assert params[1].kind == ParameterKind.POSITIONAL_OR_KEYWORD


def test_reflect_parameters_on_parameterless_definition():
    assert reflect_parameters(lambda: None) == []


def test_nullable_parameters():
    def definition(a: Optional[int], b: int | None, d, e: Any, c: int = None):
        pass

    params = {p.name: p for p in reflect_parameters(definition)}

    assert all(p.allows_null for p in params.values())
    assert params["a"].type_name == "int"
    assert params["b"].type_name == "int"
    assert params["d"].type_name is None


def test_generic_annotations_report_their_origin():
    def definition(
        a: list[int],
        b: Callable[[int], str],
        c: Iterator[int],
        d: Dict[str, int],
        e: Generator[int, None, None],
    ):
        pass

    names = [p.type_name for p in reflect_parameters(definition)]

    assert names == ["list", "Callable", "Iterator", "dict", "Generator"]


def test_class_annotation_reports_dotted_path_and_class():
    def definition(widget: Widget):
        pass

    (param,) = reflect_parameters(definition)

    assert param.type_name == f"{Widget.__module__}.Widget"
    assert param.annotation is Widget
    assert param.allows_null is False


def test_unresolvable_forward_reference_falls_back_to_string():
    def definition(a: "MissingType", b: "Optional[MissingType]"):  # noqa: F821
        pass

    a, b = reflect_parameters(definition)

    assert a.type_name == "MissingType"
    assert a.allows_null is False
    assert b.allows_null is True


def test_bound_method_excludes_self():
    class Fixture:
        def definition(self, widget: Widget):
            pass

    params = reflect_parameters(Fixture().definition)

    assert [p.name for p in params] == ["widget"]


def test_non_callable_raises_reflection_error():
    with pytest.raises(ReflectionError) as exc_info:
        reflect_parameters(42)

    assert isinstance(exc_info.value.__cause__, TypeError)


class TestObjectTypeProbe:
    def test_object_is_reported_as_pseudo_type(self):
        assert is_object_type_supported() is True

    def test_probe_failure_downgrades_to_false(self, monkeypatch):
        def broken(definition):
            raise ReflectionError("probe", "unsupported signature")

        monkeypatch.setattr(paramfill.reflection, "reflect_parameters", broken)

        assert is_object_type_supported() is False

    def test_probe_result_is_cached(self, monkeypatch):
        assert is_object_type_supported() is True

        def broken(definition):
            raise ReflectionError("probe", "unsupported signature")

        monkeypatch.setattr(paramfill.reflection, "reflect_parameters", broken)

        # The first result sticks for the lifetime of the process
        assert is_object_type_supported() is True
