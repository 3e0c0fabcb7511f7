import importlib
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from .exceptions import ConfigError


@dataclass
class ParamfillConfig:
    # Type name -> "module:callable" entry producing a placeholder value
    factories: Dict[str, str] = field(default_factory=dict)
    # Overrides the object type probe when set
    object_type_supported: Optional[bool] = None


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def load_config_from_path(search_path: Path) -> ParamfillConfig:
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        return ParamfillConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in '{config_path}': {e}") from e

    paramfill_data: Dict[str, Any] = data.get("tool", {}).get("paramfill", {})

    factories = paramfill_data.get("factories", {})
    if not isinstance(factories, dict) or not all(
        isinstance(v, str) for v in factories.values()
    ):
        raise ConfigError(
            f"[tool.paramfill.factories] in '{config_path}' must map type names to "
            "'module:callable' strings."
        )

    object_type_supported = paramfill_data.get("object_type_supported")
    if object_type_supported is not None and not isinstance(object_type_supported, bool):
        raise ConfigError(
            f"[tool.paramfill] object_type_supported in '{config_path}' must be a boolean."
        )

    return ParamfillConfig(
        factories=dict(factories), object_type_supported=object_type_supported
    )


def load_factory(entry_point_str: str) -> Callable[[], Any]:
    """
    Imports a placeholder factory from an entry point string such as
    "decimal:Decimal". The factory is called with no arguments.

    Raises:
        ConfigError: If the entry point is malformed or cannot be loaded.
    """
    try:
        module_str, callable_str = entry_point_str.split(":", 1)
        module = importlib.import_module(module_str)
        factory = module
        for attr in callable_str.split("."):
            factory = getattr(factory, attr)
    except (ImportError, AttributeError, ValueError) as e:
        raise ConfigError(f"Could not load factory '{entry_point_str}': {e}") from e

    if not callable(factory):
        raise ConfigError(f"Factory '{entry_point_str}' is not callable.")
    return factory
