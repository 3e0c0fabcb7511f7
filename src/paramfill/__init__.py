from .config import ParamfillConfig, load_config_from_path
from .exceptions import ConfigError, ParamfillError, ReflectionError
from .plugin import ParamfillPlugin, create, install
from .reflection import is_object_type_supported, reflect_parameters
from .resolver import ParameterResolver, resolve

__all__ = [
    "ParamfillPlugin",
    "ParameterResolver",
    "ParamfillConfig",
    "ParamfillError",
    "ReflectionError",
    "ConfigError",
    "create",
    "install",
    "resolve",
    "reflect_parameters",
    "is_object_type_supported",
    "load_config_from_path",
]
