from .models import (
    ParameterDescriptor,
    ParameterKind,
    SUITE_DEFINE,
    SUITE_START,
)
from .protocols import (
    DefinitionProtocol,
    EmitterProtocol,
    SuiteProtocol,
)

__all__ = [
    "ParameterDescriptor",
    "ParameterKind",
    "SUITE_DEFINE",
    "SUITE_START",
    "DefinitionProtocol",
    "EmitterProtocol",
    "SuiteProtocol",
]
