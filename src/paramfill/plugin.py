import logging
from pathlib import Path
from typing import Any, Callable, Optional

from .config import ParamfillConfig, load_config_from_path
from .reflection import reflect_parameters
from .resolver import ParameterResolver
from .spec import (
    SUITE_DEFINE,
    SUITE_START,
    DefinitionProtocol,
    EmitterProtocol,
    SuiteProtocol,
)

log = logging.getLogger(__name__)


class ParamfillPlugin:
    """
    Supplies placeholder arguments to suite and test definitions whose
    parameters the host runner would otherwise leave unbound.

    The plugin only stores arguments on the suite and test objects; invoking
    the definitions is left to the host.
    """

    def __init__(self, resolver: Optional[ParameterResolver] = None):
        self.resolver = resolver or ParameterResolver()

    @classmethod
    def create(cls, config: Optional[ParamfillConfig] = None) -> "ParamfillPlugin":
        """
        Creates an unattached plugin. Without an explicit config, the
        `[tool.paramfill]` table of the nearest pyproject.toml above the
        working directory is used.
        """
        if config is None:
            config = load_config_from_path(Path.cwd())
        return cls(
            ParameterResolver(
                object_type_supported=config.object_type_supported,
                factories=config.factories,
            )
        )

    @classmethod
    def install(
        cls, emitter: EmitterProtocol, config: Optional[ParamfillConfig] = None
    ) -> "ParamfillPlugin":
        instance = cls.create(config)
        instance.attach(emitter)
        return instance

    def attach(self, emitter: EmitterProtocol) -> None:
        emitter.on(SUITE_DEFINE, self.on_suite_define)
        emitter.on(SUITE_START, self.on_suite_start)
        log.debug(f"Attached to {emitter!r}")

    def detach(self, emitter: EmitterProtocol) -> None:
        emitter.remove_listener(SUITE_DEFINE, self.on_suite_define)
        emitter.remove_listener(SUITE_START, self.on_suite_start)
        log.debug(f"Detached from {emitter!r}")

    def on_suite_define(self, suite: SuiteProtocol) -> None:
        self._apply(suite)

    def on_suite_start(self, suite: SuiteProtocol) -> None:
        for test in suite.get_tests():
            self._apply(test)

    def _apply(self, target: DefinitionProtocol) -> None:
        definition: Callable[..., Any] = target.get_definition()
        parameters = reflect_parameters(definition)
        if not parameters:
            return

        arguments = self.resolver.resolve(parameters)
        log.debug(
            f"Supplying {len(arguments)} placeholder argument(s) to "
            f"{getattr(definition, '__qualname__', definition)!r}"
        )
        target.set_definition_arguments(arguments)


def create(config: Optional[ParamfillConfig] = None) -> ParamfillPlugin:
    return ParamfillPlugin.create(config)


def install(
    emitter: EmitterProtocol, config: Optional[ParamfillConfig] = None
) -> ParamfillPlugin:
    return ParamfillPlugin.install(emitter, config)
