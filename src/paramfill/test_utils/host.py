from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional


class SpyEmitter:
    """
    An in-memory notification source matching EmitterProtocol.

    Records every subscription so tests can assert on what a plugin
    attached, and dispatches events synchronously via `emit`.
    """

    def __init__(self):
        self.listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        self.listeners[event].append(listener)

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> None:
        if listener in self.listeners.get(event, []):
            self.listeners[event].remove(listener)

    def emit(self, event: str, *args: Any) -> None:
        for listener in list(self.listeners.get(event, [])):
            listener(*args)

    def listener_count(self, event: str) -> int:
        return len(self.listeners.get(event, []))


class FakeTest:
    def __init__(self, definition: Callable[..., Any]):
        self.definition = definition
        self.definition_arguments: Optional[List[Any]] = None

    def get_definition(self) -> Callable[..., Any]:
        return self.definition

    def set_definition_arguments(self, arguments: List[Any]) -> None:
        self.definition_arguments = arguments

    def run(self) -> Any:
        """Invokes the definition the way a host runner would."""
        return self.definition(*(self.definition_arguments or []))


class FakeSuite(FakeTest):
    def __init__(
        self,
        definition: Callable[..., Any],
        tests: Optional[List[FakeTest]] = None,
    ):
        super().__init__(definition)
        self.tests: List[FakeTest] = list(tests or [])

    def get_tests(self) -> List[FakeTest]:
        return self.tests
