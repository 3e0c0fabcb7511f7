class ParamfillError(Exception):
    pass


class ReflectionError(ParamfillError):
    """Raised when the signature of a definition callable cannot be inspected."""

    def __init__(self, target: str, reason: str):
        self.target = target
        super().__init__(f"Could not inspect signature of '{target}': {reason}")


class ConfigError(ParamfillError):
    pass
