from __future__ import annotations

import shlex


class SetupError(Exception):
    """Base class for booth setup errors."""


class ConfigError(SetupError):
    """The configuration could not be loaded. Fatal: nothing has run yet."""


class ConfigNotFound(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class ConfigSchemaError(ConfigError):
    pass


class StepFailure(SetupError):
    """A single step could not reach its target state. Non-fatal."""


class CommandError(SetupError):
    def __init__(self, argv: list[str], returncode: int, stderr: str = "") -> None:
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {shlex.join(argv)}\n{stderr}".rstrip())
