"""Exceptions for setup-docker-action."""

__all__ = [
    "DockerCommandError",
    "InputValidationError",
    "InvalidContextError",
    "ToolkitNotFoundError",
    "WorkflowCommandError",
]


class InputValidationError(ValueError):
    """An action input could not be parsed into its structured form."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for input {name}: {reason}")
        self.name = name
        self.value = value


class InvalidContextError(Exception):
    """The requested Docker context name may not be used."""


class ToolkitNotFoundError(Exception):
    """No toolkit implementation is registered under the requested name."""


class WorkflowCommandError(Exception):
    """A workflow command could not be written safely."""


class DockerCommandError(Exception):
    """The Docker CLI exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int) -> None:
        cmdline = " ".join(command)
        super().__init__(f"'{cmdline}' exited with status {returncode}")
        self.command = command
        self.returncode = returncode
