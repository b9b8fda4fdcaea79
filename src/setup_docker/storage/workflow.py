"""Storage layer for the GitHub Actions workflow-command protocol.

The runner passes inputs through ``INPUT_*`` environment variables and
accepts outputs, exported variables, and saved state either through files
named by ``GITHUB_OUTPUT``, ``GITHUB_ENV``, and ``GITHUB_STATE`` or, on older
runners, through commands printed to standard output.
"""

import os
import sys
import uuid
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from ..constants import STATE_IS_POST
from ..exceptions import WorkflowCommandError
from ..models.inputs import VERBATIM_INPUTS, RawInputs

__all__ = ["WorkflowRuntime"]


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class WorkflowRuntime:
    """Read inputs and write results for the current workflow step.

    Parameters
    ----------
    environ
        Process environment.  Defaults to `os.environ`.  Exported variables
        are written back into this mapping.
    stream
        Stream to which workflow commands are written.  Defaults to
        standard output.
    """

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._stream = stream or sys.stdout

    @staticmethod
    def input_env_name(name: str) -> str:
        """Return the environment variable the runner uses for an input."""
        return "INPUT_" + name.replace(" ", "_").upper()

    def get_input(self, name: str, *, trim: bool = True) -> str:
        """Return the value of an input, or the empty string if unset."""
        value = self._environ.get(self.input_env_name(name), "")
        return value.strip() if trim else value

    def get_raw_inputs(self) -> RawInputs:
        """Collect every action input into a `RawInputs`."""
        values = {
            name: self.get_input(name, trim=name not in VERBATIM_INPUTS)
            for name in RawInputs.input_names()
        }
        return RawInputs.model_validate(values)

    def get_state(self, name: str) -> str:
        """Return state saved by an earlier phase of this step."""
        return self._environ.get(f"STATE_{name}", "")

    @property
    def is_post(self) -> bool:
        """Whether this invocation is the post phase of the step."""
        return bool(self.get_state(STATE_IS_POST))

    def set_output(self, name: str, value: str) -> None:
        """Set a step output."""
        if not self._write_file_command("GITHUB_OUTPUT", name, value):
            self._issue("set-output", value, name=name)

    def export_variable(self, name: str, value: str) -> None:
        """Export a variable to this and all later steps of the job."""
        self._environ[name] = value
        if not self._write_file_command("GITHUB_ENV", name, value):
            self._issue("set-env", value, name=name)

    def save_state(self, name: str, value: str) -> None:
        """Save state for the post phase of this step."""
        if not self._write_file_command("GITHUB_STATE", name, value):
            self._issue("save-state", value, name=name)

    def error(self, message: str) -> None:
        """Report an error annotation."""
        self._issue("error", message)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Fold all log output inside the block into a collapsible group."""
        self._issue("group", title)
        try:
            yield
        finally:
            self._issue("endgroup")

    def _issue(self, command: str, message: str = "", **props: str) -> None:
        line = f"::{command}"
        if props:
            line += " " + ",".join(
                f"{k}={_escape_property(v)}" for k, v in props.items()
            )
        line += f"::{_escape_data(message)}"
        self._stream.write(line + "\n")
        self._stream.flush()

    def _write_file_command(self, env_var: str, name: str, value: str) -> bool:
        path = self._environ.get(env_var)
        if not path:
            return False
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise WorkflowCommandError(
                f"Unexpected input: {name} or its value contains the"
                f" delimiter {delimiter}"
            )
        record = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        with Path(path).open("a", encoding="utf-8") as f:
            f.write(record)
        return True
