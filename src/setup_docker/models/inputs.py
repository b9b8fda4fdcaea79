"""Models for action inputs, raw and resolved."""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..constants import MAX_TCP_PORT
from .source import ArchiveSource, SourceSpec

__all__ = ["VERBATIM_INPUTS", "Inputs", "RawInputs"]

VERBATIM_INPUTS = frozenset({"context", "daemon-config", "github-token"})
"""Inputs whose surrounding whitespace is preserved when read."""


class RawInputs(BaseModel):
    """Action inputs exactly as the runner supplied them.

    Every input is a string and every input is optional. Fields are aliased
    to the input names declared in the action metadata, so this model can be
    validated directly from a mapping of input name to value.
    """

    model_config = ConfigDict(
        frozen=True, extra="ignore", validate_by_name=True
    )

    version: Annotated[
        str,
        Field(
            title="Docker version or source specification",
            description=(
                "Either a bare version such as ``v27.2.0`` or a"
                " comma-separated list of key=value pairs, for example"
                " ``type=image,tag=master``"
            ),
        ),
    ] = ""

    channel: Annotated[str, Field(title="Release channel (deprecated)")] = ""

    context: Annotated[str, Field(title="Docker context name")] = ""

    daemon_config: Annotated[
        str,
        Field(title="Docker daemon JSON configuration", alias="daemon-config"),
    ] = ""

    set_host: Annotated[
        str, Field(title="Whether to export DOCKER_HOST", alias="set-host")
    ] = ""

    rootless: Annotated[str, Field(title="Whether to run rootless")] = ""

    tcp_port: Annotated[
        str,
        Field(title="Local TCP port for the daemon", alias="tcp-port"),
    ] = ""

    github_token: Annotated[
        SecretStr, Field(title="GitHub token", alias="github-token")
    ] = SecretStr("")

    @classmethod
    def input_names(cls) -> list[str]:
        """Names of every input this model reads, as the runner knows them."""
        return [
            field.alias or name for name, field in cls.model_fields.items()
        ]


class Inputs(BaseModel):
    """Resolved action configuration.

    Produced once per invocation and never modified afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: Annotated[
        SourceSpec, Field(title="Source from which to install Docker")
    ] = ArchiveSource()

    context: Annotated[
        str,
        Field(
            title="Docker context name",
            description=(
                "Empty means a generated default name is used. The value"
                " ``default`` is rejected before installation starts."
            ),
        ),
    ] = ""

    daemon_config: Annotated[
        str,
        Field(
            title="Docker daemon JSON configuration",
            description="Passed to the daemon unparsed",
        ),
    ] = ""

    rootless: Annotated[bool, Field(title="Run the daemon rootless")] = False

    set_host: Annotated[bool, Field(title="Export DOCKER_HOST")] = False

    tcp_port: Annotated[
        Annotated[int, Field(gt=0, le=MAX_TCP_PORT)] | None,
        Field(title="Local TCP port for the daemon"),
    ] = None

    runtime_basedir: Annotated[
        Path,
        Field(
            title="Runtime base directory",
            description="Always ``<home>/setup-docker-action``",
        ),
    ]

    github_token: Annotated[SecretStr, Field(title="GitHub token")] = (
        SecretStr("")
    )
