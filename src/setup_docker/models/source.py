"""Models for the source from which Docker is installed."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_ARCHIVE_CHANNEL",
    "DEFAULT_VERSION",
    "ArchiveSource",
    "ImageSource",
    "SourceSpec",
]

DEFAULT_VERSION = "latest"
"""Version or tag used when none is given."""

DEFAULT_ARCHIVE_CHANNEL = "stable"
"""Release channel used for archive sources when none is given."""


class ArchiveSource(BaseModel):
    """Install Docker from a downloaded binary archive."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Annotated[Literal["archive"], Field(title="Type of source")] = (
        "archive"
    )

    version: Annotated[
        str,
        Field(
            title="Docker version",
            description="Version of the static binary archive to download",
            examples=["v27.2.0", "latest"],
        ),
    ] = DEFAULT_VERSION

    channel: Annotated[
        str,
        Field(
            title="Release channel",
            description="Release track the version is taken from",
            examples=["stable", "test"],
        ),
    ] = DEFAULT_ARCHIVE_CHANNEL


class ImageSource(BaseModel):
    """Extract the Docker engine from a published container image."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Annotated[Literal["image"], Field(title="Type of source")] = "image"

    tag: Annotated[
        str,
        Field(
            title="Image tag",
            description="Tag of the engine image to extract",
            examples=["master", "27.2.1"],
        ),
    ] = DEFAULT_VERSION


SourceSpec = Annotated[
    ArchiveSource | ImageSource, Field(discriminator="type")
]
"""Resolved installation source, exactly one variant."""
