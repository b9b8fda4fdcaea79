"""Resolve raw action inputs into a validated configuration.

The ``version`` input is overloaded. It may be a bare version string, which
is the legacy shorthand for an archive install, or a comma-separated list of
``key=value`` pairs naming the source type and its parameters. Resolution is
split into a classifier, a tokenizer for the structured form, and a table of
builders keyed by source type.
"""

import string
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from ..constants import MAX_TCP_PORT, RUNTIME_BASEDIR_NAME
from ..exceptions import InputValidationError
from ..models.inputs import Inputs, RawInputs
from ..models.source import (
    DEFAULT_ARCHIVE_CHANNEL,
    DEFAULT_VERSION,
    ArchiveSource,
    ImageSource,
    SourceSpec,
)

__all__ = [
    "SourceForm",
    "classify_source",
    "parse_boolean",
    "parse_source",
    "parse_tcp_port",
    "resolve",
    "runtime_basedir",
    "tokenize_source",
]

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


class SourceForm(StrEnum):
    """Syntactic form of the ``version`` input."""

    BARE = "bare"
    STRUCTURED = "structured"


def classify_source(value: str) -> SourceForm:
    """Determine which form a ``version`` input uses.

    Parameters
    ----------
    value
        Raw ``version`` input.

    Returns
    -------
    SourceForm
        ``BARE`` if the value contains neither ``=`` nor ``,``, otherwise
        ``STRUCTURED``.
    """
    if "=" in value or "," in value:
        return SourceForm.STRUCTURED
    return SourceForm.BARE


def tokenize_source(value: str) -> dict[str, str]:
    """Split a structured ``version`` input into keys and values.

    Segments are separated by commas and split on their first ``=``.  Later
    occurrences of a key replace earlier ones.  Segments without ``=`` and
    keys with empty values are dropped.

    Parameters
    ----------
    value
        Raw ``version`` input in structured form.

    Returns
    -------
    dict of str to str
        Mapping of key to value.
    """
    pairs: dict[str, str] = {}
    for segment in value.split(","):
        key, sep, val = segment.partition("=")
        key = key.strip()
        val = val.strip()
        if not sep or not key or not val:
            continue
        pairs[key] = val
    return pairs


def _build_archive(pairs: dict[str, str], legacy_channel: str) -> SourceSpec:
    return ArchiveSource(
        version=pairs.get("version") or DEFAULT_VERSION,
        channel=(
            pairs.get("channel") or legacy_channel or DEFAULT_ARCHIVE_CHANNEL
        ),
    )


def _build_image(pairs: dict[str, str], _legacy_channel: str) -> SourceSpec:
    return ImageSource(tag=pairs.get("tag") or DEFAULT_VERSION)


_SOURCE_BUILDERS: dict[str, Callable[[dict[str, str], str], SourceSpec]] = {
    "archive": _build_archive,
    "image": _build_image,
}
"""Source builders keyed by the ``type`` key.

A missing or unknown type falls back to the archive builder.
"""


def parse_source(version: str, channel: str = "") -> SourceSpec:
    """Parse the ``version`` input into a source specification.

    The workflow runtime trims surrounding whitespace from both inputs, so
    they are used here as given.

    Parameters
    ----------
    version
        Raw ``version`` input.
    channel
        Raw legacy ``channel`` input, consulted only for archive sources
        that do not name their own channel.

    Returns
    -------
    SourceSpec
        Fully resolved source, with defaults filled in.
    """
    if classify_source(version) == SourceForm.BARE:
        pairs = {"version": version} if version else {}
        return _build_archive(pairs, channel)
    pairs = tokenize_source(version)
    builder = _SOURCE_BUILDERS.get(pairs.get("type", ""), _build_archive)
    return builder(pairs, channel)


def parse_boolean(name: str, value: str) -> bool:
    """Parse a boolean input.

    Follows the YAML 1.2 core schema accepted by the Actions toolkit.  An
    empty value is false.

    Raises
    ------
    InputValidationError
        Raised if the value is not a recognized boolean.
    """
    value = value.strip()
    if not value or value in _FALSE_VALUES:
        return False
    if value in _TRUE_VALUES:
        return True
    raise InputValidationError(
        name, value, "must be one of true, True, TRUE, false, False, FALSE"
    )


def parse_tcp_port(value: str) -> int | None:
    """Parse the ``tcp-port`` input.

    Raises
    ------
    InputValidationError
        Raised if the value is present but not a port number.
    """
    value = value.strip()
    if not value:
        return None
    if not all(c in string.digits for c in value):
        raise InputValidationError("tcp-port", value, "must be an integer")
    port = int(value)
    if not 0 < port <= MAX_TCP_PORT:
        raise InputValidationError(
            "tcp-port", value, f"must be between 1 and {MAX_TCP_PORT}"
        )
    return port


def runtime_basedir(home: Path | None = None) -> Path:
    """Return the runtime base directory under the given home directory."""
    return (home or Path.home()) / RUNTIME_BASEDIR_NAME


def resolve(raw: RawInputs, home: Path | None = None) -> Inputs:
    """Resolve raw action inputs into the action configuration.

    Parameters
    ----------
    raw
        Inputs as supplied by the runner.
    home
        Home directory of the current user.  Defaults to the home directory
        of the running process.

    Returns
    -------
    Inputs
        Resolved configuration.

    Raises
    ------
    InputValidationError
        Raised if a boolean input or ``tcp-port`` is malformed.
    """
    return Inputs(
        source=parse_source(raw.version, raw.channel),
        context=raw.context,
        daemon_config=raw.daemon_config,
        rootless=parse_boolean("rootless", raw.rootless),
        set_host=parse_boolean("set-host", raw.set_host),
        tcp_port=parse_tcp_port(raw.tcp_port),
        runtime_basedir=runtime_basedir(home),
        github_token=raw.github_token,
    )
