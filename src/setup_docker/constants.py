"""Constants for setup-docker-action.  Overrideable for testing."""

__all__ = [
    "DEFAULT_CONTEXT_NAME",
    "DEFAULT_REGCTL_VERSION",
    "DEFAULT_UNDOCK_VERSION",
    "ENV_PREFIX",
    "FORBIDDEN_CONTEXT_NAME",
    "MAX_TCP_PORT",
    "ROOT_LOGGER",
    "RUNTIME_BASEDIR_NAME",
    "STATE_IS_POST",
    "STATE_RUN_DIR",
    "TOOLKIT_ENTRY_POINT_GROUP",
]

ENV_PREFIX = "SETUP_DOCKER_"
"""Prefix for environment variables governing action behavior."""

ROOT_LOGGER = "setup_docker"
"""Root logger name."""

RUNTIME_BASEDIR_NAME = "setup-docker-action"
"""Name of the runtime base directory, created under the user's home."""

DEFAULT_CONTEXT_NAME = "setup-docker-action"
"""Docker context created when the ``context`` input is empty."""

FORBIDDEN_CONTEXT_NAME = "default"
"""The built-in Docker context, which may not be replaced."""

DEFAULT_REGCTL_VERSION = "v0.8.3"
"""Version of regctl installed for image sources."""

DEFAULT_UNDOCK_VERSION = "v0.10.0"
"""Version of undock installed for image sources."""

STATE_IS_POST = "isPost"
"""Saved-state key marking that the main phase has started."""

STATE_RUN_DIR = "runDir"
"""Saved-state key carrying the run directory to the post phase."""

TOOLKIT_ENTRY_POINT_GROUP = "setup_docker.toolkits"
"""Entry point group under which toolkit implementations register."""

MAX_TCP_PORT = 65535
"""Highest port number accepted for the ``tcp-port`` input."""
