"""GitHub Action to set up a Docker engine on the runner host."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]


__version__: str
"""The application version string (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("setup-docker-action")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
