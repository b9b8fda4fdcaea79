"""Interface to the external toolkit that installs Docker.

Downloading Docker, extracting it from an image, writing the daemon
configuration, and managing the daemon process are all done by a toolkit
provided by a separate distribution.  That distribution registers a
`Toolkit` subclass as an entry point in the ``setup_docker.toolkits`` group.
"""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from importlib.metadata import entry_points
from pathlib import Path

from structlog.stdlib import BoundLogger

from ..constants import TOOLKIT_ENTRY_POINT_GROUP
from ..exceptions import ToolkitNotFoundError
from ..models.source import SourceSpec

__all__ = ["InstallOptions", "Installer", "Toolkit", "load_toolkit"]


@dataclass(frozen=True)
class InstallOptions:
    """Parameters for an installer.

    Only ``run_dir`` is needed to tear down an earlier installation.
    """

    run_dir: Path
    """Directory holding the installed binaries, daemon data and socket."""

    source: SourceSpec | None = None
    """Where to install Docker from."""

    rootless: bool = False
    """Whether to run the daemon in rootless mode."""

    context_name: str | None = None
    """Name of the Docker context pointing at the daemon."""

    daemon_config: str | None = None
    """JSON daemon configuration, passed through unparsed."""

    local_tcp_port: int | None = None
    """Local TCP port on which to expose the daemon, if any."""


class Installer(metaclass=ABCMeta):
    """Installs, starts, and removes one Docker engine."""

    @abstractmethod
    async def download(self) -> Path | None:
        """Download Docker.

        Returns
        -------
        pathlib.Path or None
            Directory holding the downloaded tools, or `None` if nothing was
            downloaded.
        """

    @abstractmethod
    async def install(self) -> str:
        """Install and start the daemon.

        Returns
        -------
        str
            Address of the daemon socket, suitable for ``DOCKER_HOST``.
        """

    @abstractmethod
    async def tear_down(self) -> None:
        """Stop the daemon and remove everything the installer created."""


class Toolkit(metaclass=ABCMeta):
    """Entry point into the external toolkit."""

    def __init__(self, logger: BoundLogger) -> None:
        self._logger = logger

    @abstractmethod
    async def install_regctl(self, version: str) -> None:
        """Download and install regctl, needed for image sources."""

    @abstractmethod
    async def install_undock(self, version: str) -> None:
        """Download and install undock, needed for image sources."""

    @abstractmethod
    def installer(self, options: InstallOptions) -> Installer:
        """Create an installer with the given options."""


def load_toolkit(name: str, logger: BoundLogger) -> Toolkit:
    """Load a toolkit registered under the given entry point name.

    Parameters
    ----------
    name
        Name of the entry point in the ``setup_docker.toolkits`` group.
    logger
        Logger passed to the toolkit.

    Returns
    -------
    Toolkit
        Newly constructed toolkit.

    Raises
    ------
    ToolkitNotFoundError
        Raised if no entry point with that name is installed.
    """
    matches = entry_points(group=TOOLKIT_ENTRY_POINT_GROUP, name=name)
    if not matches:
        raise ToolkitNotFoundError(
            f"No toolkit named {name} in entry point group"
            f" {TOOLKIT_ENTRY_POINT_GROUP}"
        )
    toolkit_class = next(iter(matches)).load()
    logger.debug("Loaded toolkit", toolkit=name, cls=toolkit_class.__name__)
    return toolkit_class(logger)
