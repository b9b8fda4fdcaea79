"""Mock out the external toolkit and the Docker client for tests."""

from pathlib import Path

from structlog.stdlib import BoundLogger

from setup_docker.services.toolkit import InstallOptions, Installer, Toolkit
from setup_docker.storage.docker import DockerCli

__all__ = ["MockDockerCli", "MockInstaller", "MockToolkit"]


class MockInstaller(Installer):
    """Mock installer that records calls on its toolkit.

    Parameters
    ----------
    toolkit
        Toolkit that created this installer.
    options
        Options the installer was created with.
    """

    def __init__(
        self, toolkit: "MockToolkit", options: InstallOptions
    ) -> None:
        self.options = options
        self._toolkit = toolkit

    async def download(self) -> Path | None:
        self._toolkit.calls.append("download")
        return self._toolkit.tool_dir

    async def install(self) -> str:
        self._toolkit.calls.append("install")
        return self._toolkit.sock_path

    async def tear_down(self) -> None:
        self._toolkit.calls.append("tear_down")


class MockToolkit(Toolkit):
    """Mock toolkit that records every call made to it.

    Attributes
    ----------
    calls
        Names of the calls made, in order, including calls to installers.
    installers
        Every installer created, in order.
    tool_dir
        Directory returned by ``download``. Set to `None` to simulate a
        download that produced nothing.
    sock_path
        Socket address returned by ``install``.
    """

    def __init__(self, logger: BoundLogger) -> None:
        super().__init__(logger)
        self.calls: list[str] = []
        self.installers: list[MockInstaller] = []
        self.tool_dir: Path | None = Path("/opt/docker/bin")
        self.sock_path = "unix:///home/runner/setup-docker-action/docker.sock"

    async def install_regctl(self, version: str) -> None:
        self.calls.append(f"install_regctl {version}")

    async def install_undock(self, version: str) -> None:
        self.calls.append(f"install_undock {version}")

    def installer(self, options: InstallOptions) -> MockInstaller:
        installer = MockInstaller(self, options)
        self.installers.append(installer)
        return installer


class MockDockerCli(DockerCli):
    """Docker client that runs nothing.

    Attributes
    ----------
    calls
        Docker subcommands that would have been run, in order.
    """

    def __init__(self, logger: BoundLogger) -> None:
        super().__init__(logger)
        self.calls: list[str] = []

    async def print_version(self) -> None:
        self.calls.append("version")

    async def print_info(self) -> None:
        self.calls.append("info")
