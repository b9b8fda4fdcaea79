"""Thin wrapper around the Docker command-line client."""

import asyncio

from structlog.stdlib import BoundLogger

from ..exceptions import DockerCommandError

__all__ = ["DockerCli"]


class DockerCli:
    """Run the ``docker`` binary found on the search path.

    Output of the commands is not captured, so it lands in the step log.

    Parameters
    ----------
    logger
        Logger for messages.
    executable
        Name or path of the Docker client.
    """

    def __init__(
        self, logger: BoundLogger, executable: str = "docker"
    ) -> None:
        self._logger = logger
        self._executable = executable

    async def print_version(self) -> None:
        """Print client and server versions to the log."""
        await self._run("version")

    async def print_info(self) -> None:
        """Print system-wide information to the log."""
        await self._run("info")

    async def _run(self, *args: str) -> None:
        command = [self._executable, *args]
        self._logger.debug("Running Docker client", command=command)
        process = await asyncio.create_subprocess_exec(*command)
        returncode = await process.wait()
        if returncode != 0:
            raise DockerCommandError(command, returncode)
