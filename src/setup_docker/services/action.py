"""Sequencing of the main and post phases of the action."""

import uuid
from pathlib import Path

from structlog.stdlib import BoundLogger

from ..config import Config
from ..constants import (
    DEFAULT_CONTEXT_NAME,
    FORBIDDEN_CONTEXT_NAME,
    STATE_IS_POST,
    STATE_RUN_DIR,
)
from ..exceptions import InvalidContextError
from ..models.inputs import Inputs
from ..models.source import ImageSource
from ..storage.docker import DockerCli
from ..storage.workflow import WorkflowRuntime
from .toolkit import InstallOptions, Toolkit

__all__ = ["SetupDockerAction"]


class SetupDockerAction:
    """Install Docker on the runner, and remove it when the job ends.

    The main phase runs as the step itself and the post phase runs after the
    job's other steps.  They are separate processes; the only thing carried
    between them is the run directory, saved as step state.

    Parameters
    ----------
    config
        Action configuration.
    toolkit
        External toolkit that does the installation.
    runtime
        Workflow runtime for outputs, state, and log groups.
    docker
        Docker command-line client.
    logger
        Logger for messages.
    """

    def __init__(
        self,
        *,
        config: Config,
        toolkit: Toolkit,
        runtime: WorkflowRuntime,
        docker: DockerCli,
        logger: BoundLogger,
    ) -> None:
        self._config = config
        self._toolkit = toolkit
        self._runtime = runtime
        self._docker = docker
        self._logger = logger

    async def main(self, inputs: Inputs) -> None:
        """Install Docker and start the daemon.

        Parameters
        ----------
        inputs
            Resolved action inputs.

        Raises
        ------
        InvalidContextError
            Raised if the ``default`` context was requested.
        """
        self._runtime.save_state(STATE_IS_POST, "true")
        if inputs.context == FORBIDDEN_CONTEXT_NAME:
            raise InvalidContextError(
                f"'{FORBIDDEN_CONTEXT_NAME}' context cannot be used."
            )
        run_dir = self.make_run_dir(inputs.runtime_basedir)
        self._logger.info(
            "Setting up Docker",
            source=inputs.source.model_dump(),
            run_dir=str(run_dir),
        )

        if isinstance(inputs.source, ImageSource):
            with self._runtime.group("Download and install regctl"):
                await self._toolkit.install_regctl(self._config.regctl_version)
            with self._runtime.group("Download and install undock"):
                await self._toolkit.install_undock(self._config.undock_version)

        tcp_address = None
        if inputs.tcp_port:
            tcp_address = f"tcp://127.0.0.1:{inputs.tcp_port}"

        installer = self._toolkit.installer(
            InstallOptions(
                run_dir=run_dir,
                source=inputs.source,
                rootless=inputs.rootless,
                context_name=inputs.context or DEFAULT_CONTEXT_NAME,
                daemon_config=inputs.daemon_config,
                local_tcp_port=inputs.tcp_port,
            )
        )

        # A resolved source is always present, so Docker is downloaded even
        # when the runner already has a client.
        with self._runtime.group("Download docker"):
            tool_dir = await installer.download()

        if tool_dir:
            self._runtime.save_state(STATE_RUN_DIR, str(run_dir))
            sock_path = await installer.install()
            with self._runtime.group("Setting outputs"):
                self._logger.info(f"sock={sock_path}")
                self._runtime.set_output("sock", sock_path)
                if tcp_address:
                    self._logger.info(f"tcp={tcp_address}")
                    self._runtime.set_output("tcp", tcp_address)
            if inputs.set_host:
                with self._runtime.group("Setting Docker host"):
                    self._runtime.export_variable("DOCKER_HOST", sock_path)
                    self._logger.info(f"DOCKER_HOST={sock_path}")
        else:
            self._logger.warning("Nothing downloaded, skipping installation")

        with self._runtime.group("Docker info"):
            await self._docker.print_version()
            await self._docker.print_info()

    async def post(self) -> None:
        """Tear down the Docker installation made by the main phase.

        Does nothing if the main phase never got far enough to create a run
        directory.
        """
        run_dir = self._runtime.get_state(STATE_RUN_DIR)
        if not run_dir:
            self._logger.debug("No run directory saved, nothing to tear down")
            return
        self._logger.info("Tearing down Docker", run_dir=run_dir)
        options = InstallOptions(run_dir=Path(run_dir))
        installer = self._toolkit.installer(options)
        await installer.tear_down()

    @staticmethod
    def make_run_dir(basedir: Path) -> Path:
        """Choose a unique run directory next to the runtime base directory."""
        suffix = uuid.uuid4().hex[:8]
        return basedir.with_name(f"{basedir.name}-{suffix}")
