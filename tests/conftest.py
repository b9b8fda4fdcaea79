"""Pytest configuration and fixtures."""

import os
from io import StringIO
from pathlib import Path

import pytest
from structlog.stdlib import BoundLogger, get_logger

from setup_docker.config import Config
from setup_docker.constants import ROOT_LOGGER
from setup_docker.services.action import SetupDockerAction
from setup_docker.storage.workflow import WorkflowRuntime

from .support.toolkit import MockDockerCli, MockToolkit

_CLEARED_PREFIXES = ("INPUT_", "STATE_", "SETUP_DOCKER_")
_CLEARED_VARIABLES = (
    "DOCKER_HOST",
    "REGCTL_VERSION",
    "RUNNER_DEBUG",
    "UNDOCK_VERSION",
)


@pytest.fixture
def runner_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Simulate the environment of a workflow step.

    Returns the directory holding the workflow command files.
    """
    for key in list(os.environ):
        if key.startswith(_CLEARED_PREFIXES) or key in _CLEARED_VARIABLES:
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in ("GITHUB_OUTPUT", "GITHUB_ENV", "GITHUB_STATE"):
        path = tmp_path / name.lower()
        path.touch()
        monkeypatch.setenv(name, str(path))
    return tmp_path


@pytest.fixture
def logger() -> BoundLogger:
    return get_logger(ROOT_LOGGER)


@pytest.fixture
def command_stream() -> StringIO:
    return StringIO()


@pytest.fixture
def runtime(runner_env: Path, command_stream: StringIO) -> WorkflowRuntime:
    return WorkflowRuntime(stream=command_stream)


@pytest.fixture
def toolkit(logger: BoundLogger) -> MockToolkit:
    return MockToolkit(logger)


@pytest.fixture
def docker(logger: BoundLogger) -> MockDockerCli:
    return MockDockerCli(logger)


@pytest.fixture
def action(
    runtime: WorkflowRuntime,
    toolkit: MockToolkit,
    docker: MockDockerCli,
    logger: BoundLogger,
) -> SetupDockerAction:
    return SetupDockerAction(
        config=Config(),
        toolkit=toolkit,
        runtime=runtime,
        docker=docker,
        logger=logger,
    )
