"""Tests for the workflow-command runtime."""

import os
from io import StringIO
from pathlib import Path

import pytest

from setup_docker.exceptions import WorkflowCommandError
from setup_docker.models.inputs import RawInputs
from setup_docker.storage.workflow import WorkflowRuntime

from .support.workflow import read_file_commands, set_input


def test_get_input(
    runtime: WorkflowRuntime, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert runtime.get_input("version") == ""
    set_input(monkeypatch, "version", "  v27.2.0\n")
    assert os.environ["INPUT_VERSION"] == "  v27.2.0\n"
    assert runtime.get_input("version") == "v27.2.0"
    assert runtime.get_input("version", trim=False) == "  v27.2.0\n"

    set_input(monkeypatch, "daemon-config", '{"debug": true}')
    assert os.environ["INPUT_DAEMON-CONFIG"] == '{"debug": true}'
    assert runtime.get_input("daemon-config") == '{"debug": true}'


def test_get_raw_inputs(
    runtime: WorkflowRuntime, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert runtime.get_raw_inputs() == RawInputs()

    daemon_config = '\n{\n  "debug": true\n}\n'
    set_input(monkeypatch, "version", " type=image,tag=master ")
    set_input(monkeypatch, "daemon-config", daemon_config)
    set_input(monkeypatch, "context", "foo")
    set_input(monkeypatch, "set-host", "true ")
    set_input(monkeypatch, "tcp-port", "2378")
    set_input(monkeypatch, "github-token", "ghp_sometoken")
    raw = runtime.get_raw_inputs()
    assert raw.version == "type=image,tag=master"
    assert raw.daemon_config == daemon_config
    assert raw.context == "foo"
    assert raw.set_host == "true"
    assert raw.rootless == ""
    assert raw.tcp_port == "2378"
    assert raw.github_token.get_secret_value() == "ghp_sometoken"


def test_file_commands(runtime: WorkflowRuntime, runner_env: Path) -> None:
    runtime.set_output("sock", "unix:///tmp/docker.sock")
    runtime.set_output("tcp", "tcp://127.0.0.1:2378")
    runtime.save_state("runDir", "/home/runner/setup-docker-action-1234")
    runtime.export_variable("DOCKER_HOST", "unix:///tmp/docker.sock")

    assert read_file_commands(runner_env / "github_output") == {
        "sock": "unix:///tmp/docker.sock",
        "tcp": "tcp://127.0.0.1:2378",
    }
    assert read_file_commands(runner_env / "github_state") == {
        "runDir": "/home/runner/setup-docker-action-1234"
    }
    assert read_file_commands(runner_env / "github_env") == {
        "DOCKER_HOST": "unix:///tmp/docker.sock"
    }
    assert os.environ["DOCKER_HOST"] == "unix:///tmp/docker.sock"


def test_multiline_value(runtime: WorkflowRuntime, runner_env: Path) -> None:
    runtime.set_output("config", "line one\nline two")
    outputs = read_file_commands(runner_env / "github_output")
    assert outputs == {"config": "line one\nline two"}


def test_delimiter_in_value(
    runtime: WorkflowRuntime, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        "setup_docker.storage.workflow.uuid.uuid4", lambda: "fixed"
    )
    with pytest.raises(WorkflowCommandError):
        runtime.set_output("sock", "ghadelimiter_fixed")


def test_stdout_commands(command_stream: StringIO) -> None:
    environ: dict[str, str] = {}
    runtime = WorkflowRuntime(environ, command_stream)
    runtime.set_output("tcp", "tcp://127.0.0.1:2378")
    runtime.save_state("runDir", "/tmp/run")
    runtime.export_variable("DOCKER_HOST", "unix:///tmp/docker.sock")
    runtime.error("Something\nfailed: 100%")

    assert command_stream.getvalue().splitlines() == [
        "::set-output name=tcp::tcp://127.0.0.1:2378",
        "::save-state name=runDir::/tmp/run",
        "::set-env name=DOCKER_HOST::unix:///tmp/docker.sock",
        "::error::Something%0Afailed: 100%25",
    ]
    assert environ == {"DOCKER_HOST": "unix:///tmp/docker.sock"}


def test_group(command_stream: StringIO) -> None:
    runtime = WorkflowRuntime({}, command_stream)
    with pytest.raises(ValueError, match="boom"):  # noqa: PT012
        with runtime.group("Download docker"):
            command_stream.write("downloading\n")
            raise ValueError("boom")

    assert command_stream.getvalue().splitlines() == [
        "::group::Download docker",
        "downloading",
        "::endgroup::",
    ]


def test_state() -> None:
    runtime = WorkflowRuntime({}, StringIO())
    assert runtime.get_state("runDir") == ""
    assert not runtime.is_post

    runtime = WorkflowRuntime(
        {"STATE_isPost": "true", "STATE_runDir": "/tmp/run"}, StringIO()
    )
    assert runtime.get_state("runDir") == "/tmp/run"
    assert runtime.is_post
