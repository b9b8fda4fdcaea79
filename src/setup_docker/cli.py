"""Command-line interface for setup-docker-action."""

import functools
import json
from collections.abc import Awaitable, Callable

import click
from safir.asyncio import run_with_asyncio
from safir.click import display_help
from structlog.stdlib import get_logger

from .config import Config
from .constants import ROOT_LOGGER
from .services.action import SetupDockerAction
from .services.resolver import resolve as resolve_inputs
from .services.toolkit import load_toolkit
from .storage.docker import DockerCli
from .storage.workflow import WorkflowRuntime

__all__ = ["main"]


def _phase[**P, R](
    func: Callable[P, Awaitable[R]],
) -> Callable[P, R]:
    """Add common options and error reporting to an action phase."""

    @click.option(
        "--debug",
        "-d",
        is_flag=True,
        help="Enable debug logging",
    )
    @run_with_asyncio
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        logger = get_logger(ROOT_LOGGER)
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            # Annotate the workflow run so the failure shows up in the
            # summary as well as the log.
            WorkflowRuntime().error(str(exc))
            logger.exception("Action failed")
            raise

    return wrapper


def _make_action(*, debug: bool) -> SetupDockerAction:
    """Construct the action from the runner environment."""
    config = Config()
    if debug:
        config.debug = debug
    config.configure_logging()
    logger = get_logger(ROOT_LOGGER)
    return SetupDockerAction(
        config=config,
        toolkit=load_toolkit(config.toolkit, logger),
        runtime=WorkflowRuntime(),
        docker=DockerCli(logger),
        logger=logger,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
def main() -> None:
    """Set up a Docker engine on a GitHub Actions runner."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.argument("subtopic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None, subtopic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic, subtopic)


@main.command()
@_phase
async def run(*, debug: bool) -> None:
    """Run the main or post phase, whichever this step is in."""
    action = _make_action(debug=debug)
    runtime = WorkflowRuntime()
    if runtime.is_post:
        await action.post()
    else:
        await action.main(resolve_inputs(runtime.get_raw_inputs()))


@main.command()
@_phase
async def install(*, debug: bool) -> None:
    """Run the main phase: install Docker and start the daemon."""
    action = _make_action(debug=debug)
    inputs = resolve_inputs(WorkflowRuntime().get_raw_inputs())
    await action.main(inputs)


@main.command()
@_phase
async def teardown(*, debug: bool) -> None:
    """Run the post phase: stop the daemon and clean up."""
    action = _make_action(debug=debug)
    await action.post()


@main.command()
def resolve() -> None:
    """Print the resolved action inputs as JSON."""
    inputs = resolve_inputs(WorkflowRuntime().get_raw_inputs())
    click.echo(json.dumps(inputs.model_dump(mode="json"), indent=2))
