"""Concourse resource scripts: check, in and out."""

import json
import sys
from typing import NoReturn, TextIO, TypeVar

import click
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .environment import BuildEnvironment
from .exceptions import (
    CommitResolutionError,
    ExhaustedRetriesError,
    InvalidRequestError,
    OutputError,
)
from .logging_config import get_logger, setup_logger
from .models import CheckRequest, PublishRequest
from .publisher import StatusPublisher, emit
from .stash import StashConfig, StashFetcher

logger = get_logger("stash-build-status.cli")

RequestT = TypeVar("RequestT", bound=BaseModel)


def read_request(model: type[RequestT], stream: TextIO) -> RequestT:
    """Parse the JSON request Concourse writes to the script's stdin.

    Raises:
        InvalidRequestError: If the input is not JSON or does not match the model
    """
    try:
        return model.model_validate(json.loads(stream.read()))
    except json.JSONDecodeError as e:
        raise InvalidRequestError(f"Request is not valid JSON: {e}") from e
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid request: {e}") from e


def fatal(message: str) -> NoReturn:
    logger.error(message)
    sys.exit(1)


@click.group()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
def cli(verbose: int, env_file: str | None) -> None:
    """Report Concourse build results to Stash (Bitbucket Server)."""
    if env_file:
        load_dotenv(env_file, override=False)

    setup_logger(level="DEBUG" if verbose else None)


@cli.command("check")
def check() -> None:
    """Emit no versions; this resource is only used to put statuses."""
    try:
        read_request(CheckRequest, sys.stdin)
    except InvalidRequestError as e:
        fatal(str(e))
    click.echo("[]")


@cli.command("in")
@click.argument("destination", type=click.Path(file_okay=False))
def in_(destination: str) -> None:
    """Echo the requested version back without fetching anything."""
    try:
        request = read_request(CheckRequest, sys.stdin)
    except InvalidRequestError as e:
        fatal(str(e))

    logger.debug(f"Nothing to fetch into {destination}")
    version = request.version.model_dump() if request.version else {"ref": ""}
    click.echo(json.dumps({"version": version, "metadata": []}))


@cli.command("out")
@click.argument("source_dir", type=click.Path(file_okay=False))
def out(source_dir: str) -> None:
    """Set the build status of the commit checked out under SOURCE_DIR."""
    try:
        request = read_request(PublishRequest, sys.stdin)
        config = StashConfig.from_source(request.source)
    except (InvalidRequestError, ValueError) as e:
        fatal(str(e))

    environment = BuildEnvironment.from_env()

    with StashFetcher(config) as fetcher:
        publisher = StatusPublisher(fetcher, environment)
        try:
            result = publisher.publish(request, source_dir)
        except CommitResolutionError as e:
            fatal(f"Failed to resolve the current commit: {e}")
        except ExhaustedRetriesError as e:
            fatal(str(e))

    try:
        emit(result, sys.stdout)
    except OutputError as e:
        raise click.ClickException(str(e)) from e


def main() -> None:
    """Entry point for the stash-build-status console script."""
    cli()
