"""Command line interface for the docbox client."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import typer

from docbox_client import __version__
from docbox_client.cancellation import CancelToken
from docbox_client.client import DocboxClient
from docbox_client.config import (
    ConfigurationError,
    Settings,
    UploadStrategy,
    load_settings,
)
from docbox_client.exceptions import DocboxError
from docbox_client.observability import LogLevel, configure_logging, set_operation_id


if TYPE_CHECKING:
    from collections.abc import Coroutine

    from pydantic import BaseModel

    from docbox_client.upload import UploadProgress


app = typer.Typer(
    name="docbox",
    help="Command line client for docbox document storage.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:  # noqa: FBT001
    """Print version and exit."""
    if value:
        typer.echo(f"docbox-client version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--verbose",
        "-V",
        help="Enable verbose (debug) logging.",
    ),
    quiet: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--quiet",
        "-q",
        help="Only show warnings and errors.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file.",
    ),
) -> None:
    """Talk to a docbox server."""
    del version  # Handled by callback

    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive.", err=True)
        raise typer.Exit(1)

    try:
        settings = load_settings(config_file)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    logging_config = settings.observability.logging
    if verbose:
        level = LogLevel.DEBUG
    elif quiet:
        level = LogLevel.WARNING
    else:
        level = LogLevel(logging_config.level.lower())

    configure_logging(level=level, force_colors=logging_config.force_colors)
    ctx.obj = settings


def _run[T](coro: Coroutine[Any, Any, T]) -> T:
    """Run a command coroutine, turning client errors into exit code 1."""
    set_operation_id()
    try:
        return asyncio.run(coro)
    except DocboxError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _echo_model(model: BaseModel) -> None:
    typer.echo(model.model_dump_json(indent=2))


def _cancel_token(timeout: float | None) -> CancelToken:
    """Token that fires after ``timeout`` seconds (never when None)."""
    token = CancelToken()
    if timeout is not None:
        asyncio.get_running_loop().call_later(timeout, token.cancel, "timeout")
    return token


def _print_progress(progress: UploadProgress) -> None:
    if progress.progress is None:
        typer.echo(progress.phase, err=True)
    else:
        typer.echo(f"{progress.phase} {progress.progress:.0%}", err=True)


@app.command()
def box(
    ctx: typer.Context,
    scope: str = typer.Argument(..., help="Document box scope."),
    create: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--create",
        help="Create the document box when it does not exist.",
    ),
) -> None:
    """Show a document box."""
    settings: Settings = ctx.obj

    async def run() -> BaseModel:
        async with DocboxClient.from_settings(settings) as client:
            return await client.document_box.get(scope, create_if_missing=create)

    _echo_model(_run(run()))


@app.command()
def upload(
    ctx: typer.Context,
    scope: str = typer.Argument(..., help="Document box scope."),
    folder_id: str = typer.Argument(..., help="Destination folder ID."),
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="File to upload.",
    ),
    tracked: bool | None = typer.Option(  # noqa: FBT001
        None,
        "--tracked/--presigned",
        help="Upload through the API instead of a presigned storage target.",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.0,
        help="Abort the upload after this many seconds.",
    ),
) -> None:
    """Upload a file and wait until it is processed."""
    settings: Settings = ctx.obj
    if tracked is None:
        tracked = settings.upload.strategy == UploadStrategy.TRACKED
    interval = settings.polling.interval_seconds

    async def run() -> BaseModel:
        cancel = _cancel_token(timeout)
        async with DocboxClient.from_settings(settings) as client:
            if tracked:
                return await client.file.upload_tracked(
                    scope,
                    folder_id,
                    path,
                    interval=interval,
                    cancel=cancel,
                )
            return await client.file.upload_presigned(
                scope,
                folder_id,
                path,
                on_progress=_print_progress,
                interval=interval,
                cancel=cancel,
            )

    _echo_model(_run(run()))


@app.command()
def task(
    ctx: typer.Context,
    scope: str = typer.Argument(..., help="Document box scope."),
    task_id: str = typer.Argument(..., help="Task ID."),
    wait: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "--wait",
        "-w",
        help="Poll until the task finishes and print its output.",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        min=0.0,
        help="Stop waiting after this many seconds.",
    ),
) -> None:
    """Show a task, or wait for its output."""
    settings: Settings = ctx.obj

    async def run() -> Any:  # noqa: ANN401
        cancel = _cancel_token(timeout)
        async with DocboxClient.from_settings(settings) as client:
            if wait:
                return await client.task.finished(
                    scope,
                    task_id,
                    interval=settings.polling.interval_seconds,
                    cancel=cancel,
                )
            return await client.task.get(scope, task_id, cancel=cancel)

    result = _run(run())
    if wait:
        typer.echo(json.dumps(result, indent=2))
    else:
        _echo_model(result)


__all__ = ["app"]
