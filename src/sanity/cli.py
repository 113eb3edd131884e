"""Command line interface."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from sanity.application import SanityApplication
from sanity.errors import SanityError

app = typer.Typer(
    name="sanity",
    help="Static site build orchestrator.",
    no_args_is_help=False,
)


def _app(ctx: typer.Context) -> SanityApplication:
    application: SanityApplication = ctx.obj
    try:
        application.initialize()
    except SanityError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2) from e
    return application


def _build(application: SanityApplication) -> None:
    try:
        application.build(application.is_prod(command_is_build=True))
    except SanityError as e:
        raise typer.Exit(1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    force_prod: Annotated[
        bool,
        typer.Option("--force-prod", "-f", help="Build in production mode for every command."),
    ] = False,
    antidote: Annotated[
        bool,
        typer.Option("--antidote", "-a", help="Skip the anti-scraping transform."),
    ] = False,
    profile: Annotated[
        bool,
        typer.Option("--profile-build-times", "-p", help="Log walk and render durations."),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config", "-c", help="Config file (default: ./sanity.yaml).", metavar="FILE"
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Build the site (the default when no command is given)."""
    ctx.obj = SanityApplication(
        config_path=config,
        force_prod=force_prod,
        antidote=antidote,
        profile=profile,
        verbose=verbose,
    )
    if ctx.invoked_subcommand is None:
        _build(_app(ctx))


@app.command()
def build(ctx: typer.Context) -> None:
    """Build the site once, in production mode."""
    _build(_app(ctx))


@app.command()
def clean(ctx: typer.Context) -> None:
    """Delete everything in the output directory."""
    _app(ctx).clean()


@app.command()
def watch(ctx: typer.Context) -> None:
    """Build, then rebuild whenever the source tree changes."""
    application = _app(ctx)
    application.watch(application.is_prod(command_is_build=False))


@app.command()
def server(
    ctx: typer.Context,
    port: Annotated[
        int | None,
        typer.Option("--port", help="Port to listen on (default: 8000)."),
    ] = None,
) -> None:
    """Serve the output directory and rebuild on changes."""
    application = _app(ctx)
    application.serve(application.is_prod(command_is_build=False), port=port)


@app.command()
def stubs(ctx: typer.Context) -> None:
    """Write editor stubs for build script globals."""
    _app(ctx).write_stubs()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
