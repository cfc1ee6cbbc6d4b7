"""
meshmirror CLI entry point.

Usage:
    meshmirror [OPTIONS] COMMAND [ARGS]...

Commands:
    shortcut   Shortcut inspection (resolve, cidrs)
    reflect    Offline reflection of EndpointSlice manifests
    reconcile  Reconciliation of ShadowEndpointSlices against IPAM
    identity   Show the destination cluster identity
    version    Show version information
"""

from typing import Annotated

import typer

from meshmirror.cli.commands import reconcile, reflect, shortcut
from meshmirror.cli.output import console, print_error
from meshmirror.config import ReflectorConfig, config
from meshmirror.exceptions import ConfigurationError
from meshmirror.models.enums import LogLevel
from meshmirror.utils.logger import configure_logging

app = typer.Typer(
    name="meshmirror",
    help="EndpointSlice reflection for hub-and-shortcut cluster topologies",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(shortcut.app, name="shortcut", help="Shortcut inspection")
app.add_typer(reflect.app, name="reflect", help="Offline reflection")
app.add_typer(reconcile.app, name="reconcile", help="Reconciliation against IPAM")


@app.callback()
def main(
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", "-l", help="Logging verbosity"),
    ] = None,
):
    """
    meshmirror CLI.

    Configuration is read from MESHMIRROR_* environment variables.
    """
    try:
        loaded = ReflectorConfig.from_env()
    except ValueError as e:
        print_error(f"Invalid MESHMIRROR_* environment value: {e}")
        raise typer.Exit(1)

    for name, value in vars(loaded).items():
        setattr(config, name, value)
    if log_level:
        config.LOG_LEVEL = log_level
    configure_logging(config.LOG_LEVEL, config.LOG_FILE)


@app.command("identity")
def identity(
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Namespace to derive the name from"),
    ] = None,
):
    """Show the destination cluster name derived from the namespace."""
    if namespace is not None:
        config.POD_NAMESPACE = namespace
    try:
        console.print(config.get_cluster_name())
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)


@app.command("version")
def version():
    """Show version information."""
    from meshmirror import __version__

    console.print(f"meshmirror v{__version__}")


def run():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
