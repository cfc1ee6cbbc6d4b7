"""Console output helpers shared by CLI commands."""

import yaml
from rich.console import Console
from rich.syntax import Syntax

console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_manifest(manifest: dict) -> None:
    """Print a manifest as highlighted YAML."""
    text = yaml.safe_dump(manifest, sort_keys=False)
    console.print(Syntax(text, "yaml", background_color="default"))
