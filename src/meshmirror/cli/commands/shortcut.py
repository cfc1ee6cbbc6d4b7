"""Shortcut inspection commands."""

from typing import Annotated

import typer
from rich.table import Table

from meshmirror.cli.manifests import load_manifests
from meshmirror.cli.output import console, print_error
from meshmirror.directory.connections import cidrs_for_cluster
from meshmirror.exceptions import MeshMirrorError
from meshmirror.models.connections import CidrPair, ConnectionRecord
from meshmirror.reflection.shortcut import resolve_shortcut

app = typer.Typer(help="Shortcut inspection commands")


def parse_pair(value: str) -> CidrPair:
    """Parse ``OBSERVED=SHORTCUT`` into a CidrPair."""
    observed, sep, shortcut = value.partition("=")
    if not sep or not observed or not shortcut:
        raise typer.BadParameter(f"Expected OBSERVED=SHORTCUT, got {value!r}")
    return CidrPair(observed_cidr=observed.strip(), shortcut_cidr=shortcut.strip())


@app.command("resolve")
def resolve(
    address: Annotated[str, typer.Argument(help="IPv4 address to resolve")],
    pairs: Annotated[
        list[str],
        typer.Option("--pair", "-p", help="Shortcut as OBSERVED_CIDR=SHORTCUT_CIDR"),
    ],
):
    """Show the shortcut remap of an address."""
    cidr_pairs = [parse_pair(p) for p in pairs]
    try:
        remapped = resolve_shortcut(address, cidr_pairs)
    except MeshMirrorError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if remapped is None:
        console.print(f"[yellow]{address}: no shortcut applies[/yellow]")
        return
    console.print(f"{address} -> [bold green]{remapped}[/bold green]")


@app.command("cidrs")
def list_cidrs(
    connections: Annotated[
        str, typer.Argument(help="ForeignClusterConnection manifest file")
    ],
    cluster: Annotated[str, typer.Option("--cluster", "-c", help="Destination cluster")],
):
    """List the shortcut CIDRs applying to a destination cluster."""
    try:
        records = [ConnectionRecord.from_custom_object(o) for o in load_manifests(connections)]
        pairs = cidrs_for_cluster(records, cluster)
    except MeshMirrorError as e:
        print_error(str(e))
        raise typer.Exit(1)

    table = Table(title=f"Shortcuts towards {cluster}", show_header=True)
    table.add_column("Observed CIDR", style="cyan")
    table.add_column("Shortcut CIDR", style="green")
    for pair in pairs:
        table.add_row(pair.observed_cidr, pair.shortcut_cidr)
    console.print(table)
