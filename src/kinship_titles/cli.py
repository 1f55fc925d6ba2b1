"""CLI interface for Kinship Titles."""

import json

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

app = typer.Typer(
    name="kinship-titles",
    help="Resolve colloquial Chinese kinship titles from relation chains",
    add_completion=False,
)
console = Console()


def get_config():
    """Load configuration from environment."""
    from dotenv import load_dotenv
    import os

    load_dotenv()

    return {
        "log_level": os.getenv("KINSHIP_LOG_LEVEL", "WARNING").upper(),
    }


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Configure logging before any command runs."""
    from .logging import configure_logging

    level = (log_level or get_config()["log_level"]).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        console.print(f"[red]Invalid log level: {level}[/red]")
        raise typer.Exit(1)
    configure_logging(level)


@app.command()
def resolve(
    chain: str = typer.Argument(..., help="Relation chain, e.g. 妻的父"),
    explain: bool = typer.Option(False, "--explain", "-e", help="Show how the title was found"),
):
    """Resolve a relation chain to a kinship title."""
    from .formatting import format_chain
    from .resolver import explain as explain_chain

    resolution = explain_chain(chain)
    if not explain:
        console.print(resolution.title)
        return

    body = (
        f"[bold]Title:[/bold] {resolution.title}\n"
        f"[bold]Source:[/bold] {resolution.source.value}\n"
        f"[bold]Chain:[/bold] {format_chain(chain) or '-'}"
    )
    console.print(Panel(body, title="Kinship Title"))


@app.command()
def graph(
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON"),
):
    """Show the kinship graph."""
    from .graph import get_graph

    kinship_graph = get_graph()
    if as_json:
        snapshot = kinship_graph.snapshot()
        typer.echo(json.dumps(snapshot.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return

    table = Table(title=f"Kinship Graph ({len(kinship_graph)} nodes, {len(kinship_graph.edges)} edges)")
    table.add_column("Title")
    table.add_column("Gender")
    table.add_column("Generation", justify="right")
    table.add_column("Relations")

    for node in kinship_graph.nodes:
        hops = " ".join(f"{e.relation.value}→{e.target}" for e in kinship_graph.edges_from(node.title))
        table.add_row(node.title, node.gender.value, f"{node.generation:+d}", hops)

    console.print(table)


@app.command()
def layout(
    width: float = typer.Option(800.0, "--width", "-w", help="Canvas width"),
    height: float = typer.Option(600.0, "--height", "-h", help="Canvas height"),
    seed: int = typer.Option(None, "--seed", help="Seed for initial placement"),
):
    """Compute a force-directed layout of the graph as JSON."""
    import random

    from .graph import get_graph_snapshot
    from .layout import compute_layout

    if width <= 0 or height <= 0:
        console.print("[red]Error: width and height must be positive[/red]")
        raise typer.Exit(1)

    snapshot = get_graph_snapshot()
    rng = random.Random(seed) if seed is not None else None
    positions = compute_layout(snapshot.nodes, snapshot.edges, width, height, rng=rng)
    payload = {node_id: point.to_dict() for node_id, point in positions.items()}
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def audit():
    """List overrides that disagree with graph traversal."""
    from .resolver import ChainResolver

    divergent = ChainResolver().override_divergences()

    table = Table(title=f"Override/graph divergences ({len(divergent)})")
    table.add_column("Chain")
    table.add_column("Override")
    table.add_column("Graph")

    for key, (override, reached) in sorted(divergent.items()):
        table.add_row(key, override, reached or "[dim]no path[/dim]")

    console.print(table)


if __name__ == "__main__":
    app()
