"""qtrack-quality-check — collect metrics once and evaluate the quality gates.

Exit code is 0 when every enabled gate passes, 1 otherwise (or when the gate
file cannot be loaded).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from qtrack.config import QTrackConfig
from qtrack.errors import QTrackError
from qtrack.monitoring import (
    MetricsCollector,
    QualityGateManager,
    flatten_metrics,
    format_value,
    load_gates,
    summarize,
)

console = Console()

app = typer.Typer(
    name="qtrack-quality-check",
    help="Evaluate QTrack quality gates against freshly collected metrics.",
    add_completion=False,
)


def _manager(gates_file: Path | None) -> QualityGateManager:
    if gates_file is None:
        configured = QTrackConfig().gates_file
        gates_file = Path(configured) if configured else None
    if gates_file is None:
        return QualityGateManager()
    return QualityGateManager(load_gates(gates_file))


@app.command()
def check(
    gates_file: Optional[Path] = typer.Option(
        None, "--gates-file", "-g",
        help="YAML file with gate definitions (replaces the built-in set)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run the quality check."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        manager = _manager(gates_file)
    except (QTrackError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    snapshot = MetricsCollector().collect()
    gates = manager.list_gates()
    results = manager.evaluate(flatten_metrics(snapshot))
    summary = summarize(results)
    by_id = {g.id: g for g in gates}
    failed = [r for r in results if not r.passed]

    if as_json:
        typer.echo(json.dumps({
            "timestamp": snapshot.timestamp,
            "results": [r.model_dump(by_alias=True) for r in results],
            "summary": summary.model_dump(by_alias=True),
        }, indent=2))
        raise typer.Exit(1 if failed else 0)

    table = Table(title="Quality Gate Results")
    table.add_column("Status")
    table.add_column("Gate")
    table.add_column("Current", justify="right")
    table.add_column("Threshold", justify="right")
    table.add_column("Message")
    for r in results:
        status = "[green]PASSED[/green]" if r.passed else "[red]FAILED[/red]"
        table.add_row(
            status,
            by_id[r.gate_id].name,
            format_value(r.actual_value),
            format_value(r.threshold),
            r.message,
        )
    console.print(table)

    console.print(f"\nGates passed: {summary.passed}/{summary.total}")
    console.print(f"Health score: {summary.overall_health:.1f}%")

    if failed:
        console.print("[bold red]Overall status: NEEDS ATTENTION[/bold red]\n")
        console.print("[bold]Recommendations:[/bold]")
        for r in failed:
            gate = by_id[r.gate_id]
            console.print(f"  • Fix {gate.name}: {gate.description}")
        raise typer.Exit(1)

    console.print("[bold green]Overall status: HEALTHY[/bold green]")
    console.print("All quality gates passed.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
