from pathlib import Path

from typer import Argument, Option, secho, Exit
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..app import app
from ...core.errors import ScenarioError
from ...core.scenario import ReplayReport, load_scenario, replay as replay_scenario
from ...utils.log import logger

__all__ = ['print_report']

console = Console()


def print_report(report: ReplayReport, verbose: bool = False):
    """Print the steps of a replay in a table, then the verdict."""
    table = Table(title=report.scenario.name, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Operation", style="cyan", no_wrap=True)
    table.add_column("Copied", justify="center")
    table.add_column("State")
    table.add_column("Length", justify="right")
    if verbose:
        table.add_column("Seen")
    table.add_column("Result")

    for result in report.results:
        if result.error:
            outcome = f"[red]{escape(result.error)}[/red]"
        elif not result.matched:
            outcome = f"[red]expected {escape(repr(result.step.expect))}[/red]"
        else:
            outcome = "[green]ok[/green]"
        row = [
            str(result.number),
            escape(result.step.describe()),
            "[yellow]yes[/yellow]" if result.copied else "no",
            "shared" if result.shared else "exclusive",
            str(result.length),
        ]
        if verbose:
            row.append("" if result.seen is None else escape(repr(list(result.seen))))
        row.append(outcome)
        table.add_row(*row)

    console.print(table)
    console.print(f"Final contents: {escape(repr(report.final))}", highlight=False)
    console.print(f"Defensive copies: {report.copies}")
    if report.unstable:
        steps = ', '.join(str(n) for n in report.unstable)
        console.print(f"[red]Snapshots changed after they were taken: step {steps}[/red]")
    elif report.ok:
        console.print("[green]All snapshots stayed stable[/green]")


@app.command()
def replay(
        scenario: Path = Argument(..., dir_okay=False, file_okay=True,
                                  help="Scenario file (*.toml)"),
        verbose: bool = Option(False, "--verbose", "-v",
                               help="Show the contents seen by every view step"),
):
    """
    Replay a scenario file against a fresh SafeSequence

    Every step is run in order, and the table shows whether the step had to make a defensive copy
    and the state of the container after it. The exit code is 1 if an expectation failed, a step
    raised an error, or a snapshot changed after it was taken.
    """
    try:
        loaded = load_scenario(scenario)
    except ScenarioError as e:
        secho(str(e), fg="red", err=True)
        raise Exit(1)

    logger.info("Replaying %s (%d steps)", loaded.name, len(loaded.steps))
    report = replay_scenario(loaded)
    print_report(report, verbose=verbose)

    if not report.ok:
        raise Exit(1)
