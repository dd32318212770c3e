from pathlib import Path

from typer import Option, secho

from ..app import app
from .replay import print_report
from ...core.scenario import Scenario, Step, replay

__all__ = ['demo_scenarios']


def demo_scenarios() -> list[Scenario]:
    """
    The traversal patterns of the container, written as scenarios
    """
    return [
        Scenario(
            name="Append while iterating a snapshot",
            items=[1, 2],
            steps=[
                Step(op='view', expect=[1, 2]),
                Step(op='append', value=1),
                Step(op='append', value=2),
                Step(op='view', expect=[1, 2, 1, 2]),
            ],
        ),
        Scenario(
            name="Remove the front while iterating a snapshot",
            items=["a", "b", "c"],
            steps=[
                Step(op='view', expect=["a", "b", "c"]),
                Step(op='remove', index=0),
                Step(op='remove', index=0),
                Step(op='remove', index=0),
                Step(op='view', expect=[]),
            ],
        ),
        Scenario(
            name="Taking a view before every remove (inefficient)",
            items=["a", "b", "c"],
            steps=[
                Step(op='view'),
                Step(op='remove', index=0),
                Step(op='view'),
                Step(op='remove', index=0),
                Step(op='view'),
                Step(op='remove', index=0),
                Step(op='view', expect=[]),
            ],
        ),
        Scenario(
            name="Swap after a view",
            items=["v1", "v2", "v3"],
            steps=[
                Step(op='view'),
                Step(op='swap', i=0, j=0),
                Step(op='swap', i=0, j=2),
                Step(op='swap', i=1, j=2),
                Step(op='view', expect=["v3", "v1", "v2"]),
            ],
        ),
    ]


@app.command()
def demo(
        output: Path | None = Option(None, "--output", "-o", file_okay=False, dir_okay=True,
                                     help="Save the demo scenarios as TOML files into this directory"),
        verbose: bool = Option(False, "--verbose", "-v",
                               help="Show the contents seen by every view step"),
):
    """
    Replay the built-in traversal patterns and show how many copies they need
    """
    scenarios = demo_scenarios()

    if output is not None:
        output.mkdir(parents=True, exist_ok=True)
        for number, scenario in enumerate(scenarios, 1):
            path = output / f"demo_{number}.toml"
            scenario.save_toml(path)
            secho(f"Saved {path}", fg="green")

    for scenario in scenarios:
        print_report(replay(scenario), verbose=verbose)
