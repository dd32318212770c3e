"""
Scripted replay of SafeSequence operations

A scenario is a TOML file like this::

    [scenario]
    name = "Swap after view"
    items = ["v1", "v2", "v3"]

    [[step]]
    op = "view"

    [[step]]
    op = "swap"
    i = 0
    j = 2

    [[step]]
    op = "view"
    expect = ["v3", "v2", "v1"]

Every snapshot taken by a ``view`` step is kept until the end of the replay, then it is read
again and compared with what it showed when it was taken.
"""
from __future__ import annotations
from typing import Any, Literal, Self, cast
from pathlib import Path
from dataclasses import dataclass, field
import json
import tomllib

from .errors import IndexOutOfRange, ScenarioError
from .safe_sequence import SafeSequence
from ..types.view import SequenceSnapshot
from ..utils.log import logger

__all__ = ['Step', 'Scenario', 'StepResult', 'ReplayReport', 'load_scenario', 'replay']

Operation = Literal['append', 'remove', 'swap', 'view']
OPERATIONS: tuple[Operation, ...] = ('append', 'remove', 'swap', 'view')


@dataclass(kw_only=True, slots=True)
class Step:
    """
    One operation of a scenario
    """
    op: Operation
    value: Any = None
    index: int | None = None
    i: int | None = None
    j: int | None = None
    expect: list[Any] | None = None

    def describe(self) -> str:
        if self.op == 'append':
            return f"append({self.value!r})"
        if self.op == 'remove':
            return f"remove({self.index})"
        if self.op == 'swap':
            return f"swap({self.i}, {self.j})"
        return "view()"

    @classmethod
    def from_dict(cls, number: int, data: dict[str, Any]) -> Self:
        """
        Create a step from a parsed [[step]] table

        :param number: 1-based step number, used in error messages
        :param data: The table
        :return: The step
        :raises ScenarioError: If the operation or its arguments are invalid
        """
        if not isinstance(data, dict):
            raise ScenarioError(f"Step {number} must be a [[step]] table, got {data!r}")

        op = data.get('op')
        if op not in OPERATIONS:
            raise ScenarioError(f"Step {number}: unknown operation {op!r}, "
                                f"must be one of {', '.join(OPERATIONS)}")

        def get_int(key: str) -> int:
            try:
                value = data[key]
            except KeyError:
                raise ScenarioError(f"Step {number}: '{op}' needs '{key}'") from None
            # bool is an int subclass, but it is never a valid index
            if not isinstance(value, int) or isinstance(value, bool):
                raise ScenarioError(f"Step {number}: '{key}' must be an integer, got {value!r}")
            return value

        if op == 'append':
            if 'value' not in data:
                raise ScenarioError(f"Step {number}: 'append' needs 'value'")
            return cls(op=op, value=data['value'])
        if op == 'remove':
            return cls(op=op, index=get_int('index'))
        if op == 'swap':
            return cls(op=op, i=get_int('i'), j=get_int('j'))

        expect = data.get('expect')
        if expect is not None and not isinstance(expect, list):
            raise ScenarioError(f"Step {number}: 'expect' must be an array")
        return cls(op=cast(Operation, op), expect=expect)


@dataclass(kw_only=True, slots=True)
class Scenario:
    """
    A named list of operations run against a fresh SafeSequence
    """
    name: str
    items: list[Any] = field(default_factory=list)
    steps: list[Step] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create scenario from parsed TOML data

        :raises ScenarioError: If the data is invalid
        """
        if 'scenario' not in data:
            raise ScenarioError("Missing [scenario] section")
        header = data['scenario']
        if not isinstance(header, dict):
            raise ScenarioError("The [scenario] section must be a table!")

        items = header.get('items', [])
        if not isinstance(items, list):
            raise ScenarioError("'items' must be an array")

        steps = data.get('step', [])
        if not isinstance(steps, list):
            raise ScenarioError("Steps must be given as [[step]] tables")

        return cls(
            name=str(header.get('name', 'unnamed')),
            items=items,
            steps=[Step.from_dict(n, s) for n, s in enumerate(steps, 1)],
        )

    @classmethod
    def load_toml(cls, path: Path) -> Self:
        """
        Load scenario from TOML file.

        :param path: Path to the TOML file
        :return: Scenario instance
        :raises ScenarioError: If the file is not valid TOML or the scenario is invalid
        """
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ScenarioError(f"Invalid TOML in scenario file '{path}': {e}") from e
        return cls.from_dict(data)

    def save_toml(self, path: Path):
        """
        Save scenario to TOML file.

        :param path: Path to save the file
        """

        def format_value(value: Any) -> str:
            """Format value to TOML string"""
            if isinstance(value, bool):
                return str(value).lower()
            if isinstance(value, (int, float)):
                return repr(value)
            if isinstance(value, str):
                # JSON string escapes are valid in TOML basic strings
                return json.dumps(value)
            if isinstance(value, (list, tuple)):
                return '[' + ', '.join(format_value(v) for v in value) + ']'
            raise ScenarioError(f"Unsupported type in scenario: {type(value).__name__}")

        lines = ["[scenario]",
                 f"name = {format_value(self.name)}",
                 f"items = {format_value(self.items)}",
                 ""]

        for step in self.steps:
            lines.append("[[step]]")
            lines.append(f'op = "{step.op}"')
            for key in ('value', 'index', 'i', 'j', 'expect'):
                value = getattr(step, key)
                if value is not None:
                    lines.append(f"{key} = {format_value(value)}")
            lines.append("")

        with open(path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))


@dataclass(kw_only=True, slots=True)
class StepResult:
    """
    The outcome of one step
    """
    number: int
    step: Step
    copied: bool = False
    shared: bool = False
    length: int = 0
    seen: tuple[Any, ...] | None = None
    matched: bool = True
    error: str | None = None


@dataclass(kw_only=True, slots=True)
class ReplayReport:
    """
    The outcome of a whole replay
    """
    scenario: Scenario
    results: list[StepResult]
    # Step numbers of views whose contents changed after they were taken
    unstable: list[int]
    final: list[Any]
    copies: int

    @property
    def ok(self) -> bool:
        return (not self.unstable
                and all(r.matched and r.error is None for r in self.results))


def load_scenario(path: Path) -> Scenario:
    """
    Load a scenario file

    :param path: Path to the TOML file
    :raises ScenarioError: If the file is missing or invalid
    """
    if not Path(path).exists():
        raise ScenarioError(f"Scenario file '{path}' not found!")
    return Scenario.load_toml(Path(path))


def replay(scenario: Scenario) -> ReplayReport:
    """
    Run a scenario against a fresh SafeSequence

    Out of range indices do not stop the replay, they are recorded on the failing step.

    :param scenario: The scenario to run
    :return: The report of the replay
    """
    seq: SafeSequence[Any] = SafeSequence()
    for item in scenario.items:
        seq.append(item)

    held: list[tuple[int, SequenceSnapshot[Any], tuple[Any, ...]]] = []
    results: list[StepResult] = []

    for number, step in enumerate(scenario.steps, 1):
        copies = seq.copies
        result = StepResult(number=number, step=step)
        try:
            if step.op == 'append':
                seq.append(step.value)
            elif step.op == 'remove':
                seq.remove(step.index)
            elif step.op == 'swap':
                seq.swap(step.i, step.j)
            else:
                snapshot = seq.view()
                seen = tuple(snapshot)
                held.append((number, snapshot, seen))
                result.seen = seen
                if step.expect is not None:
                    result.matched = list(seen) == step.expect
        except IndexOutOfRange as e:
            logger.warning("Step %d %s failed: %s", number, step.describe(), e)
            result.error = str(e)

        result.copied = seq.copies > copies
        result.shared = seq.shared
        result.length = len(seq)
        results.append(result)

    unstable = [number for number, snapshot, seen in held if tuple(snapshot) != seen]
    for number in unstable:
        logger.error("Snapshot of step %d changed after it was taken", number)

    return ReplayReport(
        scenario=scenario,
        results=results,
        unstable=unstable,
        final=list(seq),
        copies=seq.copies,
    )
