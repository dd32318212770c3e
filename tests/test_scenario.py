"""Unit tests for scenario loading and replay."""

import pytest

from safeseq.core.errors import ScenarioError
from safeseq.core.scenario import Scenario, Step, load_scenario, replay

SWAP_AFTER_VIEW = """
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
"""


class TestLoadScenario:
    """Tests for parsing scenario files."""

    def test_load(self, write_toml):
        scenario = load_scenario(write_toml(SWAP_AFTER_VIEW))
        assert scenario.name == "Swap after view"
        assert scenario.items == ["v1", "v2", "v3"]
        assert [s.op for s in scenario.steps] == ["view", "swap", "view"]
        assert scenario.steps[1].i == 0
        assert scenario.steps[1].j == 2
        assert scenario.steps[2].expect == ["v3", "v2", "v1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioError, match="not found"):
            load_scenario(tmp_path / "missing.toml")

    def test_missing_header(self, write_toml):
        with pytest.raises(ScenarioError, match=r"Missing \[scenario\]"):
            load_scenario(write_toml('[[step]]\nop = "view"\n'))

    def test_invalid_toml(self, write_toml):
        with pytest.raises(ScenarioError, match="Invalid TOML"):
            load_scenario(write_toml("[scenario\n"))

    def test_unknown_operation(self, write_toml):
        path = write_toml('[scenario]\nname = "x"\n\n[[step]]\nop = "insert"\n')
        with pytest.raises(ScenarioError, match="Step 1: unknown operation"):
            load_scenario(path)

    @pytest.mark.parametrize("steps", ["[1, 2]", "[\"view\"]", "[[1]]"])
    def test_step_must_be_a_table(self, write_toml, steps):
        path = write_toml(f'step = {steps}\n\n[scenario]\nname = "x"\n')
        with pytest.raises(ScenarioError, match=r"Step 1 must be a \[\[step\]\] table"):
            load_scenario(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "scenario.toml"
        path.write_bytes(b'[scenario]\nname = "\xff"\n')
        with pytest.raises(ScenarioError, match="Invalid TOML"):
            load_scenario(path)

    @pytest.mark.parametrize("step, message", [
        ('op = "append"', "'append' needs 'value'"),
        ('op = "remove"', "'remove' needs 'index'"),
        ('op = "swap"\ni = 1', "'swap' needs 'j'"),
        ('op = "remove"\nindex = "0"', "'index' must be an integer"),
        ('op = "remove"\nindex = true', "'index' must be an integer"),
        ('op = "view"\nexpect = 1', "'expect' must be an array"),
    ])
    def test_invalid_arguments(self, write_toml, step, message):
        path = write_toml(f'[scenario]\nname = "x"\n\n[[step]]\nop = "view"\n\n[[step]]\n{step}\n')
        with pytest.raises(ScenarioError, match=f"Step 2: {message}"):
            load_scenario(path)

    def test_save_and_load(self, tmp_path):
        scenario = Scenario(
            name='Quote " and backslash \\',
            items=[1, 2.5, "x", True, [1, 2]],
            steps=[
                Step(op='append', value="y"),
                Step(op='remove', index=0),
                Step(op='swap', i=0, j=1),
                Step(op='view', expect=[2.5, "x", True, [1, 2], "y"]),
            ],
        )
        path = tmp_path / "saved.toml"
        scenario.save_toml(path)
        assert load_scenario(path) == scenario

    def test_save_unsupported_value(self, tmp_path):
        scenario = Scenario(name="x", items=[None])
        with pytest.raises(ScenarioError, match="Unsupported type"):
            scenario.save_toml(tmp_path / "bad.toml")


class TestReplay:
    """Tests for replaying scenarios."""

    def test_swap_after_view(self, write_toml):
        report = replay(load_scenario(write_toml(SWAP_AFTER_VIEW)))

        assert report.ok
        assert report.final == ["v3", "v2", "v1"]
        assert report.copies == 1
        assert [r.copied for r in report.results] == [False, True, False]
        assert [r.shared for r in report.results] == [True, False, True]
        assert report.results[0].seen == ("v1", "v2", "v3")

    def test_front_eviction(self):
        scenario = Scenario(
            name="front eviction",
            items=[1, 2, 3],
            steps=[Step(op='view')] + [Step(op='remove', index=0)] * 3 + [Step(op='view', expect=[])],
        )
        report = replay(scenario)
        assert report.ok
        assert report.copies == 1
        assert report.final == []
        assert [r.length for r in report.results] == [3, 2, 1, 0, 0]

    def test_self_swap_does_not_copy(self):
        scenario = Scenario(
            name="self swap",
            items=["v1"],
            steps=[Step(op='view'), Step(op='swap', i=0, j=0), Step(op='view', expect=["v1"])],
        )
        report = replay(scenario)
        assert report.ok
        assert report.copies == 0

    def test_failed_expectation(self):
        scenario = Scenario(name="wrong", items=[1], steps=[Step(op='view', expect=[2])])
        report = replay(scenario)
        assert not report.ok
        assert not report.results[0].matched

    def test_out_of_range_is_recorded(self, caplog):
        scenario = Scenario(
            name="bad index",
            items=[1, 2],
            steps=[Step(op='view'), Step(op='remove', index=2), Step(op='append', value=3)],
        )
        report = replay(scenario)

        assert not report.ok
        assert "out of range" in report.results[1].error
        assert not report.results[1].copied
        assert report.results[2].error is None
        assert report.final == [1, 2, 3]
        assert "Step 2 remove(2) failed" in caplog.text

    def test_snapshots_stay_stable(self):
        steps = []
        for n in range(5):
            steps += [Step(op='view'), Step(op='append', value=n), Step(op='swap', i=0, j=1),
                      Step(op='remove', index=1)]
        report = replay(Scenario(name="mixed", items=["a", "b", "c"], steps=steps))
        assert report.unstable == []
        assert report.ok
        assert report.copies == 5


class TestStep:
    """Tests for Step."""

    @pytest.mark.parametrize("step, text", [
        (Step(op='append', value="a"), "append('a')"),
        (Step(op='remove', index=1), "remove(1)"),
        (Step(op='swap', i=0, j=2), "swap(0, 2)"),
        (Step(op='view'), "view()"),
    ])
    def test_describe(self, step, text):
        assert step.describe() == text
