import pytest

from tabpfn_provisioner.context import ProvisionContext
from tabpfn_provisioner.errors import CommandError
from tabpfn_provisioner.pipeline import run_pipeline


class FakeStep:
    def __init__(self, step_id, log, *, on=True, fail=False):
        self.step_id = step_id
        self.label = f"step {step_id}"
        self.flag = None if on is True else "SOME_FLAG"
        self._on = on
        self._fail = fail
        self._log = log

    def enabled(self, config):
        return bool(self._on)

    def run(self, ctx):
        self._log.append(self.step_id)
        if self._fail:
            raise CommandError(["tool"], 5)


def test_runs_enabled_steps_in_order(make_config):
    log = []
    steps = [FakeStep("a", log), FakeStep("b", log, on=False), FakeStep("c", log)]

    result = run_pipeline(ctx=ProvisionContext(config=make_config()), steps=steps)

    assert log == ["a", "c"]
    assert result.ran_steps == ["a", "c"]
    assert result.skipped_steps == ["b"]


def test_first_failure_stops_the_run(make_config):
    log = []
    steps = [FakeStep("a", log), FakeStep("b", log, fail=True), FakeStep("c", log)]

    with pytest.raises(CommandError) as excinfo:
        run_pipeline(ctx=ProvisionContext(config=make_config()), steps=steps)

    assert log == ["a", "b"]
    assert excinfo.value.exit_code == 5


def test_zero_exit_code_never_reported_for_failure():
    assert CommandError(["tool"], 0).exit_code == 1


def test_signal_death_maps_to_shell_exit_code():
    assert CommandError(["tool"], -9).exit_code == 137
