from createsim.behaviors_scheduler import BehaviorsData, BehaviorsScheduler, RobotState
from createsim.geometry import Vector3
from createsim.messages import Twist


def _behavior(command, iterations, **kwargs):
    calls = []

    def run(state):
        calls.append(state)
        return command

    def done():
        return len(calls) >= iterations

    return BehaviorsData(run_func=run, is_done_func=done, **kwargs), calls


def test_no_behavior_returns_none():
    scheduler = BehaviorsScheduler()
    assert scheduler.has_behavior() is False
    assert scheduler.run_behavior(RobotState()) is None


def test_incomplete_behavior_rejected():
    scheduler = BehaviorsScheduler()
    assert scheduler.set_behavior(BehaviorsData(run_func=lambda s: None)) is False
    assert scheduler.has_behavior() is False


def test_behavior_runs_until_done():
    command = Twist(linear=Vector3(x=0.2))
    data, calls = _behavior(command, 2, apply_backup_limits=True)
    scheduler = BehaviorsScheduler()
    assert scheduler.set_behavior(data) is True
    assert scheduler.apply_backup_limits() is True
    state = RobotState()
    assert scheduler.run_behavior(state) == command
    assert scheduler.has_behavior() is True
    assert scheduler.run_behavior(state) == command
    assert scheduler.has_behavior() is False
    assert scheduler.run_behavior(state) is None
    assert calls == [state, state]


def test_non_preemptible_behavior_keeps_running():
    first, _ = _behavior(Twist(), 5, stop_on_new_behavior=False)
    second, second_calls = _behavior(Twist(), 1)
    scheduler = BehaviorsScheduler()
    scheduler.set_behavior(first)
    assert scheduler.set_behavior(second) is False
    scheduler.run_behavior(RobotState())
    assert second_calls == []


def test_preemptible_behavior_is_cleaned_up():
    cleaned = []
    first, _ = _behavior(
        Twist(), 5, stop_on_new_behavior=True, cleanup_func=lambda: cleaned.append(True)
    )
    second, second_calls = _behavior(Twist(), 1)
    scheduler = BehaviorsScheduler()
    scheduler.set_behavior(first)
    assert scheduler.stop_on_new_behavior() is True
    assert scheduler.set_behavior(second) is True
    assert cleaned == [True]
    assert scheduler.stop_on_new_behavior() is False
    scheduler.run_behavior(RobotState())
    assert len(second_calls) == 1


def test_finished_behavior_does_not_block_new_one():
    first, _ = _behavior(Twist(), 1, stop_on_new_behavior=False)
    second, _ = _behavior(Twist(), 1)
    scheduler = BehaviorsScheduler()
    scheduler.set_behavior(first)
    scheduler.run_behavior(RobotState())
    assert scheduler.set_behavior(second) is True