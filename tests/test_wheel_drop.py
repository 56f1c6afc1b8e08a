import pytest

from createsim.messages import HazardType, JointState
from createsim.wheel_drop import WheelDrop

LEFT = "wheel_drop_left_joint"
RIGHT = "wheel_drop_right_joint"


def _state(**positions):
    names = list(positions)
    return JointState(name=names, position=[positions[n] for n in names])


def test_limits_follow_threshold():
    assert WheelDrop.LOWER_LIMIT == pytest.approx(0.03 * 0.75)
    assert WheelDrop.UPPER_LIMIT == pytest.approx(0.03 * 0.95)
    sensor = WheelDrop()
    below = sensor.joint_state_callback(
        _state(wheel_drop_left_joint=WheelDrop.UPPER_LIMIT - 1e-6)
    )
    assert below == []
    at_limit = sensor.joint_state_callback(
        _state(wheel_drop_left_joint=WheelDrop.UPPER_LIMIT)
    )
    assert [h.header.frame_id for h in at_limit] == [LEFT]
    at_lower = sensor.joint_state_callback(
        _state(wheel_drop_left_joint=WheelDrop.LOWER_LIMIT)
    )
    assert at_lower == []


def test_no_drop_publishes_nothing():
    published = []
    sensor = WheelDrop(publish=published.append)
    assert sensor.joint_state_callback(_state(wheel_drop_left_joint=0.0, wheel_drop_right_joint=0.01)) == []
    assert published == []


def test_drop_above_upper_limit_is_reported():
    published = []
    sensor = WheelDrop(publish=published.append, clock=lambda: 2.0)
    hazards = sensor.joint_state_callback(_state(wheel_drop_left_joint=0.029))
    assert published == hazards
    assert len(hazards) == 1
    assert hazards[0].type == HazardType.WHEEL_DROP
    assert hazards[0].header.frame_id == LEFT
    assert hazards[0].header.stamp == 2.0


def test_hysteresis_keeps_and_then_clears_detection():
    sensor = WheelDrop()
    sensor.joint_state_callback(_state(wheel_drop_right_joint=0.029))
    middle = sensor.joint_state_callback(_state(wheel_drop_right_joint=0.025))
    assert [h.header.frame_id for h in middle] == [RIGHT]
    cleared = sensor.joint_state_callback(_state(wheel_drop_right_joint=0.02))
    assert cleared == []
    assert sensor.wheeldrop_detected[RIGHT] is False


def test_rising_to_middle_band_does_not_trigger():
    sensor = WheelDrop()
    assert sensor.joint_state_callback(_state(wheel_drop_left_joint=0.025)) == []


def test_both_wheels_and_unknown_joints():
    sensor = WheelDrop()
    hazards = sensor.joint_state_callback(
        _state(left_wheel_joint=1.0, wheel_drop_right_joint=0.03, wheel_drop_left_joint=0.03)
    )
    assert [h.header.frame_id for h in hazards] == [LEFT, RIGHT]
    assert "left_wheel_joint" not in sensor.displacement


def test_missing_positions_raise():
    sensor = WheelDrop()
    with pytest.raises(IndexError):
        sensor.joint_state_callback(JointState(name=[LEFT], position=[]))