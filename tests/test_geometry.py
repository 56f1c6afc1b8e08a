import math

import pytest

from createsim.geometry import (
    PolarCoordinate,
    Quaternion,
    Transform,
    Vector3,
    normalize_angle,
    object_wrt_frame,
    shortest_angular_distance,
    static_link_wrt_global_frame,
    to_polar,
    transform_to_yaw,
)


def _yaw_transform(x, y, yaw):
    return Transform(Vector3(x, y, 0.0), Quaternion.from_rpy(0.0, 0.0, yaw))


def test_vector_is_zero():
    assert Vector3().is_zero()
    assert not Vector3(0.0, 1e-12, 0.0).is_zero()


def test_vector_arithmetic_round_trip():
    a = Vector3(1.5, -2.0, 3.0)
    b = Vector3(0.5, 4.0, -1.0)
    assert (a + b) - b == a
    assert (a - a).is_zero()


@pytest.mark.parametrize("yaw", [-3.0, -1.0, 0.0, 0.5, 2.5])
def test_from_rpy_yaw_round_trip(yaw):
    q = Quaternion.from_rpy(0.0, 0.0, yaw)
    assert q.yaw() == pytest.approx(yaw)
    assert transform_to_yaw(Transform(rotation=q)) == pytest.approx(yaw)


def test_from_rpy_is_unit():
    q = Quaternion.from_rpy(0.3, -0.2, 1.1)
    assert q.length2() == pytest.approx(1.0)


def test_transform_normalizes_rotation():
    t = Transform(rotation=Quaternion(0.0, 0.0, 2.0, 2.0))
    assert t.rotation.length2() == pytest.approx(1.0)
    assert t.rotation.yaw() == pytest.approx(math.pi / 2)


def test_zero_rotation_raises():
    with pytest.raises(ValueError):
        Transform(rotation=Quaternion(0.0, 0.0, 0.0, 0.0))


def test_identity_inverse_times_is_other():
    other = _yaw_transform(1.0, -2.0, 0.7)
    result = Transform.identity().inverse_times(other)
    assert result.origin.x == pytest.approx(other.origin.x)
    assert result.origin.y == pytest.approx(other.origin.y)
    assert result.rotation.yaw() == pytest.approx(0.7)


def test_inverse_times_self_is_identity():
    t = _yaw_transform(3.0, 4.0, -1.2)
    result = t.inverse_times(t)
    assert result.origin.length() == pytest.approx(0.0, abs=1e-12)
    assert result.rotation.yaw() == pytest.approx(0.0, abs=1e-12)


def test_object_wrt_frame_inverts_composition():
    frame = _yaw_transform(1.0, 0.0, math.pi / 2)
    local = Vector3(0.25, -0.75, 0.0)
    world = Transform(frame.apply(local))
    relative = object_wrt_frame(world, frame)
    assert relative.x == pytest.approx(local.x)
    assert relative.y == pytest.approx(local.y)


def test_to_polar():
    polar = to_polar(3.0, 4.0)
    assert polar.radius == pytest.approx(5.0)
    assert polar.azimuth == pytest.approx(math.atan2(4.0, 3.0))
    assert to_polar(0.0, 0.0) == PolarCoordinate(0.0, 0.0)


@pytest.mark.parametrize("angle", [-10.0, -math.pi, -1.0, 0.0, 2.0, 7.0, 100.0])
def test_normalize_angle_range_and_equivalence(angle):
    result = normalize_angle(angle)
    assert -math.pi <= result <= math.pi
    assert math.cos(result) == pytest.approx(math.cos(angle))
    assert math.sin(result) == pytest.approx(math.sin(angle))


def test_shortest_angular_distance_wraps():
    assert shortest_angular_distance(0.3, 0.3 + 2 * math.pi) == pytest.approx(0.0, abs=1e-12)
    assert shortest_angular_distance(math.pi - 0.1, -math.pi + 0.1) == pytest.approx(0.2)


def test_static_link_identity_base_keeps_link_position():
    link = Transform(Vector3(0.1, -0.2, 0.5))
    result = static_link_wrt_global_frame(link, Transform.identity())
    assert result.origin.x == pytest.approx(0.1)
    assert result.origin.y == pytest.approx(-0.2)
    assert result.origin.z == 0.0


def test_static_link_rotated_base():
    base = _yaw_transform(2.0, 3.0, math.pi / 2)
    link = Transform(Vector3(1.0, 0.0, 0.0))
    result = static_link_wrt_global_frame(link, base)
    assert result.origin.x == pytest.approx(2.0)
    assert result.origin.y == pytest.approx(4.0)
    assert result.rotation.yaw() == pytest.approx(math.pi / 2)