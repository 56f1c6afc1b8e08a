"""Rigid-body geometry in the plane and in space: vectors, quaternions, transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

_TWO_PI = 2.0 * math.pi

Matrix3 = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]


@dataclass(frozen=True)
class Vector3:
    """An immutable three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def is_zero(self) -> bool:
        """True when every component is exactly zero."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion; the default is the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    @classmethod
    def from_rpy(cls, roll: float, pitch: float, yaw: float) -> Quaternion:
        """Build a rotation from fixed-axis roll, pitch and yaw angles."""
        cy, sy = math.cos(yaw * 0.5), math.sin(yaw * 0.5)
        cp, sp = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
        cr, sr = math.cos(roll * 0.5), math.sin(roll * 0.5)
        return cls(
            x=sr * cp * cy - cr * sp * sy,
            y=cr * sp * cy + sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
            w=cr * cp * cy + sr * sp * sy,
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        x1, y1, z1, w1 = self.x, self.y, self.z, self.w
        x2, y2, z2, w2 = other.x, other.y, other.z, other.w
        return Quaternion(
            x=w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            y=w1 * y2 + y1 * w2 + z1 * x2 - x1 * z2,
            z=w1 * z2 + z1 * w2 + x1 * y2 - y1 * x2,
            w=w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        )

    def length2(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def normalized(self) -> Quaternion:
        """Return the unit quaternion; a zero quaternion raises ValueError."""
        norm = math.sqrt(self.length2())
        if norm == 0.0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.x / norm, self.y / norm, self.z / norm, self.w / norm)

    def conjugate(self) -> Quaternion:
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def matrix(self) -> Matrix3:
        """Rotation matrix rows; the quaternion need not be normalized."""
        d = self.length2()
        if d == 0.0:
            raise ValueError("a zero quaternion has no rotation matrix")
        s = 2.0 / d
        xs, ys, zs = self.x * s, self.y * s, self.z * s
        wx, wy, wz = self.w * xs, self.w * ys, self.w * zs
        xx, xy, xz = self.x * xs, self.x * ys, self.x * zs
        yy, yz, zz = self.y * ys, self.y * zs, self.z * zs
        return (
            (1.0 - (yy + zz), xy - wz, xz + wy),
            (xy + wz, 1.0 - (xx + zz), yz - wx),
            (xz - wy, yz + wx, 1.0 - (xx + yy)),
        )

    def rotate(self, vector: Vector3) -> Vector3:
        m = self.matrix()
        return Vector3(*(row[0] * vector.x + row[1] * vector.y + row[2] * vector.z for row in m))

    def yaw(self) -> float:
        """Heading about the z axis, with the gimbal-lock cases handled."""
        sqw, sqx, sqy, sqz = self.w * self.w, self.x * self.x, self.y * self.y, self.z * self.z
        sarg = -2.0 * (self.x * self.z - self.w * self.y) / (sqx + sqy + sqz + sqw)
        if sarg <= -0.99999:
            return -2.0 * math.atan2(self.y, self.x)
        if sarg >= 0.99999:
            return 2.0 * math.atan2(self.y, self.x)
        return math.atan2(2.0 * (self.x * self.y + self.w * self.z), sqw + sqx - sqy - sqz)


@dataclass(frozen=True)
class Transform:
    """A rigid transform: rotation followed by translation. The rotation is kept normalized."""

    origin: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation.normalized())

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    def __mul__(self, other: Transform) -> Transform:
        return Transform(self.apply(other.origin), self.rotation * other.rotation)

    def apply(self, vector: Vector3) -> Vector3:
        """Map a point from this transform's frame into the parent frame."""
        return self.rotation.rotate(vector) + self.origin

    def inverse(self) -> Transform:
        return Transform.identity().inverse_times(Transform.identity()) if False else self.inverse_times(
            Transform.identity()
        )

    def inverse_times(self, other: Transform) -> Transform:
        """Return the inverse of this transform composed with ``other``."""
        m = self.rotation.matrix()
        v = other.origin - self.origin
        origin = Vector3(
            m[0][0] * v.x + m[1][0] * v.y + m[2][0] * v.z,
            m[0][1] * v.x + m[1][1] * v.y + m[2][1] * v.z,
            m[0][2] * v.x + m[1][2] * v.y + m[2][2] * v.z,
        )
        return Transform(origin, self.rotation.conjugate() * other.rotation)

    def with_origin(self, origin: Vector3) -> Transform:
        return Transform(origin, self.rotation)

    def with_rotation(self, rotation: Quaternion) -> Transform:
        return Transform(self.origin, rotation)


@dataclass(frozen=True)
class PolarCoordinate:
    radius: float
    azimuth: float


def to_polar(x: float, y: float) -> PolarCoordinate:
    """Convert a planar cartesian point to polar form."""
    return PolarCoordinate(radius=math.hypot(x, y), azimuth=math.atan2(y, x))


def _normalize_angle_positive(angle: float) -> float:
    return math.fmod(math.fmod(angle, _TWO_PI) + _TWO_PI, _TWO_PI)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into the range [-pi, pi]."""
    wrapped = _normalize_angle_positive(angle)
    if wrapped > math.pi:
        wrapped -= _TWO_PI
    return wrapped


def shortest_angular_distance(start: float, end: float) -> float:
    """Signed smallest rotation that takes ``start`` to ``end``."""
    return normalize_angle(end - start)


def transform_to_yaw(transform: Transform) -> float:
    """Yaw of a transform taken from its rotation matrix."""
    m = transform.rotation.matrix()
    if abs(m[2][0]) >= 1.0:
        return 0.0
    pitch = -math.asin(m[2][0])
    cos_pitch = math.cos(pitch)
    return math.atan2(m[1][0] / cos_pitch, m[0][0] / cos_pitch)


def object_wrt_frame(obj: Transform, frame: Transform) -> Vector3:
    """Position of ``obj`` expressed in ``frame``."""
    return frame.inverse_times(obj).origin


def static_link_wrt_global_frame(static_link: Transform, base_frame: Transform) -> Transform:
    """Global pose of a link fixed to a base, given the link pose relative to the base."""
    base_yaw = transform_to_yaw(base_frame)
    link = static_link.origin
    rotated = Vector3(
        math.cos(base_yaw) * link.x - math.sin(base_yaw) * link.y,
        math.sin(base_yaw) * link.x + math.cos(base_yaw) * link.y,
        0.0,
    )
    global_pose = Transform(rotated + base_frame.origin)
    rotation = Quaternion.from_rpy(0.0, 0.0, transform_to_yaw(global_pose) + base_yaw)
    return global_pose.with_rotation(rotation)