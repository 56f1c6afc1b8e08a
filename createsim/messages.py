"""Plain message types exchanged between the simulated robot components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Sequence

from createsim.geometry import Quaternion, Transform, Vector3


@dataclass
class Header:
    stamp: float = 0.0
    frame_id: str = ""


@dataclass
class Pose:
    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)

    def to_transform(self) -> Transform:
        return Transform(self.position, self.orientation)

    @classmethod
    def from_transform(cls, transform: Transform) -> Pose:
        return cls(position=transform.origin, orientation=transform.rotation)


@dataclass
class Odometry:
    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    pose: Pose = field(default_factory=Pose)


@dataclass
class TransformStamped:
    header: Header = field(default_factory=Header)
    child_frame_id: str = ""
    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)


@dataclass
class Twist:
    linear: Vector3 = field(default_factory=Vector3)
    angular: Vector3 = field(default_factory=Vector3)


class HazardType(IntEnum):
    BACKUP_LIMIT = 0
    BUMP = 1
    CLIFF = 2
    STALL = 3
    WHEEL_DROP = 4
    OBJECT_PROXIMITY = 5


@dataclass
class HazardDetection:
    type: HazardType
    header: Header = field(default_factory=Header)


@dataclass
class HazardDetectionVector:
    header: Header = field(default_factory=Header)
    detections: list[HazardDetection] = field(default_factory=list)


@dataclass
class JointState:
    header: Header = field(default_factory=Header)
    name: list[str] = field(default_factory=list)
    position: list[float] = field(default_factory=list)
    velocity: list[float] = field(default_factory=list)
    effort: list[float] = field(default_factory=list)


@dataclass
class LaserScan:
    header: Header = field(default_factory=Header)
    range_min: float = 0.0
    range_max: float = 0.0
    ranges: list[float] = field(default_factory=list)


def tf_message_to_odom(transforms: Sequence[TransformStamped], index: int) -> Odometry:
    """Build an odometry message from one entry of a list of stamped transforms."""
    source = transforms[index]
    return Odometry(
        header=Header(stamp=source.header.stamp, frame_id=source.header.frame_id),
        child_frame_id=source.child_frame_id,
        pose=Pose(position=source.translation, orientation=source.rotation),
    )