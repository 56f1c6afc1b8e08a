"""Simulated IR opcode receiver: dock buoys, force field and docked state."""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, ClassVar, Optional, Sequence

from createsim.geometry import (
    PolarCoordinate,
    Transform,
    Vector3,
    object_wrt_frame,
    to_polar,
)
from createsim.messages import Header, Odometry


class Opcode(IntEnum):
    """Opcodes the dock can emit; the buoy codes combine by bitwise or."""

    CODE_IR_FORCE_FIELD = 161
    CODE_IR_VIRTUAL_WALL = 162
    CODE_IR_BUOY_GREEN = 164
    CODE_IR_BUOY_RED = 168
    CODE_IR_BUOY_BOTH = 172


@dataclass
class IrOpcodeMessage:
    SENSOR_OMNI: ClassVar[int] = 0
    SENSOR_DIRECTIONAL_FRONT: ClassVar[int] = 1

    header: Header = field(default_factory=Header)
    opcode: int = 0
    sensor: int = 0


@dataclass
class DockStatus:
    header: Header = field(default_factory=Header)
    is_docked: bool = False
    dock_visible: bool = False


@dataclass(frozen=True)
class SensorParams:
    """Field of view (radians) and range (metres) of one receiver."""

    fov: float
    range: float


class IrOpcode:
    """Computes which dock signals the robot's two IR receivers would see.

    ``update_opcodes`` and ``update_dock_status`` are meant to be called
    periodically (about 62 Hz and 20 Hz respectively).
    """

    DOCK_BUOYS_FOV = 50 * math.pi / 180
    DOCK_BUOY_FOV_RATIO = 0.6
    DOCK_BUOYS_RANGE = 1.0
    DOCK_HALO_RANGE = 0.6096
    DOCKED_DISTANCE = 0.075
    DOCKED_YAW = math.pi / 30.0
    RECEIVER_FRAME = "ir_opcode_receiver_link"

    def __init__(
        self,
        publish_opcode: Optional[Callable[[IrOpcodeMessage], None]] = None,
        publish_dock_status: Optional[Callable[[DockStatus], None]] = None,
        clock: Callable[[], float] = time.time,
        sensor_0_fov: float = 3.839724,
        sensor_0_range: float = 0.1,
        sensor_1_fov: float = 1.570796,
        sensor_1_range: float = 0.5,
    ) -> None:
        self._publish_opcode = publish_opcode
        self._publish_dock_status = publish_dock_status
        self._clock = clock
        self.sensors = (
            SensorParams(sensor_0_fov, sensor_0_range),
            SensorParams(sensor_1_fov, sensor_1_range),
        )
        self.detected_forcefield_opcodes: tuple[int, int] = (0, 0)
        self.detected_buoys_opcodes: tuple[int, int] = (0, 0)
        self.is_docked = False
        self.is_dock_visible = False
        self._emitter_lock = threading.Lock()
        self._receiver_lock = threading.Lock()
        self._emitter_pose = Transform.identity()
        self._receiver_pose = Transform.identity()

    def emitter_pose_callback(self, msg: Odometry) -> None:
        with self._emitter_lock:
            self._emitter_pose = msg.pose.to_transform()

    def receiver_pose_callback(self, msg: Odometry) -> None:
        with self._receiver_lock:
            self._receiver_pose = msg.pose.to_transform()

    def _poses(self) -> tuple[Transform, Transform]:
        with self._emitter_lock:
            emitter = self._emitter_pose
        with self._receiver_lock:
            receiver = self._receiver_pose
        return emitter, receiver

    def emitter_point_to_receiver_polar(self, emitter_point: Vector3) -> PolarCoordinate:
        """A point offset from the emitter, in polar form relative to the receiver."""
        emitter, receiver = self._poses()
        point = object_wrt_frame(emitter, receiver) + emitter_point
        return to_polar(point.x, point.y)

    def receiver_point_to_emitter_polar(self, receiver_point: Vector3) -> PolarCoordinate:
        """A point offset from the receiver, in polar form relative to the emitter."""
        emitter, receiver = self._poses()
        point = object_wrt_frame(receiver, emitter) + receiver_point
        return to_polar(point.x, point.y)

    def check_buoys_detection(self, fov: float, range_: float) -> int:
        """Buoy opcode seen by a receiver with the given field of view and range."""
        receiver_wrt_emitter = self.receiver_point_to_emitter_polar(Vector3())
        emitter_wrt_receiver = self.emitter_point_to_receiver_polar(Vector3())

        receiver_sees_emitter = -fov / 2 < emitter_wrt_receiver.azimuth < fov / 2
        in_front_of_buoys = -math.pi / 2 < receiver_wrt_emitter.azimuth < math.pi / 2
        buoys_in_range = emitter_wrt_receiver.radius < range_ + self.DOCK_BUOYS_RANGE

        half_fov = self.DOCK_BUOYS_FOV / 2
        buoy_fov = self.DOCK_BUOY_FOV_RATIO * self.DOCK_BUOYS_FOV
        azimuth = receiver_wrt_emitter.azimuth
        red_sees_receiver = half_fov - buoy_fov < azimuth < half_fov
        green_sees_receiver = -half_fov < azimuth < buoy_fov - half_fov

        opcode = 0
        if buoys_in_range and in_front_of_buoys and receiver_sees_emitter:
            if green_sees_receiver:
                opcode |= Opcode.CODE_IR_BUOY_GREEN
            if red_sees_receiver:
                opcode |= Opcode.CODE_IR_BUOY_RED
        return opcode

    def check_force_field_detection(self, fov: float, range_: float) -> int:
        """Force-field opcode seen by a receiver with the given field of view and range."""
        emitter_wrt_receiver = self.emitter_point_to_receiver_polar(Vector3())
        in_range = emitter_wrt_receiver.radius < range_ + self.DOCK_HALO_RANGE
        sees_emitter = -fov / 2 < emitter_wrt_receiver.azimuth < fov / 2
        if in_range and sees_emitter:
            return int(Opcode.CODE_IR_FORCE_FIELD)
        return 0

    def publish_sensors(self, detected_opcodes: Sequence[int]) -> list[IrOpcodeMessage]:
        """Publish one message per sensor that detected something; return them."""
        published = []
        for sensor, opcode in enumerate(detected_opcodes):
            if opcode > 0:
                message = IrOpcodeMessage(
                    header=Header(stamp=self._clock(), frame_id=self.RECEIVER_FRAME),
                    opcode=opcode,
                    sensor=sensor,
                )
                if self._publish_opcode is not None:
                    self._publish_opcode(message)
                published.append(message)
        return published

    def update_opcodes(self) -> list[IrOpcodeMessage]:
        """Recompute force-field and buoy detections for both sensors and publish them."""
        self.detected_forcefield_opcodes = tuple(
            self.check_force_field_detection(s.fov, s.range) for s in self.sensors
        )
        self.detected_buoys_opcodes = tuple(
            self.check_buoys_detection(s.fov, s.range) for s in self.sensors
        )
        return self.publish_sensors(self.detected_forcefield_opcodes) + self.publish_sensors(
            self.detected_buoys_opcodes
        )

    def update_dock_status(self) -> DockStatus:
        """Recompute and publish whether the robot is docked and sees the dock."""
        receiver_wrt_emitter = self.receiver_point_to_emitter_polar(Vector3())
        emitter_wrt_receiver = self.emitter_point_to_receiver_polar(Vector3())

        self.is_docked = (
            receiver_wrt_emitter.radius < self.DOCKED_DISTANCE
            and abs(emitter_wrt_receiver.azimuth) < self.DOCKED_YAW
            and abs(receiver_wrt_emitter.azimuth) < self.DOCKED_YAW
        )
        omni, front = (
            self.detected_buoys_opcodes[IrOpcodeMessage.SENSOR_OMNI],
            self.detected_buoys_opcodes[IrOpcodeMessage.SENSOR_DIRECTIONAL_FRONT],
        )
        self.is_dock_visible = (
            omni != Opcode.CODE_IR_VIRTUAL_WALL and front != Opcode.CODE_IR_VIRTUAL_WALL
        )
        status = DockStatus(
            header=Header(stamp=self._clock()),
            is_docked=self.is_docked,
            dock_visible=self.is_dock_visible,
        )
        if self._publish_dock_status is not None:
            self._publish_dock_status(status)
        return status