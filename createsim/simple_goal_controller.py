"""Point-to-point velocity controller that turns, drives and then aligns to each goal."""

from __future__ import annotations

import math
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional

from createsim.geometry import Transform, Vector3, normalize_angle, shortest_angular_distance
from createsim.messages import Twist


@dataclass(frozen=True)
class CmdPathPoint:
    """A path point, the radius that counts as reaching it, and whether to reverse into it."""

    pose: Transform
    radius: float
    drive_backwards: bool = False


@dataclass(frozen=True)
class _GoalPoint:
    x: float
    y: float
    theta: float
    radius: float
    drive_backwards: bool


class _NavigateState(Enum):
    ANGLE_TO_GOAL = auto()
    GO_TO_GOAL_POSITION = auto()
    GOAL_ANGLE = auto()


class SimpleGoalController:
    MIN_ROTATION = 0.1
    TO_GOAL_ANGLE_CONVERGED = 0.03
    GO_TO_GOAL_ANGLE_TOO_FAR = math.pi / 16.0
    GO_TO_GOAL_APPLY_ROTATION_ANGLE = 0.02
    GOAL_ANGLE_CONVERGED = 0.02

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._goal_points: deque[_GoalPoint] = deque()
        self._state = _NavigateState.ANGLE_TO_GOAL
        self._max_rotation = 0.0
        self._max_translation = 0.0

    def initialize_goal(
        self, cmd_path: Iterable[CmdPathPoint], max_rotation: float, max_translation: float
    ) -> None:
        """Set the path to follow and the speed limits."""
        with self._lock:
            self._goal_points = deque(
                _GoalPoint(
                    x=point.pose.origin.x,
                    y=point.pose.origin.y,
                    theta=point.pose.rotation.yaw(),
                    radius=point.radius,
                    drive_backwards=point.drive_backwards,
                )
                for point in cmd_path
            )
            self._state = _NavigateState.ANGLE_TO_GOAL
            self._max_rotation = max_rotation
            self._max_translation = max_translation

    def reset(self) -> None:
        with self._lock:
            self._goal_points.clear()

    def get_velocity_for_position(self, current_pose: Transform) -> Optional[Twist]:
        """Velocity toward the next goal point, or None once no goal remains."""
        with self._lock:
            if not self._goal_points:
                return None
            current_angle = current_pose.rotation.yaw()
            position = current_pose.origin
            goal = self._goal_points[0]

            if self._state is _NavigateState.ANGLE_TO_GOAL:
                if self._distance(goal, position) <= goal.radius:
                    self._state = _NavigateState.GO_TO_GOAL_POSITION
                    return Twist()
                angle = self._diff_angle(goal, position, current_angle)
                if goal.drive_backwards:
                    angle = normalize_angle(angle + math.pi)
                angle = self._bound_rotation(angle)
                if abs(angle) < self.TO_GOAL_ANGLE_CONVERGED:
                    self._state = _NavigateState.GO_TO_GOAL_POSITION
                    return Twist()
                return Twist(angular=Vector3(z=angle))

            if self._state is _NavigateState.GO_TO_GOAL_POSITION:
                distance = self._distance(goal, position)
                angle = self._diff_angle(goal, position, current_angle)
                abs_angle = abs(angle)
                if goal.drive_backwards:
                    abs_angle = normalize_angle(abs_angle + math.pi)
                if distance < goal.radius:
                    self._state = _NavigateState.GOAL_ANGLE
                    return Twist()
                if abs_angle > self.GO_TO_GOAL_ANGLE_TOO_FAR:
                    self._state = _NavigateState.ANGLE_TO_GOAL
                    return Twist()
                speed = min(distance, self._max_translation)
                if goal.drive_backwards:
                    speed = -speed
                rotation = angle if abs_angle > self.GO_TO_GOAL_APPLY_ROTATION_ANGLE else 0.0
                return Twist(linear=Vector3(x=speed), angular=Vector3(z=rotation))

            angle = self._bound_rotation(shortest_angular_distance(current_angle, goal.theta))
            if abs(angle) > self.GOAL_ANGLE_CONVERGED:
                return Twist(angular=Vector3(z=angle))
            self._goal_points.popleft()
            if self._goal_points:
                self._state = _NavigateState.ANGLE_TO_GOAL
                return Twist()
            return None

    def _bound_rotation(self, rotation: float) -> float:
        magnitude = abs(rotation)
        if magnitude > self._max_rotation:
            return math.copysign(self._max_rotation, rotation)
        if 0.01 < magnitude < self.MIN_ROTATION:
            return math.copysign(self.MIN_ROTATION, rotation)
        return rotation

    @staticmethod
    def _distance(goal: _GoalPoint, position: Vector3) -> float:
        return math.hypot(goal.x - position.x, goal.y - position.y)

    @staticmethod
    def _diff_angle(goal: _GoalPoint, position: Vector3, current_angle: float) -> float:
        return shortest_angular_distance(
            current_angle, math.atan2(goal.y - position.y, goal.x - position.x)
        )