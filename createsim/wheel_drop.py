"""Simulated wheel-drop switches with hysteresis on the suspension joint travel."""

from __future__ import annotations

import time
from typing import Callable, Optional

from createsim.messages import HazardDetection, HazardType, Header, JointState


class WheelDrop:
    """Reports a wheel-drop hazard for each wheel whose suspension has dropped."""

    DETECTION_THRESHOLD = 0.03
    LOWER_LIMIT = DETECTION_THRESHOLD * 0.75
    UPPER_LIMIT = DETECTION_THRESHOLD * 0.95
    JOINTS = ("wheel_drop_left_joint", "wheel_drop_right_joint")
    TOPICS = {
        "wheel_drop_left_joint": "_internal/wheel_drop/left_wheel/event",
        "wheel_drop_right_joint": "_internal/wheel_drop/right_wheel/event",
    }

    def __init__(
        self,
        publish: Optional[Callable[[HazardDetection], None]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._publish = publish
        self._clock = clock
        self.wheeldrop_detected = {joint: False for joint in self.JOINTS}
        self.displacement = {joint: 0.0 for joint in self.JOINTS}

    def joint_state_callback(self, msg: JointState) -> list[HazardDetection]:
        """Update joint travel and publish a hazard for every dropped wheel."""
        for index, name in enumerate(msg.name):
            if name in self.displacement:
                self.displacement[name] = msg.position[index]

        hazards = []
        for joint in self.JOINTS:
            detected = self.wheeldrop_detected[joint]
            travel = self.displacement[joint]
            if not detected and travel >= self.UPPER_LIMIT:
                self.wheeldrop_detected[joint] = True
            elif detected and travel <= self.LOWER_LIMIT:
                self.wheeldrop_detected[joint] = False

            if self.wheeldrop_detected[joint]:
                hazard = HazardDetection(
                    type=HazardType.WHEEL_DROP,
                    header=Header(stamp=self._clock(), frame_id=joint),
                )
                if self._publish is not None:
                    self._publish(hazard)
                hazards.append(hazard)
        return hazards