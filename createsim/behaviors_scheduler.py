"""Runs one motion behavior at a time and arbitrates between competing behaviors."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from createsim.geometry import Transform
from createsim.messages import HazardDetectionVector, Twist


@dataclass
class RobotState:
    pose: Transform = field(default_factory=Transform)
    hazards: HazardDetectionVector = field(default_factory=HazardDetectionVector)


RunBehavior = Callable[[RobotState], Optional[Twist]]


@dataclass
class BehaviorsData:
    """What a behavior hands to the scheduler.

    ``run_func`` produces a command each iteration, ``is_done_func`` reports
    completion, ``cleanup_func`` runs when another behavior pre-empts this one.
    """

    run_func: Optional[RunBehavior] = None
    is_done_func: Optional[Callable[[], bool]] = None
    cleanup_func: Optional[Callable[[], None]] = None
    stop_on_new_behavior: bool = False
    apply_backup_limits: bool = False


class BehaviorsScheduler:
    """Holds the single active behavior."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._has_behavior = False
        self._current = BehaviorsData()

    def set_behavior(self, data: BehaviorsData) -> bool:
        """Install a behavior; return False when it is incomplete or the current one refuses."""
        with self._lock:
            if data.run_func is None or data.is_done_func is None:
                return False
            if self._has_behavior:
                if not self._current.stop_on_new_behavior:
                    return False
                if self._current.cleanup_func is not None:
                    self._current.cleanup_func()
            self._has_behavior = True
            self._current = data
            return True

    def has_behavior(self) -> bool:
        return self._has_behavior

    def apply_backup_limits(self) -> bool:
        with self._lock:
            return self._current.apply_backup_limits

    def stop_on_new_behavior(self) -> bool:
        with self._lock:
            return self._current.stop_on_new_behavior

    def run_behavior(self, current_state: RobotState) -> Optional[Twist]:
        """Run one iteration of the active behavior, if any."""
        if not self._has_behavior:
            return None
        with self._lock:
            output = self._current.run_func(current_state)
            if self._current.is_done_func():
                self._has_behavior = False
            return output