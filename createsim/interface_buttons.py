"""Turns raw simulator button codes into the robot's interface-buttons state."""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Optional

from createsim.messages import Header

_log = logging.getLogger(__name__)


class Create3Buttons(IntEnum):
    """Codes sent by the simulator's button panel."""

    NONE = 0
    BUTTON_1 = 1
    BUTTON_POWER = 2
    BUTTON_2 = 3


@dataclass
class ButtonState:
    header: Header = field(default_factory=Header)
    is_pressed: bool = False
    last_start_pressed_time: float = 0.0
    last_pressed_duration: float = 0.0

    def press(self, now: float) -> None:
        self.is_pressed = True
        self.last_start_pressed_time = now

    def release(self, now: float) -> None:
        """Release the button if it is held, recording how long it was held."""
        if self.is_pressed:
            self.last_pressed_duration = now - self.last_start_pressed_time
            self.is_pressed = False


@dataclass
class InterfaceButtonsMessage:
    header: Header = field(default_factory=Header)
    button_1: ButtonState = field(default_factory=ButtonState)
    button_power: ButtonState = field(default_factory=ButtonState)
    button_2: ButtonState = field(default_factory=ButtonState)


class InterfaceButtons:
    """Keeps the state of the three robot buttons and publishes it on every update."""

    SUBSCRIPTION_TOPIC = "_internal/create3_buttons"
    PUBLISHER_TOPIC = "interface_buttons"

    def __init__(
        self,
        publish: Optional[Callable[[InterfaceButtonsMessage], None]] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._publish = publish
        self._clock = clock
        self.state = InterfaceButtonsMessage()

    def create3_buttons_callback(self, data: int) -> InterfaceButtonsMessage:
        """Apply one button code and publish a copy of the resulting state."""
        try:
            button = Create3Buttons(data)
        except ValueError:
            _log.error("Invalid create3 button %d", data)
        else:
            now = self._clock()
            if button is Create3Buttons.NONE:
                for state in (self.state.button_1, self.state.button_power, self.state.button_2):
                    state.release(now)
            elif button is Create3Buttons.BUTTON_1:
                self.state.button_1.press(now)
            elif button is Create3Buttons.BUTTON_POWER:
                self.state.button_power.press(now)
            else:
                self.state.button_2.press(now)

        message = copy.deepcopy(self.state)
        if self._publish is not None:
            self._publish(message)
        return message