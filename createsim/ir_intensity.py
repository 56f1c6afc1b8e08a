"""Simulated infrared proximity sensors reporting an intensity from range scans."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from createsim.messages import Header, LaserScan

IR_INTENSITY_SENSORS = (
    "front_center_left",
    "front_center_right",
    "front_left",
    "front_right",
    "left",
    "right",
    "side_left",
)

_MAX_INTENSITY = 3500


@dataclass
class IrIntensityMessage:
    header: Header = field(default_factory=Header)
    value: int = 0


def scaled_intensity(detection: float, range_max: float) -> int:
    """Intensity reading for an obstacle at ``detection`` metres.

    The signal decays exponentially with distance: 3500 * exp(-2e * d / range_max),
    truncated to an integer.
    """
    return int(_MAX_INTENSITY * math.exp(detection * (-2 * math.e / range_max)))


def _minimum_range(ranges: Iterable[float]) -> float:
    return min((r for r in ranges if not math.isnan(r)), default=math.inf)


class IrIntensity:
    """Turns IR range scans into intensity readings on per-sensor topics.

    A sensor is bound to every publish topic whose name contains the sensor's
    name; when several topics match, the last one wins. A scan is published for
    every sensor name contained in its frame id.
    """

    def __init__(
        self,
        publish: Optional[Callable[[str, IrIntensityMessage], None]] = None,
        subscription_topics: Sequence[str] = (),
        publish_topics: Sequence[str] = (),
    ) -> None:
        self._publish = publish
        self.subscription_topics = list(subscription_topics)
        self.publisher_topics: dict[str, str] = {}
        for topic in publish_topics:
            for sensor in IR_INTENSITY_SENSORS:
                if sensor in topic:
                    self.publisher_topics[sensor] = topic

    def ir_scan_callback(self, msg: LaserScan) -> list[tuple[str, IrIntensityMessage]]:
        """Publish the intensity for a scan; return the (topic, message) pairs.

        Raises KeyError when the scan's frame names a sensor without a publish topic.
        """
        detection = min(_minimum_range(msg.ranges), msg.range_max)
        reading = IrIntensityMessage(value=scaled_intensity(detection, msg.range_max))
        published = []
        for sensor in IR_INTENSITY_SENSORS:
            if sensor in msg.header.frame_id:
                try:
                    topic = self.publisher_topics[sensor]
                except KeyError:
                    raise KeyError(f"no publish topic for IR sensor {sensor!r}") from None
                if self._publish is not None:
                    self._publish(topic, reading)
                published.append((topic, reading))
        return published