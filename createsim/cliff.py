"""Simulated cliff sensors that raise a hazard when the floor drops away."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Sequence

from createsim.messages import HazardDetection, HazardType, Header, LaserScan

CLIFF_SENSORS = ("front_left", "front_right", "side_left", "side_right")


def _minimum_range(ranges: Iterable[float]) -> float:
    return min((r for r in ranges if not math.isnan(r)), default=math.inf)


class Cliff:
    """Turns downward range scans into cliff hazards on per-sensor topics.

    A sensor is bound to every publish topic whose name contains the sensor's
    name; when several topics match, the last one wins.
    """

    DETECTION_THRESHOLD = 0.03
    HAZARD_FRAME = "base_link"

    def __init__(
        self,
        publish: Optional[Callable[[str, HazardDetection], None]] = None,
        subscription_topics: Sequence[str] = (),
        publish_topics: Sequence[str] = (),
    ) -> None:
        self._publish = publish
        self.subscription_topics = list(subscription_topics)
        self.publisher_topics: dict[str, str] = {}
        for topic in publish_topics:
            for sensor in CLIFF_SENSORS:
                if sensor in topic:
                    self.publisher_topics[sensor] = topic

    def cliff_callback(self, msg: LaserScan) -> list[tuple[str, HazardDetection]]:
        """Publish a cliff hazard when the closest reading is beyond the threshold.

        Returns the (topic, message) pairs published. Raises KeyError when the
        scan's frame names a sensor that has no publish topic.
        """
        if _minimum_range(msg.ranges) <= self.DETECTION_THRESHOLD:
            return []
        hazard = HazardDetection(type=HazardType.CLIFF, header=Header(frame_id=self.HAZARD_FRAME))
        published = []
        for sensor in CLIFF_SENSORS:
            if sensor in msg.header.frame_id:
                try:
                    topic = self.publisher_topics[sensor]
                except KeyError:
                    raise KeyError(f"no publish topic for cliff sensor {sensor!r}") from None
                if self._publish is not None:
                    self._publish(topic, hazard)
                published.append((topic, hazard))
        return published