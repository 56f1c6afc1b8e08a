"""Button panel that publishes the robot's button presses on a namespaced topic."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from typing import Callable, Optional, Union

_log = logging.getLogger(__name__)

ButtonPublisher = Callable[[int], bool]
Advertiser = Callable[[str], Optional[ButtonPublisher]]

NOTIFY_DURATION_MS = 4000


def _loopback_advertise(_topic: str) -> ButtonPublisher:
    return lambda _data: True


def _log_notification(text: str, duration_ms: int) -> None:
    _log.info("Notification (%d ms): %s", duration_ms, text)


class Create3Hmi:
    """Publishes button codes on ``<namespace>/create3_buttons``.

    ``advertise`` returns a publisher for a topic, or None when advertising
    fails; ``notify`` shows a message to the user for a duration in milliseconds.
    """

    DEFAULT_TITLE = "Create3 HMI"
    TOPIC_SUFFIX = "/create3_buttons"

    def __init__(
        self,
        advertise: Advertiser = _loopback_advertise,
        notify: Callable[[str, int], None] = _log_notification,
        title: str = "",
    ) -> None:
        self._advertise = advertise
        self._notify = notify
        self.title = title
        self._namespace = ""
        self.topic = self.TOPIC_SUFFIX
        self.namespace_changed_listeners: list[Callable[[], None]] = []
        self._publisher = self._advertise(self.topic)

    @property
    def namespace(self) -> str:
        return self._namespace

    @namespace.setter
    def namespace(self, name: str) -> None:
        self.set_namespace(name)

    def load_config(
        self, plugin_xml: Union[str, ElementTree.Element, None]
    ) -> None:
        """Apply the plugin configuration: a default title and an optional namespace."""
        if not self.title:
            self.title = self.DEFAULT_TITLE
        if plugin_xml is None:
            return
        element = (
            ElementTree.fromstring(plugin_xml) if isinstance(plugin_xml, str) else plugin_xml
        )
        namespace_element = element.find("namespace")
        if namespace_element is not None and namespace_element.text is not None:
            self.set_namespace(namespace_element.text)

    def set_namespace(self, name: str) -> None:
        """Switch to a new namespace and re-advertise the button topic there."""
        self._namespace = name
        self.topic = name + self.TOPIC_SUFFIX
        _log.info("A new robot name has been entered, publishing on topic: '%s'", self.topic)

        self._publisher = self._advertise(self.topic)
        if self._publisher is None:
            self._notify(f"Error when advertising topic: {self.topic}", NOTIFY_DURATION_MS)
            _log.error("Error when advertising topic: %s", self.topic)
        else:
            self._notify(f"Advertising topic: '<b>{self.topic}</b>'", NOTIFY_DURATION_MS)
        for listener in self.namespace_changed_listeners:
            listener()

    def on_create3_button(self, button: int) -> bool:
        """Publish a button code; return whether it was published."""
        published = self._publisher is not None and bool(self._publisher(button))
        if not published:
            _log.error("Int32 message couldn't be published at topic: %s", self.topic)
        return published