"""Single human-readable status line shared with the presentation layer."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class StatusChannel:
    """Holds the current status message and notifies listeners on change.

    The message is rendered verbatim by clients; an empty string means
    there is nothing to report.
    """

    def __init__(self):
        self.message: str = ""
        self._listeners: list[Callable[[str], None]] = []

    def publish(self, message: str) -> None:
        self.message = message
        logger.debug("Status: %s", message or "<cleared>")
        for listener in list(self._listeners):
            listener(message)

    def clear(self) -> None:
        self.publish("")

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)
