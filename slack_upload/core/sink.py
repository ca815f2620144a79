"""Message sinks for user-facing upload reports.

WHY: The orchestrator reports progress and outcome but does not decide
how those reports are shown. A pipeline may want log lines, a test may want
to inspect the messages.

RULES:
- A sink exposes success(), error() and message(); return values are ignored
- LoggingSink maps success/message to INFO and error to ERROR
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol


class MessageSink(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def message(self, message: str) -> None: ...


class LoggingSink:
    """Sink that writes every report to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("slack_upload")

    def success(self, message: str) -> None:
        self._logger.info(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def message(self, message: str) -> None:
        self._logger.info(message)

