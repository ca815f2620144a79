"""Exception types raised while uploading a file to Slack.

WHY: The orchestrator reports failures differently depending on where
they come from (local file, Slack's answer, or the network), so each
kind gets its own class under one common base.

RULES:
- Every exception raised on purpose by this package derives from
  SlackUploadError
- RemoteApiError always carries a non-empty error string
- NetworkError chains the underlying httpx exception
"""

from __future__ import annotations

from typing import Optional


class SlackUploadError(Exception):
    """Base class for all upload failures."""


class FileAccessError(SlackUploadError):
    """Raised when the file to upload is missing or unreadable."""


class RemoteApiError(SlackUploadError):
    """Raised when Slack rejects a call.

    Covers JSON responses with ``ok: false``, bodies that are not JSON,
    and non-200 answers from the upload URL. ``error`` is the
    server-provided error code or the raw response body.
    """

    def __init__(self, error: str, status_code: Optional[int] = None) -> None:
        self.error = error or "unknown_error"
        self.status_code = status_code
        super().__init__(self.error)


class NetworkError(SlackUploadError):
    """Raised on transport failures (connection refused, DNS, TLS, timeout)."""
