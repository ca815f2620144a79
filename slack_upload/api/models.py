"""Slack files API response dataclasses.

WHY: Every Slack Web API method answers with the same envelope
(``{"ok": bool, "error": str, ...}``). Parsing it once into a typed
object keeps the ok/error handling identical for every call.

HOW: ApiResult wraps the envelope and keeps the full payload for
method-specific fields. UploadSlot is built from a successful
files.getUploadURLExternal result. CompletionRequest renders the
parameters of files.completeUploadExternal.

RULES:
- ApiResult.ok is False whenever the "ok" field is missing or falsy
- A failed ApiResult always has a non-empty error ("unknown_error" fallback)
- UploadSlot requires both file_id and upload_url
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from slack_upload.errors import RemoteApiError

UNKNOWN_ERROR = "unknown_error"


@dataclass
class ApiResult:
    """Parsed envelope of a Slack Web API JSON response."""

    ok: bool
    error: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ApiResult:
        """Parse the envelope from a decoded JSON body.

        RULES:
        - Non-dict bodies are treated as failures
        - error is only set for failures
        """
        if not isinstance(data, dict):
            return cls(ok=False, error=UNKNOWN_ERROR, payload={})

        ok = bool(data.get("ok"))
        error = None
        if not ok:
            error = str(data.get("error") or UNKNOWN_ERROR)
        return cls(ok=ok, error=error, payload=data)

    def raise_for_error(self) -> None:
        if not self.ok:
            raise RemoteApiError(self.error or UNKNOWN_ERROR)


@dataclass
class UploadSlot:
    """A one-time destination for file bytes issued by Slack.

    Produced by files.getUploadURLExternal and consumed exactly once by
    the byte upload.
    """

    file_id: str
    upload_url: str

    @classmethod
    def from_result(cls, result: ApiResult) -> UploadSlot:
        result.raise_for_error()
        file_id = result.payload.get("file_id")
        upload_url = result.payload.get("upload_url")
        if not file_id or not upload_url:
            raise RemoteApiError("Upload URL response is missing file_id or upload_url")
        return cls(file_id=str(file_id), upload_url=str(upload_url))


@dataclass
class CompletionRequest:
    """Parameters for files.completeUploadExternal.

    WHY: The completion call binds the uploaded file to a channel. Its
    ``files`` parameter is a JSON array, so it is rendered here rather
    than by the HTTP layer.

    RULES:
    - files_json() is compact JSON: [{"id":"F1","title":"My File"}]
    - initial_comment is omitted from the query when None
    """

    file_id: str
    title: str
    channel_id: str
    initial_comment: Optional[str] = None

    def files_json(self) -> str:
        return json.dumps(
            [{"id": self.file_id, "title": self.title}],
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def to_params(self) -> Dict[str, str]:
        params = {
            "files": self.files_json(),
            "channel_id": self.channel_id,
        }
        if self.initial_comment is not None:
            params["initial_comment"] = self.initial_comment
        return params
