"""Shared test fixtures for the slack_upload test suite.

WHY: Client, orchestrator and CLI tests all need the same fake Slack
backend and the same sample file. Centralizing them here keeps the
tests focused on behavior.

HOW: FakeSlack answers requests through httpx.MockTransport and records
every request it sees. Its responses can be changed per test before the
upload runs.

RULES:
- No test touches the network
- The sample file is 10240 bytes named shot.png inside tmp_path
- RecordingSink keeps (level, text) pairs in call order
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from slack_upload.api.client import SlackFilesClient

UPLOAD_URL = "https://up.slack.com/x"
TOKEN = "xyz"


class FakeSlack:
    """In-memory stand-in for slack.com and its upload host."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.slot_response: Dict[str, Any] = {
            "ok": True,
            "file_id": "F1",
            "upload_url": UPLOAD_URL,
        }
        self.upload_status = 200
        self.upload_body = "OK - 10240"
        self.complete_response: Dict[str, Any] = {"ok": True, "files": [{"id": "F1"}]}
        self.refuse: Optional[str] = None  # call kind that raises ConnectError
        self.on_request: Optional[Callable[[str], None]] = None

    @staticmethod
    def kind_of(request: httpx.Request) -> str:
        path = request.url.path
        if path.endswith("/files.getUploadURLExternal"):
            return "slot"
        if path.endswith("/files.completeUploadExternal"):
            return "complete"
        if request.url.host == "up.slack.com":
            return "upload"
        return "unknown"

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        kind = self.kind_of(request)
        if self.on_request is not None:
            self.on_request(kind)
        if kind == self.refuse:
            raise httpx.ConnectError("Connection refused", request=request)
        if kind == "slot":
            return httpx.Response(200, json=self.slot_response)
        if kind == "upload":
            return httpx.Response(self.upload_status, text=self.upload_body)
        if kind == "complete":
            return httpx.Response(200, json=self.complete_response)
        return httpx.Response(404, text="not found")

    @property
    def calls(self) -> List[str]:
        return [self.kind_of(r) for r in self.requests]

    def request_of(self, kind: str) -> httpx.Request:
        return next(r for r in self.requests if self.kind_of(r) == kind)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, token: str = TOKEN) -> SlackFilesClient:
        return SlackFilesClient(token, transport=self.transport())

    def client_factory(self) -> Callable[[str], SlackFilesClient]:
        return lambda token: SlackFilesClient(token, transport=self.transport())


class RecordingSink:
    """Sink that stores reports in memory."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def success(self, message: str) -> None:
        self.records.append(("success", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def message(self, message: str) -> None:
        self.records.append(("message", message))

    def of_level(self, level: str) -> List[str]:
        return [text for lvl, text in self.records if lvl == level]


@pytest.fixture
def fake_slack():
    return FakeSlack()


@pytest.fixture
def sample_file(tmp_path):
    """A 10KB PNG-named file."""
    path = tmp_path / "shot.png"
    path.write_bytes(b"\x89PNG" + b"\x00" * (10240 - 4))
    return path


@pytest.fixture
def sink():
    return RecordingSink()
