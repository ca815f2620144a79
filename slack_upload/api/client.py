"""Synchronous HTTP client for Slack's external file upload API.

WHY: Uploading a file to Slack takes three calls against two different
hosts: request an upload URL, send the bytes there, then complete the
upload. This module keeps the HTTP details (auth header, query encoding,
JSON envelopes, transport errors) out of the orchestrator.

HOW: Wraps httpx.Client. SlackFilesClient is a context manager — enter it
to open the connection pool, exit to close it. Each remote call is a
separate method returning its own parsed result, so no response object is
ever shared between calls.

RULES:
- Always use the context manager (with SlackFilesClient(token) as client:)
- Slack API methods get "Authorization: Bearer <token>"; the upload URL does not
- httpx transport errors are re-raised as NetworkError
- Non-JSON bodies from Slack API methods raise RemoteApiError
- The byte upload succeeds only on HTTP 200
- The token is never logged
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from slack_upload.api.models import ApiResult, CompletionRequest, UploadSlot
from slack_upload.config import (
    COMPLETE_UPLOAD_METHOD,
    GET_UPLOAD_URL_METHOD,
    SLACK_API_BASE_URL,
    load_http_timeout,
)
from slack_upload.errors import FileAccessError, NetworkError, RemoteApiError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class SlackFilesClient:
    """Client for files.getUploadURLExternal / upload URL / files.completeUploadExternal.

    WHY: Gives the orchestrator one typed method per remote step and a
    single place where httpx failures are translated into package errors.

    HOW: Holds an httpx.Client for the lifetime of the context manager.
    Tests pass an httpx.MockTransport through ``transport``.

    RULES:
    - api_token must be non-empty
    - base_url defaults to SLACK_API_BASE_URL from config
    - timeout defaults to load_http_timeout() from config
    """

    def __init__(
        self,
        api_token: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if not api_token:
            raise ValueError("Slack API token must not be empty")
        self._api_token = api_token
        self._base_url = (base_url or SLACK_API_BASE_URL).rstrip("/")
        self._timeout = timeout if timeout is not None else load_http_timeout()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> SlackFilesClient:
        self._client = httpx.Client(timeout=self._timeout, transport=self._transport)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            self._client.close()
            self._client = None

    def _ensure_client(self) -> httpx.Client:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "SlackFilesClient must be used as a context manager: "
                "with SlackFilesClient(token) as client: ..."
            )
        return self._client

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": "Bearer {}".format(self._api_token)}

    def _method_url(self, method: str) -> str:
        return "{}/{}".format(self._base_url, method)

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send one request, translating transport failures into NetworkError."""
        client = self._ensure_client()
        try:
            return client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise NetworkError("{} {} failed: {}".format(method, url, exc)) from exc

    @staticmethod
    def _parse_result(response: httpx.Response) -> ApiResult:
        try:
            data = response.json()
        except ValueError:
            raise RemoteApiError(response.text, status_code=response.status_code)
        return ApiResult.from_dict(data)

    # ------------------------------------------------------------------
    # Step 1: Request upload URL
    # ------------------------------------------------------------------

    def get_upload_url(self, filename: str, length: int) -> UploadSlot:
        """Ask Slack for a one-time upload URL for a file of ``length`` bytes.

        RULES:
        - Query parameters: filename, length
        - ok=false raises RemoteApiError with Slack's error code
        - A success missing file_id or upload_url raises RemoteApiError
        """
        headers = self._auth_headers()
        headers["Content-Type"] = "application/json"
        logger.debug("Requesting upload URL for %s (%d bytes)", filename, length)

        response = self._send(
            "GET",
            self._method_url(GET_UPLOAD_URL_METHOD),
            params={"filename": filename, "length": length},
            headers=headers,
        )
        slot = UploadSlot.from_result(self._parse_result(response))
        logger.debug("Got upload slot %s", slot.file_id)
        return slot

    # ------------------------------------------------------------------
    # Step 2: Upload bytes
    # ------------------------------------------------------------------

    def upload_file(
        self,
        upload_url: str,
        file_path: Path,
        filename: str,
        content_type: Optional[str] = None,
    ) -> None:
        """POST the file content as multipart to the upload URL.

        WHY: The upload URL is a pre-signed endpoint on a separate host,
        so it gets no bearer header and answers with a bare status code.

        HOW: Streams the file from an open handle that is closed before
        this method returns. content_type=None sends the part as
        application/octet-stream; the display name never decides the type.

        RULES:
        - Only this call's own response is inspected
        - A file that cannot be opened raises FileAccessError
        - Any status other than 200 raises RemoteApiError with the body
        """
        logger.debug("Uploading %s to %s", filename, upload_url)
        try:
            f = open(file_path, "rb")
        except OSError as exc:
            raise FileAccessError(
                "Cannot open file {}: {}".format(file_path, exc.strerror or exc)
            ) from exc

        with f:
            upload_response = self._send(
                "POST",
                upload_url,
                files={"file": (filename, f, content_type or DEFAULT_CONTENT_TYPE)},
            )

        if upload_response.status_code != 200:
            raise RemoteApiError(
                "Error uploading file: {}".format(upload_response.text),
                status_code=upload_response.status_code,
            )

    # ------------------------------------------------------------------
    # Step 3: Complete upload
    # ------------------------------------------------------------------

    def complete_upload(self, completion: CompletionRequest) -> ApiResult:
        """Share the uploaded file into the channel.

        RULES:
        - files, channel_id and initial_comment are sent as query parameters
        - ok=false raises RemoteApiError with Slack's error code
        """
        logger.debug("Completing upload %s into %s", completion.file_id, completion.channel_id)
        response = self._send(
            "POST",
            self._method_url(COMPLETE_UPLOAD_METHOD),
            params=completion.to_params(),
            headers=self._auth_headers(),
        )
        result = self._parse_result(response)
        result.raise_for_error()
        return result
