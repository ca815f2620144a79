"""Slack files API package — HTTP interface to Slack's external upload flow.

WHY: Uploading a file means talking to two hosts with different auth
rules. This package keeps all of that behind one client class.

HOW: SlackFilesClient wraps httpx.Client. Response envelopes are parsed
into the dataclasses defined in models.py.

RULES:
- All HTTP calls go through SlackFilesClient (no direct httpx usage elsewhere)
- Authentication is via Bearer token
"""

from slack_upload.api.client import SlackFilesClient
from slack_upload.api.models import ApiResult, CompletionRequest, UploadSlot

__all__ = ["ApiResult", "CompletionRequest", "SlackFilesClient", "UploadSlot"]
