"""Core upload logic — request validation, reporting sinks, orchestration.

RULES:
- Nothing in core talks HTTP directly; that is SlackFilesClient's job
- UploadOrchestrator.upload() never raises
"""

from slack_upload.core.orchestrator import UploadOrchestrator, UploadOutcome, UploadStage
from slack_upload.core.request import UploadRequest
from slack_upload.core.sink import LoggingSink, MessageSink

__all__ = [
    "LoggingSink",
    "MessageSink",
    "UploadOrchestrator",
    "UploadOutcome",
    "UploadRequest",
    "UploadStage",
]
