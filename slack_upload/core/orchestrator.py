"""Upload orchestrator: the three-call sequence that shares a file into Slack.

WHY: A release pipeline needs to push one artifact (a build, a screenshot
archive, a report) into a channel and be told whether it worked, without
the pipeline itself crashing because Slack had a bad moment.

HOW: UploadOrchestrator.upload() walks a linear sequence of stages:
  RESOLVING_METADATA  — file type, file name and size of the local file
  REQUESTING_SLOT     — files.getUploadURLExternal -> UploadSlot
  UPLOADING_BYTES     — multipart POST of the file to the slot's URL
  COMPLETING_UPLOAD   — files.completeUploadExternal into the channel
  DONE
Each stage returns its own value, which is threaded into the next stage.
Failures are caught at the upload() boundary and recorded in an
UploadOutcome; the final report is computed from that outcome.

RULES:
- Stages never run out of order, and a failed stage stops the sequence
- upload() never raises; errors go to the sink as "Exception: ..." plus a
  "Backtrace:" entry
- The final "Successfully sent file to Slack" report is emitted only when
  every stage succeeded, unless always_report_success is set, in which
  case it is emitted even after a failure
- One SlackFilesClient per upload() call, closed on every exit path
"""

from __future__ import annotations

import enum
import logging
import traceback
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from slack_upload.api.client import SlackFilesClient
from slack_upload.api.models import CompletionRequest, UploadSlot
from slack_upload.core.request import UploadRequest
from slack_upload.core.sink import LoggingSink, MessageSink

logger = logging.getLogger(__name__)

FINAL_SUCCESS_MESSAGE = "Successfully sent file to Slack"


class UploadStage(str, enum.Enum):
    """Stages of one upload, in execution order."""

    RESOLVING_METADATA = "resolving_metadata"
    REQUESTING_SLOT = "requesting_slot"
    UPLOADING_BYTES = "uploading_bytes"
    COMPLETING_UPLOAD = "completing_upload"
    DONE = "done"


@dataclass
class FileMetadata:
    file_name: str
    file_type: Optional[str]
    size: int


@dataclass
class UploadOutcome:
    """Aggregate result of one upload() call.

    RULES:
    - stage is the stage being executed when the sequence stopped
      (DONE when everything succeeded)
    - completed lists the stages that finished, in order
    - error is the exception that stopped the sequence, or None
    """

    stage: UploadStage = UploadStage.RESOLVING_METADATA
    completed: List[UploadStage] = field(default_factory=list)
    file_id: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.stage is UploadStage.DONE

    def advance(self, next_stage: UploadStage) -> None:
        self.completed.append(self.stage)
        self.stage = next_stage


ClientFactory = Callable[[str], SlackFilesClient]


class UploadOrchestrator:
    """Runs the upload sequence for one file and reports the outcome.

    WHY: Keeps the ordering, error capture and reporting policy in one
    place so the CLI (or any other caller) only builds a request.

    HOW: ``client_factory`` builds a SlackFilesClient from the token; tests
    inject one backed by httpx.MockTransport. ``sink`` receives every
    user-facing report.

    RULES:
    - always_report_success=False (default): success is reported only
      when all three remote calls succeeded
    - always_report_success=True: the final success line is emitted
      unconditionally, after any error lines
    """

    def __init__(
        self,
        sink: Optional[MessageSink] = None,
        client_factory: Optional[ClientFactory] = None,
        always_report_success: bool = False,
    ) -> None:
        self._sink = sink or LoggingSink()
        self._client_factory = client_factory or SlackFilesClient
        self._always_report_success = always_report_success

    def upload(self, request: UploadRequest) -> UploadOutcome:
        outcome = UploadOutcome()
        try:
            self._run(request, outcome)
        except Exception as exc:
            logger.debug("Upload stopped at %s", outcome.stage.value, exc_info=True)
            outcome.error = exc
            self._report_failure(exc)

        self._report_final(outcome)
        return outcome

    # ------------------------------------------------------------------
    # Sequence
    # ------------------------------------------------------------------

    def _run(self, request: UploadRequest, outcome: UploadOutcome) -> None:
        metadata = self._resolve_metadata(request)
        outcome.advance(UploadStage.REQUESTING_SLOT)

        with self._client_factory(request.api_token) as client:
            slot = client.get_upload_url(metadata.file_name, metadata.size)
            outcome.file_id = slot.file_id
            outcome.advance(UploadStage.UPLOADING_BYTES)

            self._upload_bytes(client, request, slot, metadata)
            outcome.advance(UploadStage.COMPLETING_UPLOAD)

            completion = CompletionRequest(
                file_id=slot.file_id,
                title=request.title,
                channel_id=request.channel_id,
                initial_comment=request.initial_comment,
            )
            self._sink.message("Completing upload: {}".format(completion.files_json()))
            client.complete_upload(completion)
            outcome.advance(UploadStage.DONE)

    def _resolve_metadata(self, request: UploadRequest) -> FileMetadata:
        return FileMetadata(
            file_name=request.resolved_file_name,
            file_type=request.resolved_file_type,
            size=request.file_size(),
        )

    def _upload_bytes(
        self,
        client: SlackFilesClient,
        request: UploadRequest,
        slot: UploadSlot,
        metadata: FileMetadata,
    ) -> None:
        client.upload_file(
            slot.upload_url,
            request.file_path,
            metadata.file_name,
            content_type=metadata.file_type,
        )
        self._sink.success("Uploaded file to Slack: id={}".format(slot.file_id))

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _report_failure(self, exc: BaseException) -> None:
        self._sink.error("Exception: {}".format(exc))
        frames = [
            line.rstrip()
            for line in traceback.format_tb(exc.__traceback__)
        ]
        if frames:
            self._sink.error("Backtrace:\n\t{}".format("\n\t".join(frames)))

    def _report_final(self, outcome: UploadOutcome) -> None:
        if outcome.ok:
            self._sink.success("{}: id={}".format(FINAL_SUCCESS_MESSAGE, outcome.file_id))
        elif self._always_report_success:
            self._sink.success(FINAL_SUCCESS_MESSAGE)
