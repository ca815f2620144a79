"""Command-line interface for the Slack file uploader.

WHY: Build and release pipelines call the uploader as a single command
step. The CLI turns flags into a validated UploadRequest, runs the
orchestrator, and maps the outcome to an exit status the pipeline can act
on.

HOW: argparse collects the options; the token falls back to
SLACK_API_TOKEN (via config.load_api_token). Reports go through a
LoggingSink configured with logging.basicConfig.

RULES:
- --title, --channel and --file-path are required
- --file-type, --file-name and --initial-comment are optional
- Exit status 0 when the upload succeeded, 1 otherwise
- With --always-report-success a failed upload still logs the final
  success line and exits 0
- Invalid arguments, a missing token or a bad SLACK_HTTP_TIMEOUT print
  "Error: ..." to stderr and exit 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from slack_upload.api.client import SlackFilesClient
from slack_upload.config import load_api_token, load_http_timeout
from slack_upload.core.orchestrator import UploadOrchestrator
from slack_upload.core.request import UploadRequest
from slack_upload.core.sink import LoggingSink


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="slack_upload",
        description="Upload a file to a Slack channel.",
    )

    parser.add_argument(
        "--slack-api-token",
        default=None,
        help="Slack API token (default: SLACK_API_TOKEN environment variable).",
    )
    parser.add_argument("--title", required=True, help="Title of the file.")
    parser.add_argument("--channel", required=True, help="Channel ID.")
    parser.add_argument("--file-path", required=True, help="Path to the file.")
    parser.add_argument(
        "--file-type",
        default=None,
        help="A file type identifier (default: the file extension).",
    )
    parser.add_argument(
        "--file-name",
        default=None,
        help="Filename of the file (default: basename of --file-path).",
    )
    parser.add_argument(
        "--initial-comment",
        default=None,
        help="Initial comment to add to the file.",
    )
    parser.add_argument(
        "--always-report-success",
        action="store_true",
        help="Log the final success message and exit 0 even if a step failed.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def build_request(args: argparse.Namespace) -> UploadRequest:
    """Build a validated UploadRequest from parsed arguments.

    Raises ValueError if the token is missing or a required value is blank.
    """
    token = args.slack_api_token or load_api_token()
    return UploadRequest(
        api_token=token,
        title=args.title,
        channel_id=args.channel,
        file_path=args.file_path,
        file_name=args.file_name,
        file_type=args.file_type,
        initial_comment=args.initial_comment,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m slack_upload`` and the slack-upload script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        request = build_request(args)
        timeout = load_http_timeout()
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    orchestrator = UploadOrchestrator(
        sink=LoggingSink(),
        client_factory=lambda token: SlackFilesClient(token, timeout=timeout),
        always_report_success=args.always_report_success,
    )
    outcome = orchestrator.upload(request)

    if not outcome.ok and not args.always_report_success:
        sys.exit(1)


if __name__ == "__main__":
    main()
