"""Validated upload request and file metadata resolution.

WHY: The pipeline hands over a loose set of options (token, title,
channel, path, and a few optional overrides). Validating them once at
construction means the orchestrator only deals with well-formed input.

HOW: UploadRequest is a dataclass whose __post_init__ rejects blank
required fields. Optional fields carry explicit derivation rules:
file_type from the path's extension, file_name from the path's basename.

RULES:
- api_token, title, channel_id and file_path must be non-blank (ValueError)
- An explicit file_type wins; otherwise the extension after the last "."
  of file_path, case preserved ("report.PDF" -> "PDF")
- No extension -> file_type is None
- An explicit file_name wins; otherwise the basename of file_path
- file_size() raises FileAccessError for missing or unreadable files
- repr() never includes the token
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from slack_upload.errors import FileAccessError


def resolve_file_type(file_path: Union[str, Path], file_type: Optional[str] = None) -> Optional[str]:
    """Return the explicit file type, or the file extension without its dot."""
    if file_type:
        return file_type
    suffix = Path(file_path).suffix
    return suffix[1:] if suffix else None


def resolve_file_name(file_path: Union[str, Path], file_name: Optional[str] = None) -> str:
    """Return the explicit file name, or the basename of the path."""
    if file_name:
        return file_name
    return Path(file_path).name


@dataclass
class UploadRequest:
    """Everything needed to upload one file to one channel."""

    api_token: str = field(repr=False)
    title: str
    channel_id: str
    file_path: Path
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    initial_comment: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("api_token", "title", "channel_id"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError("{} is required".format(name))
        if not str(self.file_path or "").strip():
            raise ValueError("file_path is required")
        self.file_path = Path(self.file_path)

    @property
    def resolved_file_type(self) -> Optional[str]:
        return resolve_file_type(self.file_path, self.file_type)

    @property
    def resolved_file_name(self) -> str:
        return resolve_file_name(self.file_path, self.file_name)

    def file_size(self) -> int:
        """Size of the file in bytes.

        Raises FileAccessError if the path does not point to a readable
        regular file.
        """
        try:
            stat = self.file_path.stat()
        except OSError as exc:
            raise FileAccessError(
                "Cannot access file {}: {}".format(self.file_path, exc.strerror or exc)
            ) from exc

        if not self.file_path.is_file():
            raise FileAccessError("Not a regular file: {}".format(self.file_path))
        if not os.access(self.file_path, os.R_OK):
            raise FileAccessError("File is not readable: {}".format(self.file_path))
        return stat.st_size
