"""Data models used throughout the upload and rewrite pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


@dataclass
class ImageRecord:
    """Local image discovered in the images directory."""

    path: Path
    file_name: str


@dataclass
class BlobInfo:
    """Blob metadata returned by the storage API."""

    url: str
    pathname: str
    content_type: Optional[str] = None
    download_url: Optional[str] = None


@dataclass
class UploadSuccess:
    record: ImageRecord
    url: str
    ok: bool = field(default=True, init=False)


@dataclass
class UploadFailure:
    record: ImageRecord
    reason: str
    ok: bool = field(default=False, init=False)


UploadResult = Union[UploadSuccess, UploadFailure]


@dataclass
class UploadSummary:
    """Aggregated outcome of an upload run."""

    found: int
    results: List[UploadResult] = field(default_factory=list)

    @property
    def successes(self) -> List[UploadSuccess]:
        return [result for result in self.results if isinstance(result, UploadSuccess)]

    @property
    def failures(self) -> List[UploadFailure]:
        return [result for result in self.results if isinstance(result, UploadFailure)]

    @property
    def succeeded(self) -> int:
        return len(self.successes)

    @property
    def failed(self) -> int:
        return len(self.failures)


@dataclass
class FileRewrite:
    """Replacement count for a single markup file."""

    path: Path
    replacements: int


@dataclass
class RewriteSummary:
    """Aggregated outcome of a rewrite run."""

    files: List[FileRewrite] = field(default_factory=list)

    @property
    def total_replacements(self) -> int:
        return sum(item.replacements for item in self.files)

    @property
    def files_changed(self) -> int:
        return sum(1 for item in self.files if item.replacements)
