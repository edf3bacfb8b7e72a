"""Reading and writing the path to blob URL mapping file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from .models import UploadSuccess

logger = logging.getLogger("blob_migrate")

PATH_PREFIXES = ("../images/", "/images/", "images/")
KEYS_PER_IMAGE = len(PATH_PREFIXES)


class MappingNotFoundError(FileNotFoundError):
    """Raised when the rewriter runs before the uploader produced a mapping."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} not found")
        self.path = path


def path_variants(file_name: str) -> List[str]:
    """Return the relative spellings under which markup may reference an image."""
    return [f"{prefix}{file_name}" for prefix in PATH_PREFIXES]


def build_url_mapping(successes: Iterable[UploadSuccess]) -> Dict[str, str]:
    mapping: Dict[str, str] = {}
    for success in successes:
        for key in path_variants(success.record.file_name):
            mapping[key] = success.url
    return mapping


def write_mapping(mapping: Dict[str, str], path: Path) -> None:
    """Serialize the mapping, replacing any previous file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(mapping, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.debug("Wrote %d mapping entries to %s", len(mapping), path)


def load_mapping(path: Path) -> Dict[str, str]:
    path = Path(path)
    if not path.is_file():
        raise MappingNotFoundError(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in data.items()
    ):
        raise ValueError(f"{path} must contain a flat object of string values")
    return data
