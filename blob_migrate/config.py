"""Configuration objects and constants for the migration tools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

IMAGES_DIR = "images"
MAPPING_FILE = "blob-url-mapping.json"
MARKUP_EXTENSION = ".html"
TOKEN_ENV_VAR = "BLOB_READ_WRITE_TOKEN"
API_URL_ENV_VAR = "VERCEL_BLOB_API_URL"
DEFAULT_BLOB_API_URL = "https://blob.vercel-storage.com"
DEFAULT_UPLOAD_DELAY = 0.1

TOKEN_HELP = f"""Please follow these steps:
1. Go to https://vercel.com/dashboard
2. Select your project
3. Go to Settings > Blob
4. Copy your Blob Read-Write Token
5. Run: export {TOKEN_ENV_VAR}="your-token-here"
6. Then run this script again"""


class MissingCredentialError(RuntimeError):
    """Raised when the blob store token is not available."""

    def __init__(self, variable: str = TOKEN_ENV_VAR) -> None:
        super().__init__(f"{variable} environment variable not set")
        self.variable = variable


@dataclass
class UploadConfig:
    """Settings for uploading a local image directory to the blob store."""

    images_dir: Path
    mapping_path: Path
    token: str
    delay_seconds: float = DEFAULT_UPLOAD_DELAY
    api_url: str = DEFAULT_BLOB_API_URL


@dataclass
class RewriteConfig:
    """Settings for rewriting markup files with blob URLs."""

    root: Path
    mapping_path: Path
    extension: str = MARKUP_EXTENSION


def resolve_token(environ: Mapping[str, str]) -> str:
    """Return the blob store token from ``environ`` or raise."""
    token = (environ.get(TOKEN_ENV_VAR) or "").strip()
    if not token:
        raise MissingCredentialError()
    return token


def resolve_api_url(environ: Mapping[str, str]) -> str:
    override = environ.get(API_URL_ENV_VAR)
    return (override or DEFAULT_BLOB_API_URL).rstrip("/")
