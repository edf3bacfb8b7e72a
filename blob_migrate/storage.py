"""Thin client for the Vercel Blob HTTP API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional
from urllib.parse import quote

import requests

from .config import DEFAULT_BLOB_API_URL
from .models import BlobInfo

logger = logging.getLogger("blob_migrate")

API_VERSION = "7"


class BlobStoreError(RuntimeError):
    """Raised when the blob store rejects or fails a request."""


def _blob_from_json(payload: Dict[str, Any]) -> BlobInfo:
    try:
        url = payload["url"]
    except (KeyError, TypeError) as exc:
        raise BlobStoreError(f"Malformed blob response: {payload!r}") from exc
    return BlobInfo(
        url=url,
        pathname=payload.get("pathname", ""),
        content_type=payload.get("contentType"),
        download_url=payload.get("downloadUrl"),
    )


class BlobClient:
    """Upload and list public blobs with a read-write token."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_BLOB_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "authorization": f"Bearer {self._token}",
            "x-api-version": API_VERSION,
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        headers = self._headers()
        headers.update(kwargs.pop("headers", {}))
        try:
            resp = self._session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise BlobStoreError(self._error_message(exc.response)) from exc
        except requests.RequestException as exc:
            raise BlobStoreError(str(exc)) from exc
        try:
            payload = resp.json()
        except ValueError as exc:
            raise BlobStoreError(f"Invalid JSON from blob store ({method} {url})") from exc
        if not isinstance(payload, dict):
            raise BlobStoreError(f"Unexpected response from blob store ({method} {url})")
        return payload

    @staticmethod
    def _error_message(resp: Optional[requests.Response]) -> str:
        if resp is None:
            return "Blob store request failed"
        message = None
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        return f"HTTP {resp.status_code}: {message or resp.reason or 'request failed'}"

    def put(self, pathname: str, data: bytes, content_type: str) -> BlobInfo:
        """Store ``data`` publicly under ``pathname`` without a random suffix."""
        url = f"{self.api_url}/{quote(pathname)}"
        logger.debug("PUT %s (%d bytes, %s)", url, len(data), content_type)
        payload = self._request(
            "PUT",
            url,
            data=data,
            headers={
                "x-content-type": content_type,
                "x-add-random-suffix": "0",
                "x-vercel-blob-access": "public",
            },
        )
        return _blob_from_json(payload)

    def list_blobs(
        self, prefix: Optional[str] = None, limit: Optional[int] = None
    ) -> Iterator[BlobInfo]:
        """Yield every blob in the store, following pagination cursors."""
        cursor: Optional[str] = None
        while True:
            params: Dict[str, Any] = {}
            if prefix:
                params["prefix"] = prefix
            if limit:
                params["limit"] = limit
            if cursor:
                params["cursor"] = cursor
            payload = self._request("GET", self.api_url, params=params)
            for item in payload.get("blobs") or []:
                yield _blob_from_json(item)
            cursor = payload.get("cursor")
            if not payload.get("hasMore") or not cursor:
                break
