import json

import pytest
import requests

from blob_migrate.models import BlobInfo
from blob_migrate.storage import BlobStoreError


class FakeBlobClient:
    """Records put calls and returns deterministic URLs."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def put(self, pathname, data, content_type):
        self.calls.append((pathname, data, content_type))
        if pathname in self.fail_on:
            raise BlobStoreError("HTTP 429: rate limited")
        return BlobInfo(url=f"https://blob.example/{pathname}", pathname=pathname)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)


class FakeSession:
    """Stands in for ``requests.Session``; replays queued responses."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_client():
    return FakeBlobClient()


@pytest.fixture
def images_dir(tmp_path):
    directory = tmp_path / "images"
    directory.mkdir()
    (directory / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (directory / "hero.JPG").write_bytes(b"\xff\xd8\xff\xe0fake")
    (directory / "notes.txt").write_text("not an image")
    (directory / "nested").mkdir()
    (directory / "nested" / "inner.png").write_bytes(b"ignored")
    return directory


@pytest.fixture
def write_json():
    def _write(path, payload):
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
