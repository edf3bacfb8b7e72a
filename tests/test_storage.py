import pytest
import requests

from blob_migrate.storage import BlobClient, BlobStoreError

from conftest import FakeResponse, FakeSession


def test_put_sends_public_stable_name_request():
    session = FakeSession(
        [
            FakeResponse(
                payload={
                    "url": "https://abc.public.blob.vercel-storage.com/logo.png",
                    "downloadUrl": "https://abc.public.blob.vercel-storage.com/logo.png?download=1",
                    "pathname": "logo.png",
                    "contentType": "image/png",
                }
            )
        ]
    )
    client = BlobClient("secret", "https://blob.test/", session=session)

    blob = client.put("logo.png", b"data", "image/png")

    assert blob.url == "https://abc.public.blob.vercel-storage.com/logo.png"
    assert blob.content_type == "image/png"
    method, url, kwargs = session.requests[0]
    assert method == "PUT"
    assert url == "https://blob.test/logo.png"
    assert kwargs["data"] == b"data"
    headers = kwargs["headers"]
    assert headers["authorization"] == "Bearer secret"
    assert headers["x-content-type"] == "image/png"
    assert headers["x-add-random-suffix"] == "0"
    assert headers["x-vercel-blob-access"] == "public"


def test_put_quotes_pathname():
    session = FakeSession([FakeResponse(payload={"url": "https://x/a b.png"})])
    BlobClient("t", "https://blob.test", session=session).put("a b.png", b"", "image/png")
    assert session.requests[0][1] == "https://blob.test/a%20b.png"


def test_put_http_error_carries_provider_message():
    session = FakeSession(
        [
            FakeResponse(
                status_code=403,
                reason="Forbidden",
                payload={"error": {"code": "forbidden", "message": "Access denied"}},
            )
        ]
    )
    client = BlobClient("bad", session=session)
    with pytest.raises(BlobStoreError, match="HTTP 403: Access denied"):
        client.put("logo.png", b"data", "image/png")


def test_put_transport_error():
    session = FakeSession([requests.ConnectionError("connection reset")])
    with pytest.raises(BlobStoreError, match="connection reset"):
        BlobClient("t", session=session).put("logo.png", b"", "image/png")


def test_put_malformed_response():
    session = FakeSession([FakeResponse(payload={"pathname": "logo.png"})])
    with pytest.raises(BlobStoreError, match="Malformed"):
        BlobClient("t", session=session).put("logo.png", b"", "image/png")


def test_list_blobs_follows_cursor():
    session = FakeSession(
        [
            FakeResponse(
                payload={
                    "blobs": [{"url": "https://x/a.png", "pathname": "a.png"}],
                    "cursor": "next",
                    "hasMore": True,
                }
            ),
            FakeResponse(
                payload={
                    "blobs": [{"url": "https://x/b.png", "pathname": "b.png"}],
                    "hasMore": False,
                }
            ),
        ]
    )
    client = BlobClient("t", "https://blob.test", session=session)

    blobs = list(client.list_blobs(prefix="a", limit=1))

    assert [blob.pathname for blob in blobs] == ["a.png", "b.png"]
    assert session.requests[0][2]["params"] == {"prefix": "a", "limit": 1}
    assert session.requests[1][2]["params"] == {"prefix": "a", "limit": 1, "cursor": "next"}


@pytest.mark.parametrize("body", [["oops"], "gateway timeout", None])
def test_put_error_with_non_object_body(body):
    session = FakeSession([FakeResponse(status_code=500, reason="Server Error", payload=body)])
    with pytest.raises(BlobStoreError, match="HTTP 500: Server Error"):
        BlobClient("t", session=session).put("logo.png", b"", "image/png")


def test_non_object_success_body_is_rejected():
    session = FakeSession([FakeResponse(payload=["unexpected"])])
    with pytest.raises(BlobStoreError, match="Unexpected response"):
        list(BlobClient("t", session=session).list_blobs())
