"""Unit tests for the HEAD-based content identity probe."""

from __future__ import annotations

import httpx
import pytest

from adapters.metadata_resolver import normalize_etag, parse_size, resolve_content_metadata
from core.exceptions import FetchFailedError, MissingIdentityError

URL = "https://models.test/resolve/rev/model.bin"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=False)


class TestNormalize:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ('"abc123"', "abc123"),
            ("abc123", "abc123"),
            ('W/"abc123"', "abc123"),
            ('  "abc123"  ', "abc123"),
            ('""', None),
            ('"a/b"', None),
            (None, None),
        ],
    )
    def test_normalize_etag(self, raw, expected):
        assert normalize_etag(raw) == expected

    @pytest.mark.parametrize(("raw", "expected"), [("42", 42), ("nope", None), ("-1", None), (None, None)])
    def test_parse_size(self, raw, expected):
        assert parse_size(raw) == expected


class TestResolve:
    def test_redirect_uses_linked_headers(self):
        def handler(request):
            assert request.method == "HEAD"
            return httpx.Response(
                302,
                headers={
                    "location": "https://cdn.test/blob",
                    "etag": '"redirect-response-etag"',
                    "x-linked-etag": '"target-etag"',
                    "x-linked-size": "1234",
                },
            )

        with _client(handler) as client:
            meta = resolve_content_metadata(client, URL)
        assert meta.identifier == "target-etag"
        assert meta.size == 1234

    def test_redirect_is_not_followed(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(302, headers={"location": "https://cdn.test/blob", "x-linked-etag": "t"})

        with _client(handler) as client:
            resolve_content_metadata(client, URL)
        assert seen == [URL]

    def test_plain_response_uses_standard_headers(self):
        def handler(request):
            return httpx.Response(200, headers={"etag": '"plain"', "content-length": "99", "x-linked-etag": "ignored"})

        with _client(handler) as client:
            meta = resolve_content_metadata(client, URL)
        assert meta.identifier == "plain"
        assert meta.size == 99

    def test_unparseable_size_is_unknown(self):
        def handler(request):
            return httpx.Response(302, headers={"location": "https://cdn.test/x", "x-linked-etag": "t", "x-linked-size": "lots"})

        with _client(handler) as client:
            meta = resolve_content_metadata(client, URL)
        assert meta.size is None

    def test_repeated_resolution_is_stable(self):
        def handler(request):
            return httpx.Response(200, headers={"etag": '"stable"'})

        with _client(handler) as client:
            first = resolve_content_metadata(client, URL)
            second = resolve_content_metadata(client, URL)
        assert first == second

    def test_redirect_without_linked_etag_is_missing_identity(self):
        def handler(request):
            return httpx.Response(302, headers={"location": "https://cdn.test/x", "etag": '"not-for-redirects"'})

        with _client(handler) as client, pytest.raises(MissingIdentityError) as excinfo:
            resolve_content_metadata(client, URL)
        assert excinfo.value.url == URL
        assert excinfo.value.status == 302

    def test_not_found_is_missing_identity(self):
        with _client(lambda request: httpx.Response(404)) as client, pytest.raises(MissingIdentityError):
            resolve_content_metadata(client, URL)

    def test_transport_error_is_fetch_failed(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client, pytest.raises(FetchFailedError) as excinfo:
            resolve_content_metadata(client, URL)
        assert excinfo.value.status is None
