"""
Tests for the submissions fetcher.

Every failure path must come back as an empty list plus an error message,
never as an exception.
"""

import logging

import httpx
import pytest

from admin_dashboard.config import Settings
from admin_dashboard.data.loader import fetch_submissions, load_submissions, submissions_url
from admin_dashboard.data.models import FeedbackSubmission, WaitlistSubmission

BASE_URL = "https://api.example.test"

RECORDS = [
    {"id": "1", "type": "waitlist", "email": "a@b.com", "createdAt": "2024-01-01T00:00:00Z"},
    {"id": "2", "type": "feedback", "feedback": "hello", "organization": "Acme", "createdAt": "2024-01-02T00:00:00Z"},
    {"id": "3", "type": "waitlist", "email": "c@d.com", "createdAt": "2024-01-03T00:00:00Z"},
]


def make_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchSubmissions:
    def test_success(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["cache"] = request.headers.get("cache-control")
            return httpx.Response(200, json=RECORDS)

        result = fetch_submissions(BASE_URL, client=make_client(handler))

        assert result.error is None
        assert [s.id for s in result.data] == ["1", "2", "3"]
        assert isinstance(result.data[0], WaitlistSubmission)
        assert isinstance(result.data[1], FeedbackSubmission)
        assert seen == {"path": "/api/submissions", "cache": "no-cache"}

    def test_non_success_status(self):
        result = fetch_submissions(BASE_URL, client=make_client(lambda request: httpx.Response(503)))
        assert result.data == []
        assert "503" in result.error

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = fetch_submissions(BASE_URL, client=make_client(handler))
        assert result.data == []
        assert BASE_URL in result.error

    @pytest.mark.parametrize("base_url", ["http://host:notaport", "https://ex\x00ample.com"])
    def test_malformed_base_url(self, base_url):
        client = make_client(lambda request: httpx.Response(200, json=RECORDS))
        result = fetch_submissions(base_url, client=client)
        assert result.data == []
        assert base_url in result.error

    def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/submissions":
                return httpx.Response(308, headers={"Location": BASE_URL + "/api/submissions/"})
            return httpx.Response(200, json=RECORDS)

        result = fetch_submissions(BASE_URL, client=make_client(handler))
        assert result.error is None
        assert len(result.data) == 3

    def test_invalid_json(self):
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        result = fetch_submissions(BASE_URL, client=client)
        assert result.data == []
        assert BASE_URL in result.error

    def test_payload_not_a_list(self):
        client = make_client(lambda request: httpx.Response(200, json={"items": RECORDS}))
        result = fetch_submissions(BASE_URL, client=client)
        assert result.data == []
        assert result.error is not None

    def test_invalid_records_are_skipped(self, caplog):
        payload = RECORDS + [{"id": "4", "type": "survey", "createdAt": "2024-01-04T00:00:00Z"}]
        client = make_client(lambda request: httpx.Response(200, json=payload))

        with caplog.at_level(logging.WARNING, logger="admin_dashboard.data.loader"):
            result = fetch_submissions(BASE_URL, client=client)

        assert result.error is None
        assert [s.id for s in result.data] == ["1", "2", "3"]
        assert "survey" in caplog.text

    def test_empty_list(self):
        result = fetch_submissions(BASE_URL, client=make_client(lambda request: httpx.Response(200, json=[])))
        assert result.data == []
        assert result.error is None


def test_submissions_url_strips_trailing_slash():
    assert submissions_url(BASE_URL + "/") == BASE_URL + "/api/submissions"


class TestLoadSubmissions:
    def setup_method(self):
        self.settings = Settings(api_url=BASE_URL, timezone="Asia/Seoul", request_timeout=5.0)

    def test_returns_newest_first(self):
        client = make_client(lambda request: httpx.Response(200, json=RECORDS))
        result = load_submissions(self.settings, client=client)
        assert [s.id for s in result.data] == ["3", "2", "1"]

    def test_error_is_passed_through(self):
        client = make_client(lambda request: httpx.Response(404))
        result = load_submissions(self.settings, client=client)
        assert result.data == []
        assert "404" in result.error
