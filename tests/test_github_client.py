"""Tests for the GitHub diff transport (httpx.MockTransport, no network)."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from bundlesync.core.github import DIFF_MEDIA_TYPE, GitHubClient, GitHubError, fetch_pr_diff

_DIFF = "diff --git a/x b/x\n--- a/Bundles/Foo/transfer.xml\n+++ b/Bundles/Foo/transfer.xml\n"


def _client(handler) -> GitHubClient:
    return GitHubClient("ghp_test", transport=httpx.MockTransport(handler))


class TestGitHubClient:
    def test_requests_diff_media_type(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["accept"] = request.headers["Accept"]
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(
                200, text=_DIFF, headers={"Content-Type": "text/plain; charset=utf-8"}
            )

        with _client(handler) as client:
            assert client.get_pull_request_diff("spryker", "suite", 7) == _DIFF

        assert seen["path"] == "/repos/spryker/suite/pulls/7"
        assert seen["accept"] == DIFF_MEDIA_TYPE
        assert seen["auth"] == "token ghp_test"

    def test_github_diff_content_type_is_text(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                text=_DIFF,
                headers={"Content-Type": "application/vnd.github.v3.diff; charset=utf-8"},
            )

        with _client(handler) as client:
            assert client.get_pull_request_diff("o", "r", 1) == _DIFF

    def test_json_response_is_returned_decoded(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"number": 1})

        with _client(handler) as client:
            assert client.get_pull_request_diff("o", "r", 1) == {"number": 1}

    @pytest.mark.parametrize("status", [401, 404, 500])
    def test_http_error_raises(self, status):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={"message": "nope"})

        with _client(handler) as client:
            with pytest.raises(GitHubError) as exc_info:
                client.get_pull_request_diff("o", "r", 1)
        assert exc_info.value.status_code == status

    def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(GitHubError) as exc_info:
                client.get_pull_request_diff("o", "r", 1)
        assert exc_info.value.status_code is None


class TestFetchPrDiff:
    def test_uses_short_lived_client(self):
        with patch.object(GitHubClient, "get_pull_request_diff", return_value=_DIFF) as mock_get:
            assert fetch_pr_diff("o", "r", 3, "tok") == _DIFF
        mock_get.assert_called_once_with("o", "r", 3)
