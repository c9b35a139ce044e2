import asyncio
from dataclasses import replace

import httpx
import pytest

from profile_service import github


class MockResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class MockAsyncClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    async def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def mock_github(monkeypatch):
    def _install(**kwargs):
        mock = MockAsyncClient(**kwargs)
        monkeypatch.setattr(github.httpx, "AsyncClient", lambda **kw: mock)
        return mock

    return _install


def test_repos_are_passed_through(client, mock_github):
    repos = [{"name": "first", "stargazers_count": 3}, {"name": "second", "fork": False}]
    mock = mock_github(response=MockResponse(200, repos))

    resp = client.get("/api/profile/github/octocat")
    assert resp.status_code == 200
    assert resp.json() == repos

    url, kwargs = mock.calls[0]
    assert url == "https://github.test/users/octocat/repos"
    assert kwargs["params"] == {"per_page": 5, "sort": "created", "direction": "asc"}
    assert kwargs["auth"] == ("client-id", "client-secret")
    assert "User-Agent" in kwargs["headers"]


def test_upstream_non_200_is_404(client, mock_github):
    mock_github(response=MockResponse(404, {"message": "Not Found"}))
    resp = client.get("/api/profile/github/nobody")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "No github profile"}


def test_transport_error_is_404(client, mock_github):
    mock_github(error=httpx.ConnectError("connection refused"))
    resp = client.get("/api/profile/github/octocat")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "No github profile"}


def test_no_credentials_means_no_auth(mock_github, settings):
    mock = mock_github(response=MockResponse(200, []))
    anonymous = replace(settings, github_client_id="", github_secret="")

    assert asyncio.run(github.fetch_repos("octocat", anonymous)) == []
    assert mock.calls[0][1]["auth"] is None
