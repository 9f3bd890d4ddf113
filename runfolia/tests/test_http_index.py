from __future__ import annotations

from typing import Any

import pytest
import requests

from runfolia.contracts import BuildReference, RunConfig
from runfolia.errors import IndexRequestError
from runfolia.reporting import FakeRunEvents
from runfolia.resolution import PaperBuildIndex
from runfolia.runtime import ArtifactFetcher

_BASE = "https://api.example.test/v2"
_REF = BuildReference(version="1.21.6", build_number=12, download_name="folia-12.jar")


class _StubResponse:
    def __init__(
        self,
        *,
        payload: Any = None,
        body: bytes = b"",
        status: int = 200,
        headers: dict[str, str] | None = None,
        fail_midstream: bool = False,
    ) -> None:
        self._payload = payload
        self._body = body
        self.status_code = status
        self.headers = headers or {}
        self._fail_midstream = fail_midstream
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self) -> Any:
        if self._payload is None:
            raise requests.exceptions.InvalidJSONError("Expecting value")
        return self._payload

    def iter_content(self, chunk_size: int = 1):
        for offset in range(0, len(self._body), 3):
            yield self._body[offset : offset + 3]
        if self._fail_midstream:
            raise requests.exceptions.ChunkedEncodingError("connection broken")

    def close(self) -> None:
        self.closed = True


class _StubSession:
    def __init__(self, responses: dict[str, Any]) -> None:
        self._responses = responses
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> _StubResponse:
        self.requests.append((url, kwargs))
        response = self._responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def _index(responses: dict[str, Any], **kwargs: Any) -> tuple[PaperBuildIndex, _StubSession]:
    session = _StubSession(responses)
    index = PaperBuildIndex(
        project="folia", base_url=_BASE + "/", session=session, **kwargs
    )
    return index, session


def test_urls_follow_papermc_layout():
    index, _ = _index({})

    assert index.builds_url("1.21.6") == f"{_BASE}/projects/folia/versions/1.21.6/builds"
    assert index.download_url(_REF) == (
        f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    )


def test_list_builds_returns_json_and_sends_headers():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds"
    index, session = _index(
        {url: _StubResponse(payload={"builds": []})}, user_agent="tester/1.0", timeout_s=5.0
    )

    assert index.list_builds("1.21.6") == {"builds": []}

    sent_url, kwargs = session.requests[0]
    assert sent_url == url
    assert kwargs["headers"]["User-Agent"] == "tester/1.0"
    assert kwargs["timeout"] == 5.0


@pytest.mark.parametrize(
    "response",
    [
        _StubResponse(status=404),
        _StubResponse(payload=None),
        requests.ConnectionError("connection refused"),
        requests.Timeout("read timed out"),
    ],
)
def test_list_builds_wraps_failures(response):
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds"
    index, _ = _index({url: response})

    with pytest.raises(IndexRequestError) as excinfo:
        index.list_builds("1.21.6")

    assert excinfo.value.url == url


def test_open_download_streams_chunks_and_closes_response():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    response = _StubResponse(body=b"0123456789", headers={"Content-Length": "10"})
    index, session = _index({url: response})

    with index.open_download(_REF) as stream:
        data = b"".join(stream.chunks)
        assert stream.total_bytes == 10
        assert stream.url == url

    assert data == b"0123456789"
    assert response.closed is True
    assert session.requests[0][1]["stream"] is True


def test_open_download_without_content_length():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    index, _ = _index({url: _StubResponse(body=b"abc", headers={"Content-Length": "?"})})

    with index.open_download(_REF) as stream:
        assert stream.total_bytes is None
        assert b"".join(stream.chunks) == b"abc"


def test_open_download_http_error_raises_before_yield():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    index, _ = _index({url: _StubResponse(status=503)})

    with pytest.raises(IndexRequestError):
        with index.open_download(_REF):
            pytest.fail("stream should not open")


def test_open_download_midstream_failure_is_wrapped():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    response = _StubResponse(body=b"012345", fail_midstream=True)
    index, _ = _index({url: response})

    with pytest.raises(IndexRequestError, match="interrupted"):
        with index.open_download(_REF) as stream:
            for _ in stream.chunks:
                pass

    assert response.closed is True


def test_from_config_uses_project_and_base_url():
    config = RunConfig(project="paper", api_base_url="https://mirror.example.test/v2/")
    url = "https://mirror.example.test/v2/projects/paper/versions/1.21.6/builds"
    session = _StubSession({url: _StubResponse(payload={"builds": []})})

    index = PaperBuildIndex.from_config(config, session=session)
    index.list_builds("1.21.6")

    assert session.requests[0][0] == url
    assert session.requests[0][1]["headers"]["User-Agent"] == config.user_agent
    assert session.requests[0][1]["timeout"] == config.request_timeout_s


def test_download_requests_unencoded_body():
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    index, session = _index({url: _StubResponse(body=b"jar", headers={"Content-Length": "3"})})

    with index.open_download(_REF) as stream:
        assert b"".join(stream.chunks) == b"jar"

    headers = session.requests[0][1]["headers"]
    assert headers["Accept-Encoding"] == "identity"
    assert headers["Accept"] == "application/json"


def test_compressed_download_is_fetched_whole(tmp_path):
    url = f"{_BASE}/projects/folia/versions/1.21.6/builds/12/downloads/folia-12.jar"
    body = b"folia server " * 700
    # iter_content yields the decoded body; Content-Length is the gzip size
    response = _StubResponse(
        body=body, headers={"Content-Encoding": "gzip", "Content-Length": "65"}
    )
    index, _ = _index({url: response})

    with index.open_download(_REF) as stream:
        assert stream.total_bytes is None

    index, _ = _index({url: _StubResponse(body=body, headers=dict(response.headers))})
    destination = tmp_path / "run" / "folia-1.21.6.jar"

    cached = ArtifactFetcher(index, FakeRunEvents()).fetch(_REF, destination)

    assert cached.fetched is True
    assert destination.read_bytes() == body
