from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import requests

from runfolia.contracts import DEFAULT_API_BASE_URL, BuildReference, DownloadStream, RunConfig
from runfolia.errors import IndexRequestError

_CHUNK_SIZE = 65536

logger = logging.getLogger("runfolia.index")


class PaperBuildIndex:
    """
    requests-backed client for the PaperMC builds API (v2 layout).

    One instance serves one project (`folia`, `paper`, ...). A session can be
    injected for connection reuse or tests.
    """

    def __init__(
        self,
        *,
        project: str = "folia",
        base_url: str = DEFAULT_API_BASE_URL,
        user_agent: str | None = None,
        timeout_s: float | None = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._project = project
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._session = session or requests.Session()
        self._headers = {"Accept": "application/json"}
        if user_agent:
            self._headers["User-Agent"] = user_agent

    @classmethod
    def from_config(
        cls, config: RunConfig, *, session: requests.Session | None = None
    ) -> PaperBuildIndex:
        return cls(
            project=config.project,
            base_url=config.api_base_url,
            user_agent=config.user_agent,
            timeout_s=config.request_timeout_s,
            session=session,
        )

    def builds_url(self, version: str) -> str:
        return f"{self._base_url}/projects/{self._project}/versions/{version}/builds"

    def download_url(self, ref: BuildReference) -> str:
        return f"{self.builds_url(ref.version)}/{ref.build_number}/downloads/{ref.download_name}"

    def list_builds(self, version: str) -> Any:
        url = self.builds_url(version)
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, headers=self._headers, timeout=self._timeout_s)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            # JSON decode errors from requests subclass RequestException too
            raise IndexRequestError(url, str(exc)) from exc

    @contextmanager
    def open_download(self, ref: BuildReference) -> Iterator[DownloadStream]:
        url = self.download_url(ref)
        logger.debug("GET %s (stream)", url)
        try:
            response = self._session.get(
                url,
                headers={**self._headers, "Accept-Encoding": "identity"},
                timeout=self._timeout_s,
                stream=True,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise IndexRequestError(url, str(exc)) from exc

        try:
            yield DownloadStream(
                url=url,
                chunks=_iter_chunks(response, url),
                total_bytes=_content_length(response),
            )
        finally:
            response.close()


def _iter_chunks(response: requests.Response, url: str) -> Iterator[bytes]:
    try:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            if chunk:
                yield chunk
    except requests.RequestException as exc:
        raise IndexRequestError(url, f"stream interrupted: {exc}") from exc


def _content_length(response: requests.Response) -> int | None:
    # iter_content decodes gzip/deflate; Content-Length counts encoded bytes
    encoding = response.headers.get("Content-Encoding", "identity").strip().lower()
    if encoding not in ("", "identity"):
        return None
    raw = response.headers.get("Content-Length")
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None
