from __future__ import annotations

from pathlib import Path

import pytest

from runfolia.contracts import BuildReference
from runfolia.errors import DownloadError, IndexRequestError
from runfolia.reporting.fakes import FakeRunEvents
from runfolia.runtime import ArtifactFetcher
from runfolia.testkit import FakeBuildIndex

_REF = BuildReference(version="1.21.6", build_number=12, download_name="folia-12.jar")
_REMOTE = b"remote-folia-build-12-bytes"


def _fetcher(index: FakeBuildIndex) -> tuple[ArtifactFetcher, FakeRunEvents]:
    events = FakeRunEvents()
    return ArtifactFetcher(index, events), events


def _leftovers(directory: Path) -> list[Path]:
    return sorted(directory.glob("*.part"))


def test_cache_hit_skips_network_and_leaves_file_untouched(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    destination.write_bytes(b"cached bytes")
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE})
    fetcher, events = _fetcher(index)

    cached = fetcher.fetch(_REF, destination, force_refetch=False)

    assert index.network_calls == 0
    assert destination.read_bytes() == b"cached bytes"
    assert cached.path == destination
    assert cached.version == "1.21.6"
    assert cached.fetched is False
    assert any("cached" in message for message in events.messages)


def test_force_refetch_replaces_existing_file_with_remote_bytes(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    destination.write_bytes(b"stale")
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE})
    fetcher, _ = _fetcher(index)

    cached = fetcher.fetch(_REF, destination, force_refetch=True)

    assert index.download_calls == [_REF]
    assert destination.read_bytes() == _REMOTE
    assert cached.fetched is True
    assert cached.build_number == 12
    assert _leftovers(tmp_path) == []


def test_cache_miss_creates_run_directory(tmp_path: Path):
    destination = tmp_path / "build" / "run-folia" / "folia-1.21.6.jar"
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE})
    fetcher, events = _fetcher(index)

    fetcher.fetch(_REF, destination)

    assert destination.read_bytes() == _REMOTE
    progress = [call for call in events.calls if call.name == "progress"]
    assert progress
    assert progress[-1].kwargs == {"done_bytes": len(_REMOTE), "total_bytes": len(_REMOTE)}


def test_midstream_failure_leaves_no_file_under_final_name(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE}, fail_after_bytes=8)
    fetcher, _ = _fetcher(index)

    with pytest.raises(DownloadError) as excinfo:
        fetcher.fetch(_REF, destination)

    assert not destination.exists()
    assert _leftovers(tmp_path) == []
    assert isinstance(excinfo.value.__cause__, IndexRequestError)
    assert excinfo.value.path == destination


def test_failed_refetch_keeps_previous_cache_content(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    destination.write_bytes(b"previous good jar")
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE}, fail_after_bytes=4)
    fetcher, _ = _fetcher(index)

    with pytest.raises(DownloadError):
        fetcher.fetch(_REF, destination, force_refetch=True)

    assert destination.read_bytes() == b"previous good jar"
    assert _leftovers(tmp_path) == []


def test_unreachable_index_raises_download_error(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    fetcher, _ = _fetcher(FakeBuildIndex(unreachable=True))

    with pytest.raises(DownloadError, match="connection refused"):
        fetcher.fetch(_REF, destination)

    assert not destination.exists()


def test_unwritable_destination_raises_download_error(tmp_path: Path):
    blocker = tmp_path / "run"
    blocker.write_text("not a directory", encoding="utf-8")
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE})
    fetcher, _ = _fetcher(index)

    with pytest.raises(DownloadError):
        fetcher.fetch(_REF, blocker / "folia-1.21.6.jar")

    assert index.download_calls == []


def test_stale_partial_downloads_are_removed(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    stale = tmp_path / ".folia-1.21.6.jar.abc123.part"
    stale.write_bytes(b"half")
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE})
    fetcher, _ = _fetcher(index)

    fetcher.fetch(_REF, destination)

    assert not stale.exists()
    assert destination.read_bytes() == _REMOTE


def test_download_without_announced_length(tmp_path: Path):
    destination = tmp_path / "folia-1.21.6.jar"
    index = FakeBuildIndex(downloads={"folia-12.jar": _REMOTE}, announce_length=False)
    fetcher, events = _fetcher(index)

    fetcher.fetch(_REF, destination)

    assert destination.read_bytes() == _REMOTE
    totals = {call.kwargs["total_bytes"] for call in events.calls if call.name == "progress"}
    assert totals == {None}
