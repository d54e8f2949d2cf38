"""Tests for loading, updating and persisting the compile cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from glowc.features.cache import CacheEntry, CompileCache


def _entry(source: str = "Effects/Fire.glow", digest: str = "a" * 64) -> CacheEntry:
    stem = Path(source).stem
    return CacheEntry(
        source_path=source,
        output_path=f"Gen/{stem}.shader",
        sidecar_path=f"Gen/{stem}_thumbnail.png",
        source_digest=digest,
        template_digest="b" * 64,
        core_lib_digest="c" * 64,
        generator_version="1",
    )


def test_put_replaces_by_source_path() -> None:
    cache = CompileCache()

    assert cache.put(_entry())
    assert cache.put(_entry(digest="d" * 64))

    assert len(cache) == 1
    stored = cache.get("Effects/Fire.glow")
    assert stored is not None and stored.source_digest == "d" * 64


def test_put_rejects_empty_source_path() -> None:
    cache = CompileCache()

    assert not cache.put(_entry(source=""))
    assert len(cache) == 0
    assert cache.get("") is None


def test_save_then_load_keeps_entries(tmp_path: Path) -> None:
    storage = tmp_path / "gen" / ".glowcache.json"
    cache = CompileCache()
    _ = cache.put(_entry("Effects/Water.glow"))
    _ = cache.put(_entry("Effects/Fire.glow"))

    assert cache.save(storage)

    payload = json.loads(storage.read_text(encoding="utf-8"))
    assert [record["sourcePath"] for record in payload["entries"]] == [
        "Effects/Fire.glow",
        "Effects/Water.glow",
    ]
    assert set(payload["entries"][0]) == {
        "sourcePath",
        "outputPath",
        "sidecarPath",
        "sourceDigest",
        "templateDigest",
        "coreLibDigest",
        "generatorVersion",
    }

    loaded = CompileCache.load(storage)
    assert loaded.get("Effects/Water.glow") == _entry("Effects/Water.glow")
    assert "Effects/Fire.glow" in loaded


def test_load_missing_file_returns_empty_cache(tmp_path: Path) -> None:
    assert len(CompileCache.load(tmp_path / "absent.json")) == 0


def test_load_corrupt_file_warns_and_returns_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    storage = tmp_path / ".glowcache.json"
    _ = storage.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="glowc"):
        cache = CompileCache.load(storage)

    assert len(cache) == 0
    assert any(getattr(record, "build_event", None) == "build.cache.warning" for record in caplog.records)


def test_records_with_unknown_or_missing_fields_are_dropped(tmp_path: Path) -> None:
    storage = tmp_path / ".glowcache.json"
    good = _entry().to_record()
    extra = dict(_entry("Effects/Water.glow").to_record(), futureField="x")
    missing = _entry("Effects/Smoke.glow").to_record()
    del missing["coreLibDigest"]
    _ = storage.write_text(
        json.dumps({"entries": [good, extra, missing, "junk", {"sourcePath": 3}]}),
        encoding="utf-8",
    )

    cache = CompileCache.load(storage)

    assert len(cache) == 1
    assert cache.get("Effects/Fire.glow") == _entry()


def test_save_failure_leaves_previous_file(tmp_path: Path, mocker: MockerFixture) -> None:
    storage = tmp_path / ".glowcache.json"
    original = CompileCache()
    _ = original.put(_entry())
    assert original.save(storage)
    before = storage.read_text(encoding="utf-8")

    _ = mocker.patch(
        "glowc.features.cache.usecases.compile_cache.write_text_atomic",
        side_effect=OSError("disk full"),
    )
    updated = CompileCache()
    _ = updated.put(_entry("Effects/Water.glow"))

    assert not updated.save(storage)
    assert storage.read_text(encoding="utf-8") == before
