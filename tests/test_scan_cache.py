"""Tests for the volume-keyed scan cache."""

import json
from pathlib import Path

import pytest

from juiceit.cache.scan_cache import CacheRecord, ScanCache, parse_cache_record
from juiceit.exceptions import CacheCorruptionError, CacheError


@pytest.fixture
def cache(tmp_path: Path) -> ScanCache:
    """Cache in an empty directory."""
    return ScanCache(tmp_path)


class TestLoadAndStore:
    """Test persistence of cache records."""

    def test_load_absent(self, cache: ScanCache) -> None:
        assert cache.load() is None
        assert not cache.exists()

    def test_store_writes_hidden_json_file(self, cache: ScanCache, tmp_path: Path) -> None:
        """The file uses the volumeName/numTitles keys."""
        cache.store("THE_MATRIX", 12)

        path = tmp_path / ".dvd_cache.json"
        assert cache.path == path
        assert json.loads(path.read_text()) == {"volumeName": "THE_MATRIX", "numTitles": 12}

    def test_store_overwrites_previous_record(self, cache: ScanCache) -> None:
        cache.store("DISC_ONE", 4)
        cache.store("DISC_TWO", 7)

        record = cache.load()
        assert record == CacheRecord(volume_name="DISC_TWO", num_titles=7)

    def test_store_leaves_no_temp_files(self, cache: ScanCache, tmp_path: Path) -> None:
        cache.store("THE_MATRIX", 3)
        assert [p.name for p in tmp_path.iterdir()] == [".dvd_cache.json"]

    def test_custom_filename(self, tmp_path: Path) -> None:
        cache = ScanCache(tmp_path, filename=".scan.json")
        cache.store("X", 1)
        assert (tmp_path / ".scan.json").exists()


class TestCorruption:
    """Malformed cache files are treated as absent."""

    @pytest.mark.parametrize(
        "content",
        [
            "not json at all",
            "{}",
            '{"volumeName": "X"}',
            '{"volumeName": "X", "numTitles": -1}',
            "[1, 2]",
        ],
    )
    def test_malformed_file_loads_as_none(self, cache: ScanCache, content: str) -> None:
        cache.path.write_text(content)
        assert cache.load() is None

    def test_binary_garbage_loads_as_none(self, cache: ScanCache) -> None:
        cache.path.write_bytes(b"\xff\xfe\x00garbage")
        assert cache.load() is None

    def test_parse_raises_corruption_error(self) -> None:
        with pytest.raises(CacheCorruptionError):
            parse_cache_record('{"volumeName": 3}')


class TestValidate:
    """Cache reuse requires an exact volume name match."""

    def test_exact_match(self) -> None:
        record = CacheRecord(volume_name="THE_MATRIX", num_titles=3)
        assert ScanCache.validate(record, "THE_MATRIX")

    def test_case_sensitive(self) -> None:
        record = CacheRecord(volume_name="THE_MATRIX", num_titles=3)
        assert not ScanCache.validate(record, "the_matrix")

    def test_different_label(self) -> None:
        record = CacheRecord(volume_name="THE_MATRIX", num_titles=3)
        assert not ScanCache.validate(record, "RELOADED")

    def test_missing_record_or_label(self) -> None:
        record = CacheRecord(volume_name="THE_MATRIX", num_titles=3)
        assert not ScanCache.validate(None, "THE_MATRIX")
        assert not ScanCache.validate(record, None)


class TestInvalidation:
    """Test cache removal."""

    def test_invalidate_removes_file(self, cache: ScanCache) -> None:
        cache.store("THE_MATRIX", 3)
        cache.invalidate()
        assert not cache.exists()

    def test_invalidate_without_file(self, cache: ScanCache) -> None:
        cache.invalidate()
        assert not cache.exists()

    def test_discard_if_stale_keeps_matching_record(self, cache: ScanCache) -> None:
        cache.store("THE_MATRIX", 3)

        assert cache.discard_if_stale("THE_MATRIX") is False
        assert cache.exists()

    def test_discard_if_stale_removes_other_disc(self, cache: ScanCache) -> None:
        cache.store("THE_MATRIX", 3)

        assert cache.discard_if_stale("RELOADED") is True
        assert not cache.exists()

    def test_discard_if_stale_removes_when_label_unknown(self, cache: ScanCache) -> None:
        cache.store("THE_MATRIX", 3)

        assert cache.discard_if_stale(None) is True
        assert not cache.exists()

    def test_discard_if_stale_removes_corrupt_file(self, cache: ScanCache) -> None:
        cache.path.write_text("{broken")

        assert cache.discard_if_stale("THE_MATRIX") is True
        assert not cache.exists()

    def test_discard_if_stale_without_file(self, cache: ScanCache) -> None:
        assert cache.discard_if_stale("THE_MATRIX") is False


class TestFilesystemErrors:
    """A directory in place of the cache file stands in for an unwritable cache."""

    @pytest.fixture
    def blocked(self, cache: ScanCache) -> ScanCache:
        cache.path.mkdir()
        (cache.path / "keep").write_text("")
        return cache

    def test_load_returns_none(self, blocked: ScanCache) -> None:
        assert blocked.load() is None

    def test_store_raises_cache_error(self, blocked: ScanCache, tmp_path: Path) -> None:
        with pytest.raises(CacheError) as exc_info:
            blocked.store("THE_MATRIX", 3)

        assert "Cannot write scan cache" in exc_info.value.message
        assert list(tmp_path.glob("*.tmp")) == []

    def test_invalidate_raises_cache_error(self, blocked: ScanCache) -> None:
        with pytest.raises(CacheError) as exc_info:
            blocked.invalidate()

        assert "Cannot remove scan cache" in exc_info.value.message

    def test_store_into_missing_parent_that_is_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "out").write_text("")
        cache = ScanCache(tmp_path / "out")

        with pytest.raises(CacheError):
            cache.store("THE_MATRIX", 3)
