"""
Tests for the official repositories cache file.
"""

import json
from pathlib import Path

import pytest

from bhelm.core.cache_store import CacheStore
from bhelm.core.errors import CacheCorruptError, CacheNotFoundError, CacheWriteError, EmptyResultError
from bhelm.models.repo import RepositoryRecord

from conftest import repo


class TestLoad:
    def test_missing_file(self, store: CacheStore):
        assert not store.exists()
        with pytest.raises(CacheNotFoundError):
            store.load_all()

    def test_corrupt_json(self, store: CacheStore, cache_path: Path):
        cache_path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(CacheCorruptError):
            store.load_all()

    def test_invalid_utf8(self, store: CacheStore, cache_path: Path):
        cache_path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(CacheCorruptError) as exc_info:
            store.load_all()
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unreadable_path(self, store: CacheStore, cache_path: Path):
        cache_path.mkdir()
        with pytest.raises(CacheCorruptError):
            store.load_all()

    def test_not_an_array(self, store: CacheStore, cache_path: Path):
        cache_path.write_text('{"name": "nginx"}', encoding="utf-8")
        with pytest.raises(CacheCorruptError):
            store.load_all()

    def test_reads_organization_name_field(self, store: CacheStore, cache_path: Path):
        cache_path.write_text(json.dumps([
            {"name": "bitnami", "organization_name": "bitnami", "url": "https://charts.bitnami.com/bitnami"},
        ]), encoding="utf-8")
        records = store.load_all()
        assert records == [RepositoryRecord("bitnami", "bitnami", "https://charts.bitnami.com/bitnami", True)]


class TestFilterByOrganization:
    def test_exact_match_only(self):
        records = [repo("a", "acme"), repo("b", "Acme"), repo("c", "acme-labs"), repo("d", "acme")]
        matches = CacheStore.filter_by_organization(records, "acme")
        assert [r.name for r in matches] == ["a", "d"]
        assert all(r.organization == "acme" for r in matches)

    def test_no_match(self):
        with pytest.raises(EmptyResultError):
            CacheStore.filter_by_organization([repo("a", "acme")], "other")

    def test_get_by_organization_reads_file(self, store: CacheStore):
        store.replace_all([repo("nginx", "bitnami"), repo("grafana", "grafana")])
        assert [r.name for r in store.get_by_organization("grafana")] == ["grafana"]


class TestReplaceAll:
    def test_pretty_printed_two_space_indent(self, store: CacheStore, cache_path: Path):
        store.replace_all([repo("nginx", "bitnami", "https://charts.bitnami.com/bitnami")])
        text = cache_path.read_text(encoding="utf-8")
        assert text == (
            "[\n"
            "  {\n"
            '    "name": "nginx",\n'
            '    "organization_name": "bitnami",\n'
            '    "url": "https://charts.bitnami.com/bitnami"\n'
            "  }\n"
            "]"
        )
        assert "verified" not in text

    def test_overwrites_wholesale(self, store: CacheStore):
        store.replace_all([repo("a", "acme"), repo("b", "acme")])
        store.replace_all([repo("c", "other")])
        assert [r.name for r in store.load_all()] == ["c"]

    def test_leaves_no_temp_files(self, store: CacheStore, tmp_path: Path):
        store.replace_all([repo("a", "acme")])
        assert [p.name for p in tmp_path.iterdir()] == ["official_repos.json"]

    def test_creates_parent_directory(self, tmp_path: Path):
        store = CacheStore(tmp_path / "nested" / "repos.json")
        store.replace_all([])
        assert store.load_all() == []

    def test_directory_in_the_way(self, store: CacheStore, cache_path: Path, tmp_path: Path):
        cache_path.mkdir()
        with pytest.raises(CacheWriteError) as exc_info:
            store.replace_all([repo("a", "acme")])
        assert isinstance(exc_info.value.__cause__, OSError)
        assert [p.name for p in tmp_path.iterdir()] == ["official_repos.json"]

    def test_unwritable_parent(self, tmp_path: Path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        store = CacheStore(blocker / "repos.json")
        with pytest.raises(CacheWriteError):
            store.replace_all([repo("a", "acme")])
