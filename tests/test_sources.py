"""Tests for tagtrail.sources module."""

import json

import pytest

from tagtrail.models import Location, NavigationEvent
from tagtrail.sources import (
    NavigationSource,
    NavigationSourceError,
    SnapshotFileSource,
    parse_snapshot,
)


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "tagstack.json"
    path.write_text(json.dumps({
        "file": "/src/lib/server.ex",
        "line": 12,
        "tagstack": {
            "curidx": 2,
            "items": [
                {"tagname": "handle_call/3", "from": {"file": "/src/lib/user_controller.ex", "line": 7}},
            ],
        },
    }))
    return path


class TestParseSnapshot:
    def test_basic(self):
        snap = parse_snapshot({
            "curidx": 3,
            "items": [
                {"tagname": "a/1", "from": {"file": "x.ex", "line": 1}},
                {"tagname": "b/2", "from": {"file": "y.ex", "line": 2}},
            ],
        })
        assert snap.current_index == 3
        assert snap.items[1] == NavigationEvent("b/2", Location("y.ex", 2))

    def test_defaults(self):
        snap = parse_snapshot({})
        assert snap.items == ()
        assert snap.current_index == 1

    def test_missing_origin(self):
        snap = parse_snapshot({"items": [{"tagname": "init"}]})
        assert snap.items[0].origin is None

    def test_origin_without_file(self):
        snap = parse_snapshot({"items": [{"tagname": "init", "from": {"line": 3}}]})
        assert snap.items[0].origin is None

    def test_bad_line_defaults_to_zero(self):
        snap = parse_snapshot({"items": [{"tagname": "init", "from": {"file": "a.ex", "line": "x"}}]})
        assert snap.items[0].origin == Location("a.ex", 0)

    @pytest.mark.parametrize("data", [
        [],
        {"items": "nope"},
        {"items": ["nope"]},
        {"curidx": "two"},
    ])
    def test_malformed(self, data):
        with pytest.raises(NavigationSourceError):
            parse_snapshot(data)


class TestSnapshotFileSource:
    def test_is_navigation_source(self, snapshot_file):
        assert isinstance(SnapshotFileSource(snapshot_file), NavigationSource)

    def test_poll(self, snapshot_file):
        snap = SnapshotFileSource(snapshot_file).poll_navigation_stack()
        assert snap.current_index == 2
        assert snap.items[0].tag_token == "handle_call/3"
        assert snap.normalized_index() == 1

    def test_current_file_and_line(self, snapshot_file):
        source = SnapshotFileSource(snapshot_file)
        assert source.current_file_path() == "/src/lib/server.ex"
        assert source.current_cursor_line() == 12

    def test_missing_file(self, tmp_path):
        source = SnapshotFileSource(tmp_path / "missing.json")
        with pytest.raises(NavigationSourceError):
            source.poll_navigation_stack()
        assert source.current_file_path() is None
        assert source.current_cursor_line() == 0

    def test_corrupt_json(self, tmp_path):
        path = tmp_path / "tagstack.json"
        path.write_text("not json{{{")
        with pytest.raises(NavigationSourceError):
            SnapshotFileSource(path).poll_navigation_stack()

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "tagstack.json"
        path.write_text("[1, 2]")
        with pytest.raises(NavigationSourceError):
            SnapshotFileSource(path).poll_navigation_stack()

    def test_directory_listing(self, tmp_path):
        (tmp_path / "b.ex").write_text("")
        (tmp_path / "a.ex").write_text("")
        source = SnapshotFileSource(tmp_path / "tagstack.json")
        assert source.directory_listing(str(tmp_path)) == ["a.ex", "b.ex"]

    def test_directory_listing_missing(self, tmp_path):
        source = SnapshotFileSource(tmp_path / "tagstack.json")
        assert source.directory_listing(str(tmp_path / "nope")) == []

    def test_reset_keeps_position(self, snapshot_file):
        source = SnapshotFileSource(snapshot_file)
        source.reset_navigation_stack()
        snap = source.poll_navigation_stack()
        assert snap.items == ()
        assert snap.current_index == 1
        assert source.current_file_path() == "/src/lib/server.ex"
        assert not snapshot_file.with_suffix(".json.tmp").exists()

    def test_reset_creates_file(self, tmp_path):
        path = tmp_path / "state" / "tagstack.json"
        source = SnapshotFileSource(path)
        source.reset_navigation_stack()
        assert source.poll_navigation_stack().is_empty()
