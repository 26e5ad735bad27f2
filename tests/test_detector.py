"""Tests for tagtrail.detector module."""

from tagtrail.detector import ChangeDetector
from tagtrail.models import StackSnapshot

from conftest import snapshot


class TestChangeDetector:
    def test_first_poll_reports_change(self):
        assert ChangeDetector().poll(StackSnapshot()) is True

    def test_identical_snapshot_unchanged(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", "b/2"))
        assert detector.poll(snapshot("a/1", "b/2")) is False

    def test_both_empty_unchanged(self):
        detector = ChangeDetector()
        detector.poll(StackSnapshot())
        assert detector.poll(StackSnapshot()) is False

    def test_index_change(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", "b/2", index=2))
        assert detector.poll(snapshot("a/1", "b/2", index=1)) is True

    def test_item_count_change(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", index=1))
        assert detector.poll(snapshot("a/1", "b/2", index=1)) is True

    def test_first_tag_change(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", "b/2"))
        assert detector.poll(snapshot("x/1", "b/2")) is True

    def test_last_tag_change(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", "b/2"))
        assert detector.poll(snapshot("a/1", "y/2")) is True

    def test_middle_change_not_seen(self):
        # Only the ends are compared
        detector = ChangeDetector()
        detector.poll(snapshot("a/1", "b/2", "c/3"))
        assert detector.poll(snapshot("a/1", "x/9", "c/3")) is False

    def test_cache_updated_every_call(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1"))
        assert detector.poll(snapshot("b/1")) is True
        assert detector.poll(snapshot("b/1")) is False

    def test_unreadable_snapshot_is_unchanged(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1"))
        assert detector.poll(None) is False
        # Cache kept: the same snapshot is still unchanged
        assert detector.poll(snapshot("a/1")) is False

    def test_unreadable_before_any_snapshot(self):
        assert ChangeDetector().poll(None) is False

    def test_reset_forgets_cache(self):
        detector = ChangeDetector()
        detector.poll(snapshot("a/1"))
        detector.reset()
        assert detector.poll(snapshot("a/1")) is True
