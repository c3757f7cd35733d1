"""
Unit tests for source collection from grounding chunks.
"""

from types import SimpleNamespace

import pytest

from route_planner.planner.sources import collect_sources
from route_planner.shared.contracts.route_output import SourceRecord


class TestCollectSources:
    """Tests for collect_sources."""

    def test_drops_incomplete_chunks(self):
        """Chunks without web, uri or title are dropped silently."""
        chunks = [{"web": {"uri": "http://a", "title": "A"}}, {"web": {}}, {}]
        sources = collect_sources(chunks)

        assert sources == [SourceRecord(uri="http://a", title="A")]

    def test_none_and_empty_input(self):
        """Missing grounding metadata yields no sources."""
        assert collect_sources(None) == []
        assert collect_sources([]) == []

    def test_empty_title_dropped(self):
        """A web entry with an empty title is not a usable source."""
        chunks = [{"web": {"uri": "http://a", "title": ""}}]
        assert collect_sources(chunks) == []

    def test_missing_uri_dropped(self):
        """A web entry without a uri is not a usable source."""
        chunks = [{"web": {"title": "A"}}, {"web": None}]
        assert collect_sources(chunks) == []

    def test_order_preserved_and_duplicates_kept(self):
        """Sources keep citation order; repeated URIs are not merged."""
        chunks = [
            {"web": {"uri": "http://b", "title": "B"}},
            {"web": {"uri": "http://a", "title": "A"}},
            {"web": {"uri": "http://b", "title": "B again"}},
        ]
        sources = collect_sources(chunks)

        assert [s.uri for s in sources] == ["http://b", "http://a", "http://b"]
        assert sources[2].title == "B again"

    def test_accepts_sdk_style_objects(self):
        """Attribute-style chunks are read the same as dicts."""
        chunks = [
            SimpleNamespace(web=SimpleNamespace(uri="http://a", title="A")),
            SimpleNamespace(web=None),
        ]
        assert collect_sources(chunks) == [SourceRecord(uri="http://a", title="A")]


class TestSourceRecord:
    """Tests for SourceRecord display."""

    def test_display_title_falls_back_to_uri(self):
        """Untitled sources display their URI."""
        assert SourceRecord(uri="http://a").display_title == "http://a"
        assert SourceRecord(uri="http://a", title="A").display_title == "A"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
