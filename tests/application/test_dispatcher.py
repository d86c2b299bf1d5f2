"""Tests for the query dispatcher."""

from suggestbox.application.dispatcher import QueryDispatcher, build_request
from suggestbox.core.operators import collect
from suggestbox.core.stream import Subject
from suggestbox.domain.actions import SearchQuery
from suggestbox.domain.events import Request

BASE = "https://example.test/search?q="


class TestBuildRequest:
    """Tests for build_request."""

    def test_appends_encoded_query(self):
        assert build_request(BASE, "lo") == Request(BASE + "lo")

    def test_encodes_reserved_characters(self):
        """Test spaces and query separators are percent-encoded."""
        assert build_request(BASE, "new york").url == BASE + "new%20york"
        assert build_request(BASE, "a&b=c").url == BASE + "a%26b%3Dc"
        assert build_request(BASE, "a/b").url == BASE + "a%2Fb"

    def test_encodes_unicode(self):
        assert build_request(BASE, "Zürich").url == BASE + "Z%C3%BCrich"


class TestQueryDispatcher:
    """Tests for QueryDispatcher."""

    def test_one_request_per_query(self):
        search = Subject()
        requests, _ = collect(QueryDispatcher(search, BASE).requests())

        search.emit(SearchQuery("lo"))
        search.emit(SearchQuery("lo"))

        assert requests == [Request(BASE + "lo"), Request(BASE + "lo")]
