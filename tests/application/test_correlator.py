"""Tests for the response correlator."""

from suggestbox.application.correlator import ResponseCorrelator, extract_suggestions
from suggestbox.core.operators import collect
from suggestbox.core.stream import Subject
from suggestbox.infrastructure.transport import PendingResponse

BASE = "https://example.test/search?q="


class TestExtractSuggestions:
    """Tests for extract_suggestions."""

    def test_unwraps_second_element(self):
        body = ["lo", ["London", "Los Angeles"], ["", ""], ["u1", "u2"]]
        assert extract_suggestions(body) == ["London", "Los Angeles"]

    def test_empty_list(self):
        assert extract_suggestions(["zz", []]) == []

    def test_malformed_bodies(self):
        """Test anything not shaped like [query, [str, ...]] is rejected."""
        assert extract_suggestions(None) is None
        assert extract_suggestions({"lo": ["London"]}) is None
        assert extract_suggestions(["lo"]) is None
        assert extract_suggestions(["lo", "London"]) is None
        assert extract_suggestions(["lo", ["London", 3]]) is None


class TestResponseCorrelator:
    """Tests for ResponseCorrelator."""

    def setup_method(self):
        self.responses = Subject()
        self.values, self.subscription = collect(
            ResponseCorrelator(self.responses, BASE).suggestions()
        )

    def issue(self, query: str) -> PendingResponse:
        pending = PendingResponse(BASE + query)
        self.responses.emit(pending)
        return pending

    def test_delivers_suggestions(self):
        pending = self.issue("lo")
        pending.deliver(["lo", ["London"]])

        assert self.values == [["London"]]

    def test_latest_request_wins(self):
        """Test an older response arriving late is never observed."""
        older = self.issue("l")
        newer = self.issue("lo")

        newer.deliver(["lo", ["London"]])
        older.deliver(["l", ["Lisbon", "London", "Lyon"]])

        assert self.values == [["London"]]

    def test_older_response_arriving_first_is_also_dropped(self):
        older = self.issue("l")
        newer = self.issue("lo")

        older.deliver(["l", ["Lisbon"]])
        newer.deliver(["lo", ["London"]])

        assert self.values == [["London"]]

    def test_foreign_requests_are_ignored(self):
        """Test response streams of other endpoints neither deliver nor supersede."""
        ours = self.issue("lo")
        foreign = PendingResponse("https://elsewhere.test/?q=lo")
        self.responses.emit(foreign)

        foreign.deliver(["lo", ["Elsewhere"]])
        ours.deliver(["lo", ["London"]])

        assert self.values == [["London"]]

    def test_malformed_response_is_dropped(self):
        pending = self.issue("lo")
        pending.deliver({"error": "nope"})

        assert self.values == []

    def test_dispose_stops_delivery(self):
        pending = self.issue("lo")
        self.subscription.dispose()
        pending.deliver(["lo", ["London"]])

        assert self.values == []
        assert not self.responses.has_observers
