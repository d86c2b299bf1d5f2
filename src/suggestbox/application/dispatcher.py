"""
QueryDispatcher - maps committed search queries to outgoing requests.
"""

from urllib.parse import quote

from suggestbox.core.operators import map_stream
from suggestbox.core.stream import Stream
from suggestbox.domain.actions import SearchQuery
from suggestbox.domain.events import Request
from suggestbox.logger import get_logger
from suggestbox.utils import truncate

logger = get_logger("dispatcher")


def build_request(endpoint: str, query: str) -> Request:
    """Append the URL-encoded query to the endpoint template."""
    return Request(url=endpoint + quote(query, safe=""))


class QueryDispatcher:
    """One request per search query; no batching, no rate limiting."""

    def __init__(self, search: Stream[SearchQuery], endpoint: str):
        """
        Args:
            search: Debounced search queries
            endpoint: Base URL the encoded query is appended to
        """
        self._search = search
        self.endpoint = endpoint

    def _to_request(self, query: SearchQuery) -> Request:
        request = build_request(self.endpoint, query.text)
        logger.debug(f"Dispatching request for '{truncate(query.text)}'")
        return request

    def requests(self) -> Stream[Request]:
        return map_stream(self._search, self._to_request)
