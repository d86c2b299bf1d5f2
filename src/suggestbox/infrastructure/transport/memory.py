"""In-memory transport implementation.

Records every request and answers from a lookup function, either at once or
after a delay on a scheduler. Used by tests and by the offline mode of the
terminal front end.
"""

from collections import deque
from typing import Any, Callable, Iterable, Sequence
from urllib.parse import unquote

from suggestbox.core.stream import Stream, Subject
from suggestbox.domain.events import Request
from suggestbox.domain.protocols import Scheduler
from suggestbox.infrastructure.transport.pending import PendingResponse
from suggestbox.logger import get_logger

logger = get_logger("transport.memory")

Lookup = Callable[[str], Sequence[str] | None]

REQUEST_LOG_SIZE = 1000

SAMPLE_TITLES = (
    "Amsterdam",
    "Athens",
    "Barcelona",
    "Berlin",
    "Lisbon",
    "London",
    "London Bridge",
    "Los Angeles",
    "Louisville",
    "Lyon",
    "Madrid",
    "Milan",
    "Munich",
    "Paris",
    "Porto",
    "Prague",
    "Rome",
    "Vienna",
)


def prefix_lookup(titles: Iterable[str], limit: int = 10) -> Lookup:
    """Case-insensitive prefix search over a fixed list of titles."""
    titles = tuple(titles)

    def lookup(query: str) -> Sequence[str]:
        needle = query.casefold()
        return [title for title in titles if title.casefold().startswith(needle)][:limit]

    return lookup


class InMemoryTransport:
    """
    Transport that never touches the network.

    Example:
        ```python
        transport = InMemoryTransport(endpoint=BASE_URL)
        ...  # engine issues a request for "lo"
        transport.respond(BASE_URL + "lo", ["London", "Los Angeles"])
        ```
    """

    def __init__(
        self,
        endpoint: str = "",
        lookup: Lookup | None = None,
        scheduler: Scheduler | None = None,
        latency: float = 0.0,
        request_log_size: int = REQUEST_LOG_SIZE,
    ):
        """
        Args:
            endpoint: Endpoint prefix used to recover the query from a request URL
            lookup: Answers a query with suggestions; None (or a None result) means never answer
            scheduler: Scheduler for delayed answers; required when latency > 0
            latency: Seconds between a request and its automatic answer
            request_log_size: Number of most recent requests kept in `requests`
        """
        if latency > 0 and scheduler is None:
            raise ValueError("A scheduler is required for a non-zero latency")
        self.endpoint = endpoint
        self._lookup = lookup
        self._scheduler = scheduler
        self._latency = latency
        self._responses: Subject[PendingResponse] = Subject(name="memory-responses")
        self._pending: list[PendingResponse] = []
        self.requests: deque[Request] = deque(maxlen=request_log_size)

    @property
    def responses(self) -> Stream[PendingResponse]:
        return self._responses

    @property
    def urls(self) -> list[str]:
        return [request.url for request in self.requests]

    @property
    def unanswered(self) -> int:
        """Number of requests still waiting for a response."""
        return len(self._pending)

    def query_of(self, url: str) -> str:
        if self.endpoint and url.startswith(self.endpoint):
            return unquote(url[len(self.endpoint):])
        return unquote(url)

    def send(self, request: Request) -> None:
        self.requests.append(request)
        pending = PendingResponse(request.url)
        self._pending.append(pending)
        self._responses.emit(pending)

        if self._lookup is None:
            return
        query = self.query_of(request.url)
        items = self._lookup(query)
        if items is None:
            logger.debug(f"No answer scripted for '{query}'")
            return

        body = [query, list(items)]
        if self._latency > 0:
            self._scheduler.call_later(self._latency, lambda: self._deliver(pending, body))
        else:
            self._deliver(pending, body)

    def _deliver(self, pending: PendingResponse, body: Any) -> None:
        if pending in self._pending:
            self._pending.remove(pending)
        pending.deliver(body)

    def deliver(self, url: str, body: Any) -> None:
        """
        Deliver a raw body to the oldest undelivered request for `url`.

        Raises:
            LookupError: If no undelivered request matches
        """
        for pending in self._pending:
            if pending.request_url == url:
                self._deliver(pending, body)
                return
        raise LookupError(f"No pending request for {url}")

    def respond(self, url: str, items: Sequence[str]) -> None:
        """Deliver an opensearch-shaped body `[query, items]`."""
        self.deliver(url, [self.query_of(url), list(items)])

    async def aclose(self) -> None:
        """Forget undelivered requests; their responses will never arrive."""
        dropped = len(self._pending)
        self._pending.clear()
        if dropped:
            logger.debug(f"Dropped {dropped} unanswered request(s)")
