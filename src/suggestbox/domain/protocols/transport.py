"""Transport protocol."""

from typing import Callable, Protocol

from suggestbox.core.stream import Stream, Subscription
from suggestbox.domain.events.types import Request, Response

__all__ = ["ResponseStream", "Transport"]


class ResponseStream(Protocol):
    """Responses for one issued request.

    Emits zero or one `Response`. A request that is never answered simply
    never emits.
    """

    @property
    def request_url(self) -> str:
        """URL of the originating request."""
        ...

    def subscribe(self, observer: Callable[[Response], None]) -> Subscription:
        """Observe this request's response."""
        ...


class Transport(Protocol):
    """Network collaborator.

    For every request passed to `send()`, the transport emits one
    `ResponseStream` on `responses` before `send()` returns, and later
    delivers (or never delivers) the response on it.
    """

    @property
    def responses(self) -> Stream[ResponseStream]:
        """Stream of per-request response streams, in request order."""
        ...

    def send(self, request: Request) -> None:
        """Issue a request without blocking."""
        ...
