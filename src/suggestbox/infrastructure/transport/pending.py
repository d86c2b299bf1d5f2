"""Per-request response stream shared by the transports."""

from typing import Any

from suggestbox.core.stream import Subject
from suggestbox.domain.events import Response


class PendingResponse(Subject[Response]):
    """
    Response stream of one request.

    Emits at most one `Response`; later deliveries are ignored. A response
    delivered while nobody subscribes (a superseded request) is lost.
    """

    def __init__(self, request_url: str):
        super().__init__(name=f"response:{request_url}")
        self.request_url = request_url
        self.delivered = False

    def deliver(self, body: Any) -> bool:
        """
        Deliver the response body.

        Returns:
            True if this was the first delivery, False if ignored
        """
        if self.delivered:
            return False
        self.delivered = True
        self.emit(Response(request_url=self.request_url, body=body))
        return True
