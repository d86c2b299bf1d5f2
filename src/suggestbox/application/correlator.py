"""
ResponseCorrelator - keeps only this widget's latest response.

Latest-request-wins: the correlator subscribes to the response stream of the
most recently issued matching request only. An older request's response is
never observed, even if it arrives after the newer one's.
"""

from typing import Any, Sequence

from suggestbox.core.operators import filter_stream, map_stream, switch_latest
from suggestbox.core.stream import Stream
from suggestbox.domain.events import Response
from suggestbox.domain.protocols import ResponseStream
from suggestbox.logger import get_logger

logger = get_logger("correlator")


def extract_suggestions(body: Any) -> list[str] | None:
    """
    Unwrap the suggestion list from an opensearch payload.

    The payload is `[echoed_query, [items...], ...]`; anything else yields None.
    """
    if not isinstance(body, (list, tuple)) or len(body) < 2:
        return None
    items = body[1]
    if not isinstance(items, (list, tuple)) or not all(isinstance(item, str) for item in items):
        return None
    return list(items)


class ResponseCorrelator:
    """Filters the transport's response streams down to suggestion lists."""

    def __init__(self, responses: Stream[ResponseStream], endpoint: str):
        """
        Args:
            responses: Per-request response streams from the transport
            endpoint: Endpoint template; requests not starting with it are foreign
        """
        self._responses = responses
        self.endpoint = endpoint

    def _is_ours(self, pending: ResponseStream) -> bool:
        if pending.request_url.startswith(self.endpoint):
            return True
        logger.debug(f"Ignoring foreign response stream for {pending.request_url}")
        return False

    def _unwrap(self, response: Response) -> list[str] | None:
        suggestions = extract_suggestions(response.body)
        if suggestions is None:
            logger.warning(f"Dropping malformed response for {response.request_url}")
        else:
            logger.debug(f"Received {len(suggestions)} suggestion(s) for {response.request_url}")
        return suggestions

    def suggestions(self) -> Stream[Sequence[str]]:
        latest = switch_latest(filter_stream(self._responses, self._is_ours))
        unwrapped = map_stream(latest, self._unwrap)
        return filter_stream(unwrapped, lambda suggestions: suggestions is not None)
