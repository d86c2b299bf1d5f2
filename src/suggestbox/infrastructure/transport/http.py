"""HTTP transport using httpx.

Each request becomes one GET whose decoded JSON body is delivered on the
request's `PendingResponse`. Failures are logged and never delivered: the
engine has no error channel, so a failed lookup looks exactly like one that
is still in flight.
"""

import asyncio

import httpx

from suggestbox.core.stream import Stream, Subject
from suggestbox.domain.events import Request
from suggestbox.infrastructure.transport.pending import PendingResponse
from suggestbox.logger import get_logger

logger = get_logger("transport.http")

USER_AGENT = "suggestbox/0.1 (terminal search-suggestion combo box)"


class HttpTransport:
    """
    Transport issuing real HTTP requests.

    Must be used from within a running asyncio event loop.

    Example:
        ```python
        transport = HttpTransport()
        engine = ComboBoxEngine(transport, AsyncioScheduler(), endpoint=BASE_URL)
        ...
        await transport.aclose()
        ```
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """
        Args:
            client: httpx client to use. If None, one is created (and closed by
                    `aclose()`).
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        self._responses: Subject[PendingResponse] = Subject(name="http-responses")
        self._tasks: set[asyncio.Task] = set()

    @property
    def responses(self) -> Stream[PendingResponse]:
        return self._responses

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def send(self, request: Request) -> None:
        pending = PendingResponse(request.url)
        self._responses.emit(pending)

        task = asyncio.create_task(self._fetch(pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, pending: PendingResponse) -> None:
        try:
            response = await self._client.get(pending.request_url)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Request to {pending.request_url} failed: {e}")
            return
        except ValueError as e:
            logger.warning(f"Response from {pending.request_url} is not JSON: {e}")
            return

        try:
            pending.deliver(body)
        except Exception as e:
            logger.opt(exception=True).error(f"Error handling response from {pending.request_url}: {e}")

    async def wait_idle(self) -> None:
        """Wait until every in-flight request has finished (delivered or failed)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel in-flight requests and close the client if we created it."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"Cancelled {len(tasks)} in-flight request(s)")

        if self._owns_client:
            await self._client.aclose()
