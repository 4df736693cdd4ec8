"""Asynchronous Web Push client."""

import httpx
import structlog

from webpush_vapid.config import get_settings
from webpush_vapid.errors import WebPushError
from webpush_vapid.message import WebPushMessage
from webpush_vapid.response import (
    BodyAccumulator,
    ErrorInfo,
    classify_response,
    parse_error_info,
    requires_body,
)
from webpush_vapid.retry_after import parse_retry_after
from webpush_vapid.transport.base import (
    build_push_request,
    log_request,
    transport_failure,
    truncated_body,
)

logger = structlog.get_logger()


class AsyncWebPushClient:
    """Send notifications without blocking the event loop.

    Safe to share across tasks. Never times out on its own; wrap
    :meth:`send` in ``asyncio.timeout`` or pass a client with a timeout.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        max_error_body_bytes: int | None = None,
    ) -> None:
        settings = get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=None,
            headers={"User-Agent": settings.user_agent},
        )
        if max_error_body_bytes is None:
            max_error_body_bytes = settings.max_error_body_bytes
        self._max_body = max_error_body_bytes

    async def send(self, message: WebPushMessage) -> None:
        """Deliver ``message``.

        Raises:
            WebPushError: The classified failure, including ``OtherError``
                with ``status=None`` when no response was received.
        """
        request = build_push_request(message)
        log_request(request)
        try:
            async with self._client.stream(
                request.method,
                request.url,
                headers=list(request.headers),
                content=request.content,
            ) as response:
                error = await self._classify(response)
        except httpx.HTTPError as e:
            raise transport_failure(request, e) from e
        if error is not None:
            raise error

    async def _classify(self, response: httpx.Response) -> WebPushError | None:
        status = response.status_code
        logger.debug(
            "push_response",
            endpoint=str(response.request.url),
            status=status,
        )
        retry_after = parse_retry_after(response.headers.get("Retry-After"))

        info: ErrorInfo | None = None
        if requires_body(status):
            body = BodyAccumulator(
                self._max_body,
                response.headers.get("Content-Length"),
            )
            try:
                async for chunk in response.aiter_bytes():
                    body.feed(chunk)
            except httpx.HTTPError as e:
                raise truncated_body(response, e) from e
            info = parse_error_info(body.body)

        return classify_response(status, retry_after, lambda: info)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncWebPushClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
