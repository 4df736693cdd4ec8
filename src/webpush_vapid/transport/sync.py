"""Blocking Web Push client."""

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
)
from webpush_vapid.retry_after import parse_retry_after
from webpush_vapid.transport.base import (
    build_push_request,
    log_request,
    transport_failure,
    truncated_body,
)

logger = structlog.get_logger()


class WebPushClient:
    """Send notifications, blocking until the response is classified.

    Never times out on its own; pass an ``httpx.Client`` with a timeout
    to bound a send.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        max_error_body_bytes: int | None = None,
    ) -> None:
        settings = get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=None,
            headers={"User-Agent": settings.user_agent},
        )
        if max_error_body_bytes is None:
            max_error_body_bytes = settings.max_error_body_bytes
        self._max_body = max_error_body_bytes

    def send(self, message: WebPushMessage) -> None:
        """Deliver ``message``.

        Raises:
            WebPushError: The classified failure, including ``OtherError``
                with ``status=None`` when no response was received.
        """
        request = build_push_request(message)
        log_request(request)
        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=list(request.headers),
                content=request.content,
            ) as response:
                error = self._classify(response)
        except httpx.HTTPError as e:
            raise transport_failure(request, e) from e
        if error is not None:
            raise error

    def _classify(self, response: httpx.Response) -> WebPushError | None:
        logger.debug(
            "push_response",
            endpoint=str(response.request.url),
            status=response.status_code,
        )
        retry_after = parse_retry_after(response.headers.get("Retry-After"))

        def read_error_info() -> ErrorInfo | None:
            body = BodyAccumulator(
                self._max_body,
                response.headers.get("Content-Length"),
            )
            try:
                for chunk in response.iter_bytes():
                    body.feed(chunk)
            except httpx.HTTPError as e:
                raise truncated_body(response, e) from e
            return parse_error_info(body.body)

        return classify_response(response.status_code, retry_after, read_error_info)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "WebPushClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
