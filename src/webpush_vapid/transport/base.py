"""Request construction shared by the blocking and async clients."""

from dataclasses import dataclass

import httpx
import structlog

from webpush_vapid.errors import InvalidResponseError, OtherError
from webpush_vapid.message import Header, WebPushMessage

logger = structlog.get_logger()

OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class PushRequest:
    """A serialized push request, ready for any HTTP client."""

    url: str
    headers: tuple[Header, ...]
    content: bytes
    method: str = "POST"


def build_push_request(message: WebPushMessage) -> PushRequest:
    """Lay out headers and body for ``message``.

    Order: TTL, message headers, then for a payload Content-Encoding,
    Content-Length, Content-Type and the crypto headers as given.
    """
    headers: list[Header] = [("TTL", str(message.ttl))]
    headers.extend(message.headers)

    content = b""
    if message.payload is not None:
        payload = message.payload
        content = payload.content
        headers.append(("Content-Encoding", payload.content_encoding))
        headers.append(("Content-Length", str(len(content))))
        headers.append(("Content-Type", OCTET_STREAM))
        headers.extend(payload.crypto_headers)

    return PushRequest(url=message.endpoint, headers=tuple(headers), content=content)


def transport_failure(request: PushRequest, exc: httpx.HTTPError) -> OtherError:
    """Map an httpx failure with no usable response onto the taxonomy."""
    logger.warning(
        "push_transport_failed",
        endpoint=request.url,
        error=repr(exc),
    )
    return OtherError(None, f"{type(exc).__name__}: {exc}")


def truncated_body(
    response: httpx.Response, exc: httpx.HTTPError
) -> InvalidResponseError:
    """Map a failure while reading an error body that was already announced."""
    logger.warning(
        "push_error_body_truncated",
        endpoint=str(response.request.url),
        status=response.status_code,
        error=repr(exc),
    )
    return InvalidResponseError(
        f"Reading {response.status_code} error body failed: {type(exc).__name__}"
    )


def log_request(request: PushRequest) -> None:
    logger.debug(
        "push_request",
        endpoint=request.url,
        headers=[name for name, _ in request.headers],
        content_length=len(request.content),
    )
