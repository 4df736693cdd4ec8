"""Map push service responses onto the WebPushError taxonomy."""

from collections.abc import Callable
from datetime import timedelta
from http import HTTPStatus

import structlog
from pydantic import BaseModel, ValidationError

from webpush_vapid.errors import (
    BadRequestError,
    EndpointNotFoundError,
    EndpointNotValidError,
    InvalidResponseError,
    OtherError,
    PayloadTooLargeError,
    ServerError,
    UnauthorizedError,
    WebPushError,
)

logger = structlog.get_logger()


class ErrorInfo(BaseModel):
    """JSON error body returned by push services on 400."""

    code: int
    errno: int
    error: str
    message: str

    model_config = {"extra": "ignore"}


def parse_error_info(body: bytes) -> ErrorInfo | None:
    """Decode an error body, or None when it is not UTF-8 error JSON."""
    if not body:
        return None
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        return None
    try:
        return ErrorInfo.model_validate_json(text)
    except ValidationError:
        return None


def requires_body(status: int) -> bool:
    """True when classifying ``status`` needs the response body."""
    return status == HTTPStatus.BAD_REQUEST


def classify_response(
    status: int,
    retry_after: timedelta | None,
    read_error_info: Callable[[], ErrorInfo | None],
) -> WebPushError | None:
    """Return the error for a response, or None on success.

    ``read_error_info`` is only called for 400 responses, so callers can
    defer reading the body until it is known to matter.
    """
    if 200 <= status < 300:
        return None
    if status >= 500:
        return ServerError(retry_after)

    match status:
        case HTTPStatus.UNAUTHORIZED:
            return UnauthorizedError()
        case HTTPStatus.GONE:
            return EndpointNotValidError()
        case HTTPStatus.NOT_FOUND:
            return EndpointNotFoundError()
        case HTTPStatus.REQUEST_ENTITY_TOO_LARGE:
            return PayloadTooLargeError()
        case HTTPStatus.BAD_REQUEST:
            info = read_error_info()
            return BadRequestError(info.error if info else None)
        case _:
            return OtherError(status)


class BodyAccumulator:
    """Collect response chunks up to ``max_bytes``.

    A declared Content-Length above the cap is rejected before any chunk
    is read.
    """

    def __init__(self, max_bytes: int, content_length: str | None = None) -> None:
        self.limit = max_bytes
        declared = _parse_content_length(content_length)
        if declared is not None and declared > max_bytes:
            logger.warning("push_error_body_too_large", limit=max_bytes, declared=declared)
            raise InvalidResponseError(
                f"Error body of {declared} bytes exceeds {max_bytes} byte cap"
            )
        self._buf = bytearray()

    def feed(self, chunk: bytes) -> None:
        self._buf.extend(chunk)
        if len(self._buf) > self.limit:
            logger.warning("push_error_body_too_large", limit=self.limit)
            raise InvalidResponseError(
                f"Error body exceeds {self.limit} byte cap"
            )

    @property
    def body(self) -> bytes:
        return bytes(self._buf)


def _parse_content_length(value: str | None) -> int | None:
    if value is None:
        return None
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)
