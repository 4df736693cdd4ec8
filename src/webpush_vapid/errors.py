"""Exception types for key loading, signing, message assembly and delivery."""

from datetime import timedelta


class WebPushVapidError(Exception):
    """Base exception for webpush_vapid errors."""

    short_description = "unspecified"


# Key boundary


class VapidKeyError(WebPushVapidError):
    """A VAPID private key could not be loaded."""


class KeyIoError(VapidKeyError):
    """The key source could not be read."""

    short_description = "io_error"


class KeyCryptoError(VapidKeyError):
    """The bytes are not a P-256 private key."""

    short_description = "crypto_error"


# Signing boundary


class VapidSignError(WebPushVapidError):
    """A VAPID signature could not be produced."""


class SignCryptoError(VapidSignError):
    """The ECDSA primitive failed."""

    short_description = "crypto_error"


class MalformedSignatureError(SignCryptoError):
    """The DER signature does not hold two 32-byte integers."""

    short_description = "malformed_signature"


class ClaimSerializationError(VapidSignError):
    """Claims cannot be encoded as JSON."""

    short_description = "claim_serialization"


class InvalidEndpointError(VapidSignError):
    """No audience can be derived from the endpoint."""

    short_description = "invalid_endpoint"


# Message assembly boundary


class MessageBuildError(WebPushVapidError):
    """A push message could not be assembled."""


class InvalidUriError(MessageBuildError):
    """The provided URI is invalid."""

    short_description = "invalid_uri"


class InvalidTtlError(MessageBuildError):
    """The TTL value provided was not valid."""

    short_description = "invalid_ttl"


class MissingCryptoKeysError(MessageBuildError):
    """The subscription is missing the keys needed for a payload."""

    short_description = "missing_crypto_keys"


class InvalidCryptoKeysError(MessageBuildError):
    """One or more of the subscription key elements are invalid."""

    short_description = "invalid_crypto_keys"


# Protocol/response boundary


class WebPushError(WebPushVapidError):
    """The push service did not accept the notification."""


class UnauthorizedError(WebPushError):
    """Please provide valid credentials to send the notification."""

    short_description = "unauthorized"


class BadRequestError(WebPushError):
    """Request was badly formed."""

    short_description = "bad_request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__doc__)
        self.message = message


class ServerError(WebPushError):
    """Server was unable to process the request, please try again later."""

    short_description = "server_error"

    def __init__(self, retry_after: timedelta | None = None) -> None:
        super().__init__(self.__doc__)
        self.retry_after = retry_after


class EndpointNotValidError(WebPushError):
    """The URL specified is no longer valid and should no longer be used."""

    short_description = "endpoint_not_valid"


class EndpointNotFoundError(WebPushError):
    """The URL specified is invalid and should not be used again."""

    short_description = "endpoint_not_found"


class PayloadTooLargeError(WebPushError):
    """The payload exceeds the push service's size limit."""

    short_description = "payload_too_large"


class InvalidResponseError(WebPushError):
    """The response data couldn't be parsed."""

    short_description = "invalid_response"


class OtherError(WebPushError):
    """Unexpected status code, or no response at all (``status`` is None)."""

    short_description = "other"

    def __init__(self, status: int | None, detail: str | None = None) -> None:
        super().__init__(detail or f"unexpected status {status}")
        self.status = status
        self.detail = detail
