"""
webpush-vapid - Web Push delivery with VAPID authentication.

Signs VAPID tokens with a P-256 key, sends push requests over httpx and
classifies push service responses into typed errors.
"""

from webpush_vapid.errors import (
    BadRequestError,
    ClaimSerializationError,
    EndpointNotFoundError,
    EndpointNotValidError,
    InvalidCryptoKeysError,
    InvalidEndpointError,
    InvalidResponseError,
    InvalidTtlError,
    InvalidUriError,
    KeyCryptoError,
    KeyIoError,
    MalformedSignatureError,
    MessageBuildError,
    MissingCryptoKeysError,
    OtherError,
    PayloadTooLargeError,
    ServerError,
    SignCryptoError,
    UnauthorizedError,
    VapidKeyError,
    VapidSignError,
    WebPushError,
    WebPushVapidError,
)
from webpush_vapid.subscription import SubscriptionInfo, SubscriptionKeys
from webpush_vapid.vapid import (
    ClaimSet,
    VapidKey,
    VapidSignature,
    VapidSignatureBuilder,
    VapidSigner,
    load_or_create_vapid_key,
)
from webpush_vapid.message import (
    ContentEncoding,
    PushPayload,
    WebPushMessage,
    WebPushMessageBuilder,
)
from webpush_vapid.encryption import PayloadEncryptor, PyWebPushEncryptor
from webpush_vapid.retry_after import parse_retry_after
from webpush_vapid.response import ErrorInfo, classify_response
from webpush_vapid.transport import AsyncWebPushClient, WebPushClient

__version__ = "0.1.0"

__all__ = [
    # Keys and signing
    "ClaimSet",
    "VapidKey",
    "VapidSignature",
    "VapidSignatureBuilder",
    "VapidSigner",
    "load_or_create_vapid_key",
    # Messages
    "SubscriptionInfo",
    "SubscriptionKeys",
    "ContentEncoding",
    "PushPayload",
    "WebPushMessage",
    "WebPushMessageBuilder",
    "PayloadEncryptor",
    "PyWebPushEncryptor",
    # Delivery
    "WebPushClient",
    "AsyncWebPushClient",
    "ErrorInfo",
    "classify_response",
    "parse_retry_after",
    # Errors
    "WebPushVapidError",
    "VapidKeyError",
    "KeyIoError",
    "KeyCryptoError",
    "VapidSignError",
    "SignCryptoError",
    "MalformedSignatureError",
    "ClaimSerializationError",
    "InvalidEndpointError",
    "MessageBuildError",
    "InvalidUriError",
    "InvalidTtlError",
    "MissingCryptoKeysError",
    "InvalidCryptoKeysError",
    "WebPushError",
    "UnauthorizedError",
    "BadRequestError",
    "ServerError",
    "EndpointNotValidError",
    "EndpointNotFoundError",
    "PayloadTooLargeError",
    "InvalidResponseError",
    "OtherError",
]
