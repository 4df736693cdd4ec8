"""Push messages and the builder that assembles them."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from webpush_vapid.config import get_settings
from webpush_vapid.errors import (
    InvalidTtlError,
    InvalidUriError,
    MissingCryptoKeysError,
)
from webpush_vapid.subscription import SubscriptionInfo
from webpush_vapid.vapid.signer import VapidSignature

if TYPE_CHECKING:
    from webpush_vapid.encryption import PayloadEncryptor

MAX_TTL = 2**32 - 1

Header = tuple[str, str]


class ContentEncoding(StrEnum):
    """Payload encryption schemes understood by push services."""

    AES128GCM = "aes128gcm"
    AESGCM = "aesgcm"


@dataclass(frozen=True)
class PushPayload:
    """An encrypted notification body plus the headers it needs."""

    content_encoding: str
    content: bytes
    crypto_headers: tuple[Header, ...] = ()


@dataclass(frozen=True)
class WebPushMessage:
    """Everything needed to POST one notification."""

    endpoint: str
    ttl: int
    payload: PushPayload | None = None
    headers: tuple[Header, ...] = ()


def validate_endpoint(endpoint: str) -> str:
    """Return ``endpoint`` if it is an absolute http(s) URL."""
    try:
        parts = urlsplit(endpoint)
        host = parts.hostname
    except ValueError as e:
        raise InvalidUriError(f"Invalid endpoint {endpoint!r}: {e}") from e
    if parts.scheme not in ("http", "https") or not host:
        raise InvalidUriError(f"Endpoint {endpoint!r} is not an absolute http(s) URL")
    return endpoint


def validate_ttl(ttl: int) -> int:
    if isinstance(ttl, bool) or not isinstance(ttl, int) or not 0 <= ttl <= MAX_TTL:
        raise InvalidTtlError(f"TTL must be an integer in 0..{MAX_TTL}, got {ttl!r}")
    return ttl


def _with_vapid_key(headers: list[Header], public_key: str) -> list[Header]:
    """Announce the VAPID key in Crypto-Key, merging with an existing one."""
    key_param = f"p256ecdsa={public_key}"
    merged: list[Header] = []
    found = False
    for name, value in headers:
        if not found and name.lower() == "crypto-key":
            value = f"{value};{key_param}" if value else key_param
            found = True
        merged.append((name, value))
    if not found:
        merged.append(("Crypto-Key", key_param))
    return merged


class WebPushMessageBuilder:
    """Assemble a :class:`WebPushMessage` for one subscription."""

    def __init__(self, subscription_info: SubscriptionInfo) -> None:
        validate_endpoint(subscription_info.endpoint)
        self._subscription_info = subscription_info
        self._ttl = validate_ttl(get_settings().default_ttl)
        self._payload: tuple[ContentEncoding, bytes] | None = None
        self._signature: VapidSignature | None = None

    def set_ttl(self, ttl: int) -> "WebPushMessageBuilder":
        """Seconds the push service should keep the message if undelivered."""
        self._ttl = validate_ttl(ttl)
        return self

    def set_payload(
        self,
        encoding: ContentEncoding | str,
        content: bytes | str,
    ) -> "WebPushMessageBuilder":
        """Plaintext to encrypt at build time."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._payload = (ContentEncoding(encoding), content)
        return self

    def set_vapid_signature(self, signature: VapidSignature) -> "WebPushMessageBuilder":
        self._signature = signature
        return self

    def build(self, encryptor: "PayloadEncryptor | None" = None) -> WebPushMessage:
        """Encrypt the payload (if any) and attach VAPID headers.

        Raises:
            MissingCryptoKeysError: A payload is set but the subscription
                has no keys.
            InvalidCryptoKeysError: The encryptor rejected the keys.
        """
        payload: PushPayload | None = None
        if self._payload is not None and self._payload[1]:
            if self._subscription_info.keys is None:
                raise MissingCryptoKeysError("Subscription has no p256dh/auth keys")
            if encryptor is None:
                from webpush_vapid.encryption import PyWebPushEncryptor

                encryptor = PyWebPushEncryptor()
            encoding, content = self._payload
            payload = encryptor.encrypt(self._subscription_info, content, encoding)

        headers: list[Header] = []
        if self._signature is not None:
            headers.append(("Authorization", self._signature.authorization))
            if payload is not None:
                payload = PushPayload(
                    content_encoding=payload.content_encoding,
                    content=payload.content,
                    crypto_headers=tuple(
                        _with_vapid_key(
                            list(payload.crypto_headers),
                            self._signature.public_key,
                        )
                    ),
                )
            else:
                headers = _with_vapid_key(headers, self._signature.public_key)

        return WebPushMessage(
            endpoint=self._subscription_info.endpoint,
            ttl=self._ttl,
            payload=payload,
            headers=tuple(headers),
        )
