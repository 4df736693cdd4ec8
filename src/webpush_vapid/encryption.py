"""Payload encryption collaborators.

Encrypting the notification body is not done here: an encryptor turns
plaintext into a :class:`PushPayload` carrying the ciphertext and the
headers the push service needs to relay it.
"""

from abc import ABC, abstractmethod

import structlog
from http_ece import ECEException
from pywebpush import WebPusher, WebPushException

from webpush_vapid.errors import InvalidCryptoKeysError, MissingCryptoKeysError
from webpush_vapid.message import ContentEncoding, Header, PushPayload
from webpush_vapid.subscription import SubscriptionInfo

logger = structlog.get_logger()


class PayloadEncryptor(ABC):
    """Abstract base for payload encryption adapters."""

    @abstractmethod
    def encrypt(
        self,
        subscription: SubscriptionInfo,
        content: bytes,
        encoding: ContentEncoding,
    ) -> PushPayload:
        """Encrypt ``content`` for the subscription's keys."""


def _text(value: bytes | str) -> str:
    return value.decode("ascii") if isinstance(value, bytes) else value


class PyWebPushEncryptor(PayloadEncryptor):
    """Encrypt with pywebpush (http_ece under the hood)."""

    def encrypt(
        self,
        subscription: SubscriptionInfo,
        content: bytes,
        encoding: ContentEncoding,
    ) -> PushPayload:
        if subscription.keys is None:
            raise MissingCryptoKeysError("Subscription has no p256dh/auth keys")
        try:
            pusher = WebPusher(subscription.as_dict())
            encoded = pusher.encode(content, content_encoding=str(encoding))
        except (WebPushException, ECEException, ValueError, TypeError) as e:
            logger.warning("push_encrypt_failed", error=str(e))
            raise InvalidCryptoKeysError(f"Cannot encrypt payload: {e}") from e

        headers: list[Header] = []
        if encoding == ContentEncoding.AESGCM:
            headers.append(("Crypto-Key", f"dh={_text(encoded['crypto_key'])}"))
            headers.append(("Encryption", f"salt={_text(encoded['salt'])}"))

        return PushPayload(
            content_encoding=str(encoding),
            content=encoded["body"],
            crypto_headers=tuple(headers),
        )
