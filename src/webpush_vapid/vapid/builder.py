"""Builder pairing a subscription with the claims to sign for it."""

from typing import Any

from webpush_vapid.config import get_settings
from webpush_vapid.subscription import SubscriptionInfo
from webpush_vapid.vapid.claims import ClaimSet
from webpush_vapid.vapid.key import VapidKey
from webpush_vapid.vapid.signer import VapidSignature, VapidSigner


class VapidSignatureBuilder:
    """Collect claims for one subscription, then sign them.

    ``aud`` and ``exp`` are added automatically; add them explicitly to
    override the defaults. ``sub`` is taken from settings unless given.

    Example::

        key = VapidKey.from_file("private.pem")
        builder = VapidSignatureBuilder(subscription_info)
        builder.add_claim("sub", "mailto:test@example.com")
        signature = builder.sign(key)
    """

    def __init__(self, subscription_info: SubscriptionInfo) -> None:
        self._subscription_info = subscription_info
        self._claims = ClaimSet()

    def add_claim(self, name: str, value: Any) -> "VapidSignatureBuilder":
        self._claims.add_claim(name, value)
        return self

    def sign(self, key: VapidKey) -> VapidSignature:
        settings = get_settings()
        claims = ClaimSet(self._claims)
        if "sub" not in claims and settings.vapid_subject:
            claims.add_claim("sub", settings.vapid_subject)
        return VapidSigner.sign(
            key,
            self._subscription_info.endpoint,
            claims,
            expiry_s=settings.vapid_expiry_s,
        )
