"""VAPID token signing (ES256 compact JWS).

The token is ``header.claims.signature`` where the signature is the raw
``r || s`` form of an ECDSA P-256/SHA-256 signature, not the DER form
that ``cryptography`` produces.
"""

import json
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from webpush_vapid.encoding import b64url_encode
from webpush_vapid.errors import MalformedSignatureError, SignCryptoError
from webpush_vapid.vapid.claims import DEFAULT_EXPIRY_S, ClaimSet, encode_claims
from webpush_vapid.vapid.key import VapidKey

logger = structlog.get_logger()

JWT_HEADER = b64url_encode(
    json.dumps({"typ": "JWT", "alg": "ES256"}, separators=(",", ":")).encode()
)

COORDINATE_SIZE = 32


@dataclass(frozen=True)
class VapidSignature:
    """A signed VAPID token and the public key that verifies it."""

    token: str
    public_key: str

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` header."""
        return f"WebPush {self.token}"


def der_to_raw_signature(der: bytes) -> bytes:
    """Convert a DER ``SEQUENCE { INTEGER r, INTEGER s }`` to 64-byte ``r || s``.

    Raises:
        MalformedSignatureError: If the input is not such a sequence or
            either integer does not fit in 32 bytes.
    """
    try:
        r, s = decode_dss_signature(der)
    except ValueError as e:
        raise MalformedSignatureError(f"Invalid DER signature: {e}") from e
    try:
        return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")
    except OverflowError as e:
        raise MalformedSignatureError(
            f"Signature integer does not fit in {COORDINATE_SIZE} bytes"
        ) from e


class VapidSigner:
    """Produce VAPID signatures for push endpoints."""

    @staticmethod
    def sign(
        key: VapidKey,
        endpoint: str,
        claims: Mapping[str, Any] | None = None,
        now: float | None = None,
        expiry_s: int = DEFAULT_EXPIRY_S,
    ) -> VapidSignature:
        """Sign ``claims`` for ``endpoint``.

        ``aud`` defaults to the endpoint origin and ``exp`` to
        ``now + expiry_s``; caller-supplied values win.

        Raises:
            InvalidEndpointError: If ``aud`` must be derived and cannot be.
            ClaimSerializationError: If the claims are not JSON encodable.
            SignCryptoError: If the ECDSA primitive fails.
        """
        if now is None:
            now = time.time()
        claim_set = claims if isinstance(claims, ClaimSet) else ClaimSet(claims)
        full_claims = claim_set.with_defaults(endpoint, now=now, expiry_s=expiry_s)

        signing_input = f"{JWT_HEADER}.{b64url_encode(encode_claims(full_claims))}"

        try:
            der = key.private_key.sign(
                signing_input.encode("utf-8"),
                ec.ECDSA(hashes.SHA256()),
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise SignCryptoError(f"ECDSA signing failed: {e}") from e

        raw = der_to_raw_signature(der)
        public_key = b64url_encode(key.public_key)
        logger.debug("vapid_signed", aud=full_claims["aud"], public_key=public_key)

        return VapidSignature(
            token=f"{signing_input}.{b64url_encode(raw)}",
            public_key=public_key,
        )
