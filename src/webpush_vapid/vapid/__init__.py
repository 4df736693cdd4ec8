from webpush_vapid.vapid.claims import ClaimSet, audience_for, encode_claims
from webpush_vapid.vapid.key import VapidKey, load_or_create_vapid_key
from webpush_vapid.vapid.signer import (
    JWT_HEADER,
    VapidSignature,
    VapidSigner,
    der_to_raw_signature,
)
from webpush_vapid.vapid.builder import VapidSignatureBuilder

__all__ = [
    "JWT_HEADER",
    "ClaimSet",
    "VapidKey",
    "VapidSignature",
    "VapidSignatureBuilder",
    "VapidSigner",
    "audience_for",
    "der_to_raw_signature",
    "encode_claims",
    "load_or_create_vapid_key",
]
