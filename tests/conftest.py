import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from webpush_vapid.config import Settings, override_settings
from webpush_vapid.encoding import b64url_encode
from webpush_vapid.subscription import SubscriptionInfo, SubscriptionKeys
from webpush_vapid.vapid.key import VapidKey


@pytest.fixture(autouse=True)
def _test_settings(tmp_path):
    """Override settings so tests never touch the real state dir."""
    override_settings(
        Settings(
            state_dir=str(tmp_path),
        )
    )
    yield
    override_settings(None)


@pytest.fixture
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def vapid_key(ec_private_key) -> VapidKey:
    return VapidKey(ec_private_key)


@pytest.fixture
def pem_bytes(ec_private_key) -> bytes:
    return ec_private_key.private_bytes(
        Encoding.PEM, PrivateFormat.TraditionalOpenSSL, NoEncryption()
    )


@pytest.fixture
def der_bytes(ec_private_key) -> bytes:
    return ec_private_key.private_bytes(
        Encoding.DER, PrivateFormat.PKCS8, NoEncryption()
    )


@pytest.fixture
def subscription() -> SubscriptionInfo:
    """A subscription with real client keys, as a browser would send."""
    client_key = ec.generate_private_key(ec.SECP256R1())
    p256dh = client_key.public_key().public_bytes(
        Encoding.X962, PublicFormat.UncompressedPoint
    )
    return SubscriptionInfo(
        endpoint="https://push.example/wpush/v2/abc123",
        keys=SubscriptionKeys(
            p256dh=b64url_encode(p256dh),
            auth=b64url_encode(b"0123456789abcdef"),
        ),
    )
