"""VAPID key management for Web Push."""

import json
from pathlib import Path
from typing import BinaryIO

import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
    load_der_private_key,
    load_pem_private_key,
)

from webpush_vapid.encoding import b64url_decode, b64url_encode
from webpush_vapid.errors import KeyCryptoError, KeyIoError

logger = structlog.get_logger()

CURVE = ec.SECP256R1()
PUBLIC_KEY_SIZE = 65
PRIVATE_KEY_SIZE = 32

KeySource = bytes | BinaryIO


class VapidKey:
    """A P-256 private key and its cached uncompressed public point.

    Immutable after construction, so one instance can sign for any number
    of concurrent sends.
    """

    __slots__ = ("_private_key", "_public_key")

    def __init__(self, private_key: ec.EllipticCurvePrivateKey) -> None:
        if not isinstance(private_key, ec.EllipticCurvePrivateKey):
            raise KeyCryptoError("VAPID key must be an elliptic curve key")
        if private_key.curve.name != CURVE.name:
            raise KeyCryptoError(
                f"VAPID key must be on {CURVE.name}, got {private_key.curve.name}"
            )
        self._private_key = private_key
        self._public_key = private_key.public_key().public_bytes(
            encoding=Encoding.X962,
            format=PublicFormat.UncompressedPoint,
        )

    @classmethod
    def from_pem(cls, source: KeySource) -> "VapidKey":
        """Load a PEM encoded private key (SEC1 or PKCS#8)."""
        data = _read_source(source)
        try:
            private_key = load_pem_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyCryptoError(f"Invalid PEM private key: {e}") from e
        return cls(private_key)  # type: ignore[arg-type]

    @classmethod
    def from_der(cls, source: KeySource) -> "VapidKey":
        """Load a DER encoded private key (SEC1 or PKCS#8)."""
        data = _read_source(source)
        try:
            private_key = load_der_private_key(data, password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise KeyCryptoError(f"Invalid DER private key: {e}") from e
        return cls(private_key)  # type: ignore[arg-type]

    @classmethod
    def from_file(cls, path: str | Path) -> "VapidKey":
        """Load a PEM or DER key file, telling them apart by the PEM armor."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise KeyIoError(f"Cannot read VAPID key {path}: {e}") from e
        if data.lstrip().startswith(b"-----BEGIN"):
            key = cls.from_pem(data)
        else:
            key = cls.from_der(data)
        logger.debug("vapid_key_loaded", path=str(path))
        return key

    @classmethod
    def from_raw(cls, scalar: str | bytes) -> "VapidKey":
        """Load the bare 32-byte private scalar, base64url encoded or raw."""
        if isinstance(scalar, str):
            try:
                scalar = b64url_decode(scalar)
            except ValueError as e:
                raise KeyCryptoError(f"Invalid base64 private key: {e}") from e
        if len(scalar) != PRIVATE_KEY_SIZE:
            raise KeyCryptoError(
                f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(scalar)}"
            )
        try:
            private_key = ec.derive_private_key(int.from_bytes(scalar, "big"), CURVE)
        except ValueError as e:
            raise KeyCryptoError(f"Invalid private scalar: {e}") from e
        return cls(private_key)

    @classmethod
    def generate(cls) -> "VapidKey":
        """Create a fresh random key."""
        return cls(ec.generate_private_key(CURVE))

    @property
    def public_key(self) -> bytes:
        """65-byte uncompressed point (0x04 || x || y)."""
        return self._public_key

    @property
    def private_key(self) -> ec.EllipticCurvePrivateKey:
        return self._private_key

    @property
    def application_server_key(self) -> str:
        """Public key as URL-safe base64, for pushManager.subscribe()."""
        return b64url_encode(self._public_key)

    def to_pem(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=Encoding.PEM,
            format=PrivateFormat.PKCS8,
            encryption_algorithm=NoEncryption(),
        )


def _read_source(source: KeySource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    try:
        return source.read()
    except OSError as e:
        raise KeyIoError(f"Cannot read VAPID key: {e}") from e


def load_or_create_vapid_key(state_dir: str | Path) -> VapidKey:
    """Load or auto-generate the VAPID EC key pair.

    Args:
        state_dir: Directory for persistent state files.

    Returns:
        The loaded or newly generated key. ``vapid_keys.json`` next to
        the PEM file holds the application server key for clients.
    """
    state_dir = Path(state_dir)
    pem_path = state_dir / "vapid_private.pem"
    json_path = state_dir / "vapid_keys.json"

    if pem_path.exists():
        return VapidKey.from_file(pem_path)

    key = VapidKey.generate()
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
        pem_path.write_bytes(key.to_pem())
        pem_path.chmod(0o600)
        json_path.write_text(json.dumps({"public_key": key.application_server_key}))
    except OSError as e:
        raise KeyIoError(f"Cannot persist VAPID key in {state_dir}: {e}") from e
    logger.info("vapid_key_created", path=str(pem_path))
    return key
