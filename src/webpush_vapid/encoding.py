"""URL-safe base64 helpers used across the wire formats."""

import base64


def b64url_encode(data: bytes) -> str:
    """URL-safe base64 encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """Decode URL-safe or standard base64, padded or not.

    Raises:
        ValueError: If the input is not valid base64.
    """
    data = data.strip().replace("+", "-").replace("/", "_")
    data += "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data)
