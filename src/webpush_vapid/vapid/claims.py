"""VAPID claim set with audience and expiry defaults."""

import json
import time
from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import urlsplit

from webpush_vapid.errors import ClaimSerializationError, InvalidEndpointError

DEFAULT_EXPIRY_S = 12 * 60 * 60


def audience_for(endpoint: str) -> str:
    """``<scheme>://<host>`` of a push endpoint.

    Raises:
        InvalidEndpointError: If the endpoint has no scheme or host.
    """
    try:
        parts = urlsplit(endpoint)
        host = parts.hostname
    except ValueError as e:
        raise InvalidEndpointError(f"Cannot parse endpoint {endpoint!r}: {e}") from e
    if not parts.scheme or not host:
        raise InvalidEndpointError(f"Endpoint {endpoint!r} has no scheme or host")
    if ":" in host:
        host = f"[{host}]"
    return f"{parts.scheme}://{host}"


class ClaimSet(Mapping[str, Any]):
    """Ordered JWT claims for one VAPID signature.

    ``aud`` and ``exp`` are filled in by :meth:`with_defaults` only when
    the caller did not set them; caller values are kept as given.
    """

    def __init__(self, claims: Mapping[str, Any] | None = None) -> None:
        self._claims: dict[str, Any] = dict(claims or {})

    def add_claim(self, name: str, value: Any) -> "ClaimSet":
        """Insert or overwrite a claim. Returns self for chaining."""
        self._claims[name] = value
        return self

    def with_defaults(
        self,
        endpoint: str,
        now: float | None = None,
        expiry_s: int = DEFAULT_EXPIRY_S,
    ) -> dict[str, Any]:
        """Claims with ``aud`` and ``exp`` defaulted from endpoint and clock."""
        claims = dict(self._claims)
        if "aud" not in claims:
            claims["aud"] = audience_for(endpoint)
        if "exp" not in claims:
            if now is None:
                now = time.time()
            claims["exp"] = int(now) + expiry_s
        return claims

    def __getitem__(self, name: str) -> Any:
        return self._claims[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({self._claims!r})"


def encode_claims(claims: Mapping[str, Any]) -> bytes:
    """Compact JSON of the claims, keys in insertion order.

    Raises:
        ClaimSerializationError: If a value is not JSON encodable.
    """
    try:
        return json.dumps(
            dict(claims),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ClaimSerializationError(f"Claims are not JSON encodable: {e}") from e
