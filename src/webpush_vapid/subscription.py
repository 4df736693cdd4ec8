"""Browser push subscription models."""

from pydantic import BaseModel, Field


class SubscriptionKeys(BaseModel):
    """Client keys for payload encryption."""

    p256dh: str = Field(description="Client ECDH public key, base64url")
    auth: str = Field(description="Client auth secret, base64url")


class SubscriptionInfo(BaseModel):
    """The ``PushSubscription.toJSON()`` shape a browser hands back."""

    endpoint: str
    keys: SubscriptionKeys | None = None

    @classmethod
    def from_json(cls, text: str | bytes) -> "SubscriptionInfo":
        return cls.model_validate_json(text)

    def as_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
