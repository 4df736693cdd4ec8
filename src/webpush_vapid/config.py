import json
from pathlib import Path

from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    # Paths
    state_dir: str = Field(
        default=str(Path.home() / ".webpush"),
        validation_alias=AliasChoices("state_dir", "WEBPUSH_STATE"),
        description="Directory for key files and config.json",
    )

    # VAPID
    vapid_subject: str = "mailto:admin@localhost"
    vapid_expiry_s: int = Field(default=12 * 60 * 60, ge=1)

    # Delivery
    default_ttl: int = Field(default=2_419_200, ge=0, le=2**32 - 1)
    max_error_body_bytes: int = Field(default=64 * 1024, ge=1)
    user_agent: str = "webpush-vapid/0.1.0"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def vapid_pem_path(self) -> Path:
        """PEM file holding the VAPID private key."""
        return Path(self.state_dir) / "vapid_private.pem"

    model_config = {
        "env_prefix": "WEBPUSH_",
        "env_file": ".env",
        "extra": "ignore",
    }


_override: Settings | None = None


def get_settings() -> Settings:
    """Return the active settings instance."""
    if _override:
        return _override
    settings = Settings()
    return _load_config_file(settings)


def _load_config_file(settings: Settings) -> Settings:
    """Load and merge config.json if it exists.

    Merged values are validated like environment ones; an out-of-range
    value raises ``pydantic.ValidationError``.
    """
    config_path = Path(settings.state_dir) / "config.json"
    if not config_path.exists():
        return settings

    try:
        data = json.loads(config_path.read_text())
    except (json.JSONDecodeError, OSError):
        return settings
    if not isinstance(data, dict):
        return settings

    if "state_dir" in data and isinstance(data["state_dir"], str):
        data["state_dir"] = str(Path(data["state_dir"]).expanduser())

    known = {k: v for k, v in data.items() if k in Settings.model_fields}
    merged = settings.model_dump(exclude={"vapid_pem_path"}) | known
    return Settings.model_validate(merged)


def override_settings(s: Settings | None) -> None:
    """Swap in a custom Settings (use None to reset)."""
    global _override  # noqa: PLW0603
    _override = s
