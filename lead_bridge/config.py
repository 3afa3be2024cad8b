"""Application configuration."""

from functools import lru_cache

from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from lead_bridge.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # so SMTP_HOST works regardless of case
        env_ignore_empty=True,  # SMTP_USER= counts as missing
        extra="ignore",
    )

    # SMTP relay
    smtp_host: str = "mail.lendnet.io"
    smtp_port: int = 465
    # Bool fields take pydantic parsing (true/1/yes/on), not only the literal "true"
    smtp_secure: bool = True  # implicit TLS; False falls back to STARTTLS when offered
    smtp_user: str
    smtp_pass: str

    # Shared secret the webhook source sends as ?token= or {"token": ...}
    bridge_token: str

    # Addressing
    mail_from: str = "Lendnet.io <notify@lendnet.io>"
    mail_reply_to: str = "sean@lendnet.io"
    mail_subj_prefix: str = "[Lendnet.io]"
    mail_to_test: str = "sean@lendnet.io"
    mail_to_live: str = "info@lyftcapital.com"
    mail_cc_live: str = "sean@lendnet.io"

    # App
    test_mode: bool = False
    debug_mailer: bool = False
    log_level: str = "INFO"


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment (plus explicit overrides).

    Missing required values surface as ConfigurationError naming the variables.
    """
    try:
        return Settings(**overrides)
    except SettingsValidationError as e:
        missing = [
            str(err["loc"][0]).upper()
            for err in e.errors()
            if err.get("type") == "missing" and err.get("loc")
        ]
        if missing:
            raise ConfigurationError(f"Missing env {', '.join(missing)}") from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once on first use."""
    return load_settings()
