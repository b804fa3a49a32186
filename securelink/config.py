from typing import Optional

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from securelink.clock import Clock
from securelink.hashing import HASHERS, get_hasher
from securelink.signer import DEFAULT_EXPIRATION_PARAM, DEFAULT_SIGNATURE_PARAM, SecureLink


class ConfigurationError(ValueError):
    """Raised when the configuration cannot produce a working signer."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class SecureLinkConfig(BaseSettings):
    """
    Signer configuration loaded from the environment.

    Priority (highest to lowest):
    1. Init arguments
    2. Environment variables (SECURELINK_ prefix)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="SECURELINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    SECRET: SecretStr = SecretStr("")
    HASHER: str = "sha256"
    SIGNATURE_PARAM: str = DEFAULT_SIGNATURE_PARAM
    EXPIRATION_PARAM: str = DEFAULT_EXPIRATION_PARAM

    # Lifetime in seconds for sign_url calls without an explicit expiration
    DEFAULT_TTL: int = 3600

    @field_validator("HASHER")
    @classmethod
    def validate_hasher(cls, v: str) -> str:
        """Ensure the hasher names a supported algorithm."""
        name = v.strip().lower()
        if name not in HASHERS:
            supported = ", ".join(sorted(HASHERS))
            raise ValueError(f"HASHER must be one of: {supported}, got '{v}'")
        return name

    @field_validator("SIGNATURE_PARAM", "EXPIRATION_PARAM")
    @classmethod
    def validate_param_name(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @field_validator("DEFAULT_TTL")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be a positive integer, got {v}")
        return v

    @model_validator(mode="after")
    def validate_distinct_params(self) -> "SecureLinkConfig":
        if self.SIGNATURE_PARAM == self.EXPIRATION_PARAM:
            raise ValueError("SIGNATURE_PARAM and EXPIRATION_PARAM must differ")
        return self

    def validate_required(self) -> list[str]:
        """Validate required configuration."""
        errors = []
        if not self.SECRET.get_secret_value():
            errors.append("SECURELINK_SECRET is required")
        return errors


def build_secure_link(
    settings: Optional[SecureLinkConfig] = None, clock: Optional[Clock] = None
) -> SecureLink:
    """Create a SecureLink from configuration.

    Args:
        settings: Configuration to use (defaults to the module-level config)
        clock: Time source override, mainly for tests

    Raises:
        ConfigurationError: If required settings are missing
    """
    settings = settings or config
    errors = settings.validate_required()
    if errors:
        raise ConfigurationError(errors)
    return SecureLink(
        settings.SECRET.get_secret_value(),
        get_hasher(settings.HASHER),
        signature_param=settings.SIGNATURE_PARAM,
        expiration_param=settings.EXPIRATION_PARAM,
        clock=clock,
        default_ttl=settings.DEFAULT_TTL,
    )


config = SecureLinkConfig()
