"""Client configuration for xacml-pep.

Defines configuration models for the PDP connection, TLS trust, timeouts,
and logging. Configuration is either constructed in code or loaded from a
JSON file; there is no persisted state.

Example usage:
    # Construct directly
    config = ClientConfiguration(
        pdp_url="https://pdp.example.com/authorize",
        username="pep",
        password="secret",
    )

    # Load from config file
    config = ClientConfiguration.load_from_file(config_path)

Example config file:
    {
      "pdp_url": "https://pdp.example.com/authorize",
      "username": "pep",
      "credential_key": "pdp-prod",
      "tls": {"ca_bundle_path": "~/certs/pdp-ca.pem"},
      "timeouts": {"connect_seconds": 5, "read_seconds": 20},
      "logging": {"log_level": "DEBUG", "include_payloads": false}
    }
"""

from __future__ import annotations

__all__ = [
    "ClientConfiguration",
    "LoggingConfig",
    "TLSConfig",
    "TimeoutConfig",
]

import json
from pathlib import Path
from typing import Literal

import httpx
from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator

from xacml_pep.constants import (
    APP_NAME,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
    DEFAULT_READ_TIMEOUT_SECONDS,
    MAX_CONNECT_TIMEOUT_SECONDS,
    MAX_READ_TIMEOUT_SECONDS,
    MIN_CONNECT_TIMEOUT_SECONDS,
    MIN_READ_TIMEOUT_SECONDS,
)
from xacml_pep.exceptions import ConfigurationError
from xacml_pep.utils.file_helpers import load_validated_json, require_file_exists


# =============================================================================
# TLS Configuration
# =============================================================================


class TLSConfig(BaseModel):
    """TLS trust configuration for the PDP channel.

    Certificate and hostname verification are on by default. Turning them
    off is an explicit opt-out meant for development against PDPs with
    self-signed certificates.

    Attributes:
        trust_all_certificates: Accept any server certificate and hostname.
        ca_bundle_path: CA bundle (PEM) used to verify the PDP certificate.
            Defaults to the system trust store.
        client_cert_path: Client certificate (PEM) for mutual TLS.
        client_key_path: Client private key (PEM) for mutual TLS.
    """

    trust_all_certificates: bool = False
    ca_bundle_path: str | None = Field(default=None, min_length=1)
    client_cert_path: str | None = Field(default=None, min_length=1)
    client_key_path: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _client_cert_and_key_together(self) -> "TLSConfig":
        if (self.client_cert_path is None) != (self.client_key_path is None):
            raise ValueError("client_cert_path and client_key_path must be set together")
        return self

    @property
    def uses_client_certificate(self) -> bool:
        """Check if mutual TLS is configured."""
        return self.client_cert_path is not None


# =============================================================================
# Timeout Configuration
# =============================================================================


class TimeoutConfig(BaseModel):
    """Connect and read timeouts for PDP calls.

    Attributes:
        connect_seconds: Time allowed to establish the connection (1-120).
        read_seconds: Time allowed to wait for the PDP's response (1-300).
    """

    connect_seconds: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT_SECONDS,
        ge=MIN_CONNECT_TIMEOUT_SECONDS,
        le=MAX_CONNECT_TIMEOUT_SECONDS,
    )
    read_seconds: float = Field(
        default=DEFAULT_READ_TIMEOUT_SECONDS,
        ge=MIN_READ_TIMEOUT_SECONDS,
        le=MAX_READ_TIMEOUT_SECONDS,
    )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Attributes:
        log_level: Logging level (DEBUG or INFO). DEBUG enables wire logs.
        include_payloads: Whether wire logs include request/response bodies.
        log_file: Optional JSONL file receiving WARNING and above.
    """

    log_level: Literal["DEBUG", "INFO"] = "INFO"
    include_payloads: bool = True
    log_file: str | None = Field(default=None, min_length=1)


# =============================================================================
# Client Configuration
# =============================================================================


class ClientConfiguration(BaseModel):
    """Connection settings for one Policy Decision Point.

    Attributes:
        pdp_url: PDP endpoint receiving XACML JSON requests.
        username: HTTP Basic username.
        password: HTTP Basic password. Optional when credential_key is set.
        credential_key: OS keychain key holding the password. Used only when
            password is not set; the password is then never stored in config.
        tls: TLS trust configuration.
        timeouts: Connect and read timeouts.
        logging: Logging configuration.
    """

    pdp_url: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: SecretStr | None = None
    credential_key: str | None = Field(default=None, min_length=1)
    tls: TLSConfig = Field(default_factory=TLSConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}  # Ignore unknown fields for forward compat

    @field_validator("pdp_url")
    @classmethod
    def _pdp_url_absolute(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"pdp_url is not a valid URL: {e}") from e
        if url.scheme.lower() not in ("http", "https"):
            raise ValueError("pdp_url must use the http or https scheme")
        if not url.host:
            raise ValueError("pdp_url must include a host")
        return value

    @field_validator("password")
    @classmethod
    def _password_not_empty(cls, value: SecretStr | None) -> SecretStr | None:
        if value is not None and not value.get_secret_value():
            raise ValueError("password must not be empty")
        return value

    @model_validator(mode="after")
    def _password_source_required(self) -> "ClientConfiguration":
        if self.password is None and self.credential_key is None:
            raise ValueError("either password or credential_key is required")
        return self

    @property
    def is_https(self) -> bool:
        """Check if the PDP URL uses TLS."""
        return self.pdp_url.lower().startswith("https://")

    def resolve_password(self) -> str:
        """Return the Basic auth password.

        Uses the configured password when present, otherwise loads it from
        the OS keychain under credential_key.

        Returns:
            The password string.

        Raises:
            ConfigurationError: If the keychain has no entry or cannot be read.
        """
        if self.password is not None:
            return self.password.get_secret_value()

        assert self.credential_key is not None  # Guaranteed by _password_source_required
        import keyring
        from keyring.errors import KeyringError

        try:
            credential = keyring.get_password(APP_NAME, self.credential_key)
        except KeyringError as e:
            raise ConfigurationError(f"Failed to access keychain: {e}") from e
        if not credential:
            raise ConfigurationError(
                f"PDP password not found in keychain (key: {self.credential_key}). "
                f"Store it with: keyring set {APP_NAME} {self.credential_key}"
            )
        return credential

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file without the password.

        Creates parent directories if they don't exist.
        Sets owner-only permissions (0o600) on the file.

        Args:
            config_path: Path where the config JSON file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json", exclude={"password"}), f, indent=2)
            f.write("\n")  # Trailing newline

        config_path.chmod(0o600)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "ClientConfiguration":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            ClientConfiguration instance with loaded configuration.

        Raises:
            ConfigurationError: If the file is missing, is not valid JSON,
                or fails validation.
        """
        try:
            require_file_exists(config_path, file_type="configuration")
            return load_validated_json(
                config_path,
                cls,
                file_type="client config",
                recovery_hint="Check the PDP URL and credentials in the config file.",
            )
        except (FileNotFoundError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
