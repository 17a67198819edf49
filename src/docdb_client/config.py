"""Client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

_AUTH_SCHEMES = ("digest", "basic")


@dataclass(slots=True, frozen=True)
class TransportConfig:
    """Timeouts and TLS settings for the REST connection."""

    timeout_connect_seconds: float = 5.0
    timeout_read_seconds: float = 60.0
    timeout_write_seconds: float = 30.0
    timeout_pool_seconds: float = 5.0
    # False disables verification; a str names a CA bundle file
    verify_tls: bool | str = True

    def validate(self) -> None:
        for field_name in (
            "timeout_connect_seconds",
            "timeout_read_seconds",
            "timeout_write_seconds",
            "timeout_pool_seconds",
        ):
            if getattr(self, field_name) <= 0:
                raise ValueError(f"transport.{field_name} must be > 0")
        if not isinstance(self.verify_tls, (bool, str)) or self.verify_tls == "":
            raise ValueError("transport.verify_tls must be bool or a CA bundle path")


@dataclass(slots=True, frozen=True)
class RetryConfig:
    """Retry-related settings."""

    max_attempts: int = 3
    max_backoff_seconds: float = 10.0
    total_retry_budget_seconds: float = 60.0

    def validate(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("retry.max_attempts must be >= 1")
        if self.max_backoff_seconds < 0:
            raise ValueError("retry.max_backoff_seconds must be >= 0")
        if self.total_retry_budget_seconds < 0:
            raise ValueError("retry.total_retry_budget_seconds must be >= 0")


@dataclass(slots=True, frozen=True)
class AuthConfig:
    """Credentials for the REST endpoint."""

    username: str
    password: str = field(repr=False)
    scheme: str = "digest"

    def validate(self) -> None:
        if not self.username:
            raise ValueError("auth.username must not be empty")
        if not isinstance(self.password, str):
            raise ValueError("auth.password must be str")
        if self.scheme not in _AUTH_SCHEMES:
            raise ValueError(f"auth.scheme must be one of {', '.join(_AUTH_SCHEMES)}")


@dataclass(slots=True, frozen=True)
class DocDbClientConfig:
    """Runtime configuration for the database client."""

    base_url: str = "http://localhost:8000"
    user_agent: str = "docdb-client/0.1.0"
    auth: AuthConfig | None = None

    transport: TransportConfig = field(default_factory=TransportConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    def validate(self) -> None:
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.auth is not None:
            self.auth.validate()
        self.transport.validate()
        self.retry.validate()


__all__ = [
    "TransportConfig",
    "RetryConfig",
    "AuthConfig",
    "DocDbClientConfig",
]
