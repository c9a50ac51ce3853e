"""Configuration helpers for the news feed service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
import os


DEFAULT_PROVIDERS: Tuple[str, ...] = ("guardian", "newsapi", "nytimes")

# Environment variable holding each provider credential, keyed by config name.
API_KEY_ENV = {
    "guardian_api_key": "GUARDIAN_API_KEY",
    "news_api_key": "NEWS_API_KEY",
    "ny_times_api_key": "NY_TIMES_API_KEY",
}


@dataclass
class AggregatorConfig:
    """Top-level configuration for the service."""

    api_host: str = "0.0.0.0"
    api_port: int = 8080
    provider_timeout: float = 10.0
    concurrency: int = 4
    provider_retries: int = 1
    user_agent: str = "newsfeed/1.0"
    log_level: str = "INFO"
    enabled_providers: Tuple[str, ...] = DEFAULT_PROVIDERS
    api_keys: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.provider_timeout <= 0:
            raise ValueError("provider_timeout must be positive")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if self.provider_retries < 0:
            raise ValueError("provider_retries must not be negative")

    def api_key(self, name: str) -> Optional[str]:
        """Return the credential stored under ``name`` or ``None`` if unset."""

        value = self.api_keys.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()


def _parse_providers(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None:
        return DEFAULT_PROVIDERS
    names = tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    if not names:
        raise ValueError("NEWS_PROVIDERS must list at least one provider")
    return names


def load_config() -> AggregatorConfig:
    """Load configuration from environment variables with sensible defaults."""

    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("PORT", "8080"))
    provider_timeout = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "10"))
    concurrency = int(os.getenv("FETCH_CONCURRENCY", "4"))
    provider_retries = int(os.getenv("PROVIDER_RETRIES", "1"))
    user_agent = os.getenv("USER_AGENT", "newsfeed/1.0")
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    enabled_providers = _parse_providers(os.getenv("NEWS_PROVIDERS"))

    api_keys: Dict[str, str] = {}
    for key_name, env_name in API_KEY_ENV.items():
        value = os.getenv(env_name)
        if value:
            api_keys[key_name] = value

    return AggregatorConfig(
        api_host=api_host,
        api_port=api_port,
        provider_timeout=provider_timeout,
        concurrency=concurrency,
        provider_retries=provider_retries,
        user_agent=user_agent,
        log_level=log_level,
        enabled_providers=enabled_providers,
        api_keys=api_keys,
    )


__all__ = [
    "API_KEY_ENV",
    "AggregatorConfig",
    "DEFAULT_PROVIDERS",
    "load_config",
]
