from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .client import HyperClient, RetryConfig
from .resolver import RelationResolver


@dataclass(frozen=True)
class ClientSettings:
    base_url: str = ""
    timeout_seconds: float = 10.0
    max_retries: int = 0
    log_level: str = "INFO"


def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_env_config(*, use_dotenv: bool = True) -> ClientSettings:
    """Load client settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return ClientSettings(
        base_url=os.getenv("HYPER_RESOURCE_BASE_URL", "").strip(),
        timeout_seconds=_env_number("HYPER_RESOURCE_TIMEOUT", 10.0, float),
        max_retries=_env_number("HYPER_RESOURCE_MAX_RETRIES", 0, int),
        log_level=os.getenv("HYPER_RESOURCE_LOG_LEVEL", "").strip() or "INFO",
    )


def apply_log_level(level: str) -> None:
    """Set the level of the library's loggers; handlers stay the host's choice."""
    logging.getLogger("hyper_resource").setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )


def create_client_from_env(**kwargs) -> HyperClient:
    """Create a HyperClient from environment variables; kwargs win."""
    settings = load_env_config()
    apply_log_level(settings.log_level)
    kwargs.setdefault("base_url", settings.base_url)
    kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
    kwargs.setdefault("retry", RetryConfig(max_retries=settings.max_retries))
    return HyperClient(**kwargs)


def create_resolver_from_env(**kwargs) -> RelationResolver:
    """Create a RelationResolver around a client configured from environment."""
    return RelationResolver(create_client_from_env(), **kwargs)


__all__ = [
    "ClientSettings",
    "load_env_config",
    "apply_log_level",
    "create_client_from_env",
    "create_resolver_from_env",
]
