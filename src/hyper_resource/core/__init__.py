"""Core relation resolution for HAL resources (transport-agnostic apart from client)."""

from .client import HalResponse, HyperClient, RetryConfig
from .config import (
    ClientSettings,
    create_client_from_env,
    create_resolver_from_env,
    load_env_config,
)
from .errors import (
    AmbiguousLinkError,
    HyperResourceClientError,
    HyperResourceError,
    HyperResourceModelValidationError,
    HyperResourceParseError,
    MalformedLinkError,
    NoMatchError,
    NotResolvedError,
    UnboundResourceError,
)
from .hal import EmbeddedRef, Link, LinkRef, Ref
from .logging import LogfmtFormatter, setup_logging
from .models import HyperObject
from .registry import TypeRegistry
from .resolver import RelationResolver
from .type_resolver import TypeResolver, resource_type_from_link_type

__all__ = [
    # Resolution
    "RelationResolver",
    "HyperObject",
    "TypeRegistry",
    "TypeResolver",
    "resource_type_from_link_type",
    # HAL primitives
    "Link",
    "LinkRef",
    "EmbeddedRef",
    "Ref",
    # Client
    "HyperClient",
    "HalResponse",
    "RetryConfig",
    # Exceptions
    "HyperResourceError",
    "NotResolvedError",
    "NoMatchError",
    "AmbiguousLinkError",
    "UnboundResourceError",
    "MalformedLinkError",
    "HyperResourceClientError",
    "HyperResourceParseError",
    "HyperResourceModelValidationError",
    # Config helpers
    "ClientSettings",
    "load_env_config",
    "create_client_from_env",
    "create_resolver_from_env",
    # Logging
    "setup_logging",
    "LogfmtFormatter",
]
