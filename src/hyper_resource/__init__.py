"""hyper_resource package exports."""

from .core import (
    AmbiguousLinkError,
    HalResponse,
    HyperClient,
    HyperObject,
    HyperResourceClientError,
    HyperResourceError,
    HyperResourceModelValidationError,
    HyperResourceParseError,
    Link,
    MalformedLinkError,
    NoMatchError,
    NotResolvedError,
    RelationResolver,
    RetryConfig,
    TypeRegistry,
    UnboundResourceError,
    create_resolver_from_env,
    resource_type_from_link_type,
    setup_logging,
)

__all__ = [
    "RelationResolver",
    "HyperObject",
    "Link",
    "TypeRegistry",
    "resource_type_from_link_type",
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
    # Setup helpers
    "create_resolver_from_env",
    "setup_logging",
]
