from __future__ import annotations


class HyperResourceError(Exception):
    """Base error for relation resolution failures."""


class NotResolvedError(HyperResourceError):
    """Raised when following a relation on an instance still being fetched."""


class NoMatchError(HyperResourceError, LookupError):
    def __init__(self, relation: str, name: str | None = None):
        target = f"{relation!r}" if not name else f"{relation!r} named {name!r}"
        super().__init__(f"No resource matches relation {target}")
        self.relation = relation
        self.name = name


class AmbiguousLinkError(HyperResourceError, LookupError):
    def __init__(self, relation: str, name: str | None, matches: int):
        super().__init__(
            f"{matches} links match relation {relation!r}"
            + (f" named {name!r}" if name else "")
            + "; pass a name or use links()"
        )
        self.relation = relation
        self.name = name
        self.matches = matches


class UnboundResourceError(HyperResourceError):
    """Raised when a fetching relation is followed on an instance with no resolver."""


class MalformedLinkError(HyperResourceError):
    """Raised when a link without an href has to be fetched."""


class HyperResourceClientError(HyperResourceError):
    """Base error for transport failures."""


class HyperResourceParseError(HyperResourceClientError):
    pass


class HyperResourceModelValidationError(HyperResourceError):
    pass


__all__ = [
    "HyperResourceError",
    "NotResolvedError",
    "NoMatchError",
    "AmbiguousLinkError",
    "UnboundResourceError",
    "MalformedLinkError",
    "HyperResourceClientError",
    "HyperResourceParseError",
    "HyperResourceModelValidationError",
]
