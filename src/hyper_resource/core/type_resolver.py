"""Policies deciding which declared type a related object should become."""

from __future__ import annotations

from typing import Callable, Optional

from .hal import EmbeddedRef, Ref

TypeResolver = Callable[[Ref], Optional[str]]


def resource_type_from_link_type(ref: Ref) -> Optional[str]:
    """
    Default policy: the `type` of the link itself, or for an embedded object
    the `type` of its `_links.self` entry.
    Example: {'href': '/books/2', 'type': 'book'} -> 'book'
    """
    link = ref.self_link if isinstance(ref, EmbeddedRef) else ref.link
    return link.type if link is not None else None


__all__ = ["TypeResolver", "resource_type_from_link_type"]
