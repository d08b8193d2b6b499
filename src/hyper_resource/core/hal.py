from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from .errors import AmbiguousLinkError

log = logging.getLogger("hyper_resource.core.hal")


class Link(BaseModel):
    """
    A HAL link object, read as-is. Values are never validated: a numeric
    name or a localized title dict comes through untouched, and unknown
    metadata (profile, deprecation, ...) is kept verbatim in model_extra.
    """

    href: Any = None
    type: Any = None
    name: Any = None
    title: Any = None
    templated: Any = None

    model_config = ConfigDict(extra="allow", frozen=True)


@dataclass(frozen=True)
class LinkRef:
    """A candidate found under `_links`; fetched when followed."""

    link: Link

    @property
    def name(self) -> Any:
        return self.link.name


@dataclass(frozen=True)
class EmbeddedRef:
    """A candidate found under `_embedded`; wrapped locally when followed."""

    data: Mapping[str, Any]

    @property
    def self_link(self) -> Optional[Link]:
        return get_self_link(self.data)

    @property
    def name(self) -> Any:
        link = self.self_link
        return link.name if link else None


Ref = Union[LinkRef, EmbeddedRef]


def as_list(value: Any) -> List[Any]:
    """
    Normalizes a relation value to a list.
    Example: {'href': '/a'} -> [{'href': '/a'}], None -> []
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _entries(section: Optional[Mapping[str, Any]], relation: str) -> List[Mapping]:
    if not isinstance(section, Mapping):
        return []
    entries = []
    for entry in as_list(section.get(relation)):
        if not isinstance(entry, Mapping):
            log.debug("Dropping non-object entry under relation %s", relation)
            continue
        entries.append(entry)
    return entries


def get_self_link(data: Mapping[str, Any]) -> Optional[Link]:
    """
    Extracts the `self` link of an embedded representation, if any.
    A list-valued self relation yields its first entry.
    """
    links = data.get("_links")
    if not isinstance(links, Mapping):
        return None
    entries = _entries(links, "self")
    return Link.model_validate(entries[0]) if entries else None


def resolve_links(
    payload: Mapping[str, Any], relation: str, name: Optional[str] = None
) -> List[LinkRef]:
    """Links under `_links[relation]`, filtered on `link.name` when name is given."""
    refs = [
        LinkRef(Link.model_validate(entry))
        for entry in _entries(payload.get("_links"), relation)
    ]
    if name:
        refs = [ref for ref in refs if ref.name == name]
    return refs


def resolve_embedded(
    payload: Mapping[str, Any], relation: str, name: Optional[str] = None
) -> List[EmbeddedRef]:
    """
    Embedded objects under `_embedded[relation]`.
    An embedded object's name lives on its own self link, so filtering
    matches `_links.self.name`.
    """
    refs = [
        EmbeddedRef(entry) for entry in _entries(payload.get("_embedded"), relation)
    ]
    if name:
        refs = [ref for ref in refs if ref.name == name]
    return refs


def count(payload: Mapping[str, Any], relation: str, name: Optional[str] = None) -> int:
    return len(resolve_links(payload, relation, name)) + len(
        resolve_embedded(payload, relation, name)
    )


def links(
    payload: Mapping[str, Any], relation: str = "self", name: Optional[str] = None
) -> List[Link]:
    """
    Link view of a relation without fetching anything: matching links, then
    the self link of every matching embedded object that has one.
    """
    found = [ref.link for ref in resolve_links(payload, relation, name)]
    for ref in resolve_embedded(payload, relation, name):
        self_link = ref.self_link
        if self_link is not None:
            found.append(self_link)
    return found


def link(
    payload: Mapping[str, Any], relation: str = "self", name: Optional[str] = None
) -> Optional[Link]:
    found = links(payload, relation, name)
    if not found:
        return None
    if len(found) > 1:
        raise AmbiguousLinkError(relation, name, len(found))
    return found[0]


def to_payload(
    hal_links: Dict[str, Any], hal_embedded: Dict[str, Any]
) -> Dict[str, Any]:
    return {"_links": hal_links, "_embedded": hal_embedded}


__all__ = [
    "Link",
    "LinkRef",
    "EmbeddedRef",
    "Ref",
    "as_list",
    "get_self_link",
    "resolve_links",
    "resolve_embedded",
    "count",
    "links",
    "link",
    "to_payload",
]
