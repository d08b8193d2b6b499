from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from . import hal
from .errors import NotResolvedError, UnboundResourceError
from .hal import Link

if TYPE_CHECKING:
    from .resolver import RelationResolver


class HyperObject(BaseModel):
    """
    Generic HAL resource and base class for declared domain types.

    Domain fields are copied from the representation as-is (extra="allow"),
    so undeclared keys stay reachable as attributes. `_links`/`_embedded`
    are kept raw because relations may hold one object or a list of them.
    """

    hal_links: Dict[str, Any] = Field(default_factory=dict, alias="_links")
    hal_embedded: Dict[str, Any] = Field(default_factory=dict, alias="_embedded")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    _resolver: Any = PrivateAttr(default=None)
    _resolved: bool = PrivateAttr(default=True)
    _pending: Any = PrivateAttr(default=None)

    @field_validator("hal_links", "hal_embedded", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    # --- Resolution state -------------------------------------------------- #

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def resolver(self) -> Optional["RelationResolver"]:
        return self._resolver

    def bind(self, resolver: "RelationResolver") -> "HyperObject":
        self._resolver = resolver
        return self

    async def ready(self) -> "HyperObject":
        """Wait for a pending background fetch (see RelationResolver.load)."""
        if self._pending is not None:
            await self._pending
        return self

    def absorb(self, other: "HyperObject") -> None:
        """Copy another instance's data onto this one, in place."""
        for name in type(other).model_fields:
            setattr(self, name, getattr(other, name))
        if self.__pydantic_extra__ is not None:
            self.__pydantic_extra__.update(other.model_extra or {})

    # --- Relations --------------------------------------------------------- #

    def hal_payload(self) -> Dict[str, Any]:
        return hal.to_payload(self.hal_links, self.hal_embedded)

    def rel(self, relation: str, name: Optional[str] = None) -> Awaitable[Any]:
        """
        Follow a relation. Returns an awaitable yielding one instance, a list
        of instances, or None when a single linked resource answered non-2xx.
        """
        if not self._resolved:
            raise NotResolvedError(
                f"Can't follow {relation!r} until the resource has resolved"
            )
        if self._resolver is None:
            raise UnboundResourceError(
                f"Can't follow {relation!r}: {type(self).__name__} is not bound "
                "to a RelationResolver"
            )
        return self._resolver.follow(self, relation, name)

    def count(self, relation: str, name: Optional[str] = None) -> int:
        return hal.count(self.hal_payload(), relation, name)

    def links(self, relation: str = "self", name: Optional[str] = None) -> List[Link]:
        return hal.links(self.hal_payload(), relation, name)

    def link(
        self, relation: str = "self", name: Optional[str] = None
    ) -> Optional[Link]:
        return hal.link(self.hal_payload(), relation, name)


__all__ = ["HyperObject", "Link"]
