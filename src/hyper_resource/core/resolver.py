from __future__ import annotations

import asyncio
import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)

from pydantic import ValidationError

from . import hal
from .client import HyperClient
from .errors import (
    HyperResourceModelValidationError,
    MalformedLinkError,
    NoMatchError,
    NotResolvedError,
)
from .hal import EmbeddedRef, Link, LinkRef, Ref
from .models import HyperObject
from .observability import log_event
from .registry import TypeRegistry
from .type_resolver import TypeResolver, resource_type_from_link_type

T = TypeVar("T", bound=HyperObject)

Related = Union[Optional[HyperObject], List[Optional[HyperObject]]]


class RelationResolver:
    """
    Follows HAL relations and turns what it finds into typed instances.

    Owns the type registry, the active type resolver and the HTTP client.
    Every instance it builds is bound to it, so `instance.rel(...)` works on
    fetched, embedded and nested resources alike.

    The type resolver is read by every in-flight resolution; swap it during
    setup, not while relations are being followed.
    """

    def __init__(
        self,
        client: Optional[HyperClient] = None,
        *,
        registry: Optional[TypeRegistry] = None,
        type_resolver: Optional[TypeResolver] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.client = client or HyperClient()
        self.registry = registry if registry is not None else TypeRegistry()
        self.type_resolver: TypeResolver = (
            type_resolver or resource_type_from_link_type
        )
        self.log = logger or logging.getLogger("hyper_resource.resolver")

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "RelationResolver":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --- Types ------------------------------------------------------------- #

    def declare_type(
        self, name: str, model: Optional[Type[T]] = None
    ) -> Union[Type[T], Callable[[Type[T]], Type[T]]]:
        """
        Register `model` under `name`; without `model`, works as a class
        decorator. Re-declaring a name replaces the previous type.
        """
        if model is None:

            def decorator(cls: Type[T]) -> Type[T]:
                return self.registry.register(name, cls)

            return decorator
        return self.registry.register(name, model)

    def set_type_resolver(self, fn: Optional[TypeResolver]) -> None:
        """Replace the active type resolver; None restores the default."""
        self.type_resolver = fn or resource_type_from_link_type

    def resolve_type(self, ref: Ref) -> Type[HyperObject]:
        type_name = self.type_resolver(ref)
        model = self.registry.lookup(type_name)
        if model is None:
            if type_name:
                self.log.debug(
                    "Unknown resource type %s, using HyperObject", type_name
                )
            return HyperObject
        return model

    def wrap(
        self, data: Mapping[str, Any], model: Optional[Type[T]] = None
    ) -> HyperObject:
        """Build a resolved, bound instance of `model` from a representation."""
        model = model or HyperObject
        try:
            instance = model.model_validate(data)
        except ValidationError as exc:
            raise HyperResourceModelValidationError(
                f"Representation did not match model {model.__name__}: {exc}"
            ) from exc
        return instance.bind(self)

    # --- Non-fetching lookups ---------------------------------------------- #

    def count(
        self, instance: HyperObject, relation: str, name: Optional[str] = None
    ) -> int:
        return hal.count(instance.hal_payload(), relation, name)

    def links(
        self, instance: HyperObject, relation: str = "self", name: Optional[str] = None
    ) -> List[Link]:
        return hal.links(instance.hal_payload(), relation, name)

    def link(
        self, instance: HyperObject, relation: str = "self", name: Optional[str] = None
    ) -> Optional[Link]:
        return hal.link(instance.hal_payload(), relation, name)

    # --- Following --------------------------------------------------------- #

    def follow(
        self, instance: HyperObject, relation: str, name: Optional[str] = None
    ) -> Awaitable[Related]:
        """
        Resolve every resource related to `instance` by `relation`.

        Raises NotResolvedError right away if `instance` is still being
        fetched. The returned awaitable raises NoMatchError when nothing
        matches, yields a single instance for one match, and a list for
        several: embedded resources first, then linked ones.
        """
        if not instance.resolved:
            raise NotResolvedError(
                f"Can't follow {relation!r} until the resource has resolved"
            )
        payload = instance.hal_payload()
        links = hal.resolve_links(payload, relation, name)
        embeddeds = hal.resolve_embedded(payload, relation, name)
        return self._follow(relation, name, links, embeddeds)

    async def _follow(
        self,
        relation: str,
        name: Optional[str],
        links: List[LinkRef],
        embeddeds: List[EmbeddedRef],
    ) -> Related:
        matches = len(links) + len(embeddeds)
        log_event(
            "relation_follow",
            self.log,
            relation=relation,
            name=name,
            matches=matches,
        )

        if matches == 0:
            raise NoMatchError(relation, name)

        candidates: List[Ref] = [*embeddeds, *links]
        if matches == 1:
            return await self._resolve(candidates[0])

        # gather keeps argument order and fails as soon as one fetch fails
        return list(await asyncio.gather(*(self._resolve(ref) for ref in candidates)))

    async def _resolve(self, ref: Ref) -> Optional[HyperObject]:
        model = self.resolve_type(ref)
        if isinstance(ref, EmbeddedRef):
            return self.wrap(ref.data, model)
        return await self._fetch_link(ref.link, model)

    async def _fetch_link(
        self, link: Link, model: Type[HyperObject]
    ) -> Optional[HyperObject]:
        if not link.href or not isinstance(link.href, str):
            raise MalformedLinkError(
                f"Link {link.model_dump(exclude_none=True)} has no usable href"
            )
        return await self.fetch(link.href, model)

    # --- Top-level fetches ------------------------------------------------- #

    async def fetch(
        self,
        url: str,
        model: Optional[Type[T]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[HyperObject]:
        """GET `url` and wrap the body; None when the server answers non-2xx."""
        resp = await self.client.get(url, params=params)
        if not resp.ok:
            log_event(
                "relation_fetch_miss",
                self.log,
                url=resp.url,
                status=resp.status_code,
            )
            return None
        return self.wrap(resp.body, model)

    def load(
        self,
        url: str,
        model: Optional[Type[T]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> HyperObject:
        """
        Return an empty, unresolved `model` right away and fill it in the
        background. `await instance.ready()` waits for the fetch. Following
        relations on the placeholder raises NotResolvedError until then.
        Must be called from a running event loop.
        """
        model = model or HyperObject
        placeholder = model.model_construct().bind(self)
        placeholder._resolved = False

        async def populate() -> None:
            fetched = await self.fetch(url, model, params=params)
            if fetched is not None:
                placeholder.absorb(fetched)
            placeholder._resolved = True

        def report(task: "asyncio.Future[None]") -> None:
            if task.cancelled() or task.exception() is None:
                return
            self.log.warning(
                "Background fetch of %s failed: %s",
                url,
                task.exception(),
                extra={"url": url},
            )

        placeholder._pending = asyncio.ensure_future(populate())
        placeholder._pending.add_done_callback(report)
        return placeholder


__all__ = ["RelationResolver", "Related"]
