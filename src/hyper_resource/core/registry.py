from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional, Type

from .models import HyperObject

log = logging.getLogger("hyper_resource.core.registry")


class TypeRegistry:
    """
    Declared type name -> domain type.

    Registrations normally happen once at setup; lookups run on every
    relation that is followed. The lock keeps lookups consistent while a
    late registration is being written.
    """

    def __init__(self) -> None:
        self._types: Dict[str, Type[HyperObject]] = {}
        self._lock = threading.RLock()

    def register(self, name: str, model: Type[HyperObject]) -> Type[HyperObject]:
        if not isinstance(model, type) or not issubclass(model, HyperObject):
            raise TypeError(
                f"Resource type {name!r} must be a HyperObject subclass, got {model!r}"
            )
        with self._lock:
            previous = self._types.get(name)
            self._types[name] = model
        if previous is not None and previous is not model:
            log.debug(
                "Replaced resource type %s: %s -> %s",
                name,
                previous.__name__,
                model.__name__,
            )
        else:
            log.debug("Registered resource type %s (%s)", name, model.__name__)
        return model

    def lookup(self, name: Any) -> Optional[Type[HyperObject]]:
        if not name or not isinstance(name, str):
            return None
        with self._lock:
            return self._types.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._types)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._types

    def __len__(self) -> int:
        with self._lock:
            return len(self._types)


__all__ = ["TypeRegistry"]
