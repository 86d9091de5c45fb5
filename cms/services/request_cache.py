"""
Per-request memoization for read operations.

A CmsService lives for one logical request. Read methods decorated with
@request_cached remember their results on the service instance, so asking the
same question twice in one request costs one store round trip.

Cache keys are the method name plus every bound argument with defaults
applied, so list_entries("blog") and list_entries("blog", status="published")
share an entry. Values of different types never share a key, so limit=True
is not served the result of limit=1.

Callers get their own deep copy of a cached result; changing it does not
change what later reads in the request return. Mutations call clear() and
the next read goes to the store.
"""

import copy
import functools
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Hashable, TypeVar

from cms.core.logging import get_logger


logger = get_logger("cms.request_cache")

ResultT = TypeVar("ResultT")


class RequestCache:
    """Result store keyed on (operation, arguments)."""

    def __init__(self) -> None:
        self._results: dict[Hashable, Any] = {}
        self.hits = 0
        self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        return key in self._results

    def __len__(self) -> int:
        return len(self._results)

    def get(self, key: Hashable) -> Any:
        return self._results[key]

    def set(self, key: Hashable, value: Any) -> None:
        self._results[key] = value

    def clear(self) -> None:
        self._results.clear()


def _freeze(value: Any) -> Hashable:
    if isinstance(value, Enum):
        return _freeze(value.value)
    if isinstance(value, dict):
        return tuple(sorted((key, _freeze(item)) for key, item in value.items()))
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    # Tagged with the type: True == 1 and hash(True) == hash(1)
    return (type(value).__name__, value)


def request_cached(
    method: Callable[..., Awaitable[ResultT]],
) -> Callable[..., Awaitable[ResultT]]:
    """
    Memoize an async service method on `self.cache`.

    Example:
        class CmsService:
            @request_cached
            async def get_entry_by_id(self, entry_id, *, include_relations=None):
                ...
    """
    signature = inspect.signature(method)

    @functools.wraps(method)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> ResultT:
        bound = signature.bind(self, *args, **kwargs)
        bound.apply_defaults()
        arguments = tuple(
            (name, _freeze(value)) for name, value in bound.arguments.items() if name != "self"
        )
        key = (method.__name__, arguments)

        cache: RequestCache = self.cache
        try:
            if key in cache:
                cache.hits += 1
                return copy.deepcopy(cache.get(key))
        except TypeError:
            # Unhashable argument: run uncached
            return await method(self, *args, **kwargs)

        cache.misses += 1
        result = await method(self, *args, **kwargs)
        cache.set(key, copy.deepcopy(result))
        logger.debug("Request cache stored", operation=method.__name__)
        return result

    return wrapper
