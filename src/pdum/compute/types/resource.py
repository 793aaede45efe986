"""Shared resource base classes."""

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Protocol

from pdum.compute._helpers import _attach_callback, _join_url

from .exceptions import ApiError
from .methods import Method
from .response import ApiResponse


class Parent(Protocol):
    """What a resource needs from the object it hangs off."""

    @property
    def url(self) -> str: ...

    def request(self, method: str, uri: str = "", **kwargs: Any) -> ApiResponse: ...

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future: ...


@dataclass(frozen=True)
class GenericResource:
    """Request-capable capability addressed by ``parent``, ``base_url`` and ``id``.

    The final request URL is the parent's URL followed by ``base_url`` and
    ``id``; empty segments are omitted. Operations here are synchronous and
    raise on failure. :class:`Resource` wraps them for callers.

    Attributes
    ----------
    parent : Parent
        Owning context (a :class:`~pdum.compute.compute.Compute` or another resource).
    base_url : str
        Path segment prefix below the parent, e.g. ``"zones"``.
    id : str
        Resource identifier below ``base_url``.
    """

    parent: Parent
    base_url: str = ""
    id: str = ""

    def __post_init__(self) -> None:
        # Empty segments are dropped from URLs, so an id without a base_url
        # would collide with a base_url of the same name.
        if self.id and not self.base_url:
            raise ValueError(f"Resource id {self.id!r} needs a non-empty base_url")

    @property
    def url(self) -> str:
        return _join_url(self.parent.url, self.base_url, self.id)

    def request(self, method: str, uri: str = "", **kwargs: Any) -> ApiResponse:
        """Forward a request for ``uri`` (relative to this resource) to the parent."""
        return self.parent.request(method, _join_url(self.base_url, self.id, uri), **kwargs)

    def fetch_metadata(self) -> tuple[Any, ApiResponse]:
        response = self.request("GET")
        return response.body, response

    def exists(self) -> bool:
        """Return ``False`` on a 404; any other error propagates."""
        try:
            self.request("GET")
        except ApiError as e:
            if e.code == 404:
                return False
            raise
        return True

    def set_metadata(self, metadata: dict) -> tuple[Any, ApiResponse]:
        response = self.request("PATCH", json=metadata)
        return response.body, response

    def delete(self) -> ApiResponse:
        return self.request("DELETE")


class _Operation:
    """Descriptor for a generic operation gated by the owner's method table.

    Looking the operation up on an instance whose class does not declare
    ``method`` raises ``AttributeError``. Otherwise the bound call runs the
    wrapped function on the parent's executor and either returns the future
    or, when a ``callback`` is given, reports the outcome through it.

    ``callback`` may be passed by keyword or as the last positional argument.
    Arguments that do not fit the wrapped function raise ``TypeError`` before
    anything is submitted.
    """

    def __init__(self, func: Callable[..., tuple], method: Method, arity: int) -> None:
        functools.update_wrapper(self, func)
        self.func = func
        self.method = method
        self.arity = arity
        self.name = func.__name__
        self.signature = inspect.signature(func)
        # Positional parameters after ``self``.
        self.positional = sum(
            1
            for p in list(self.signature.parameters.values())[1:]
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        )

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Optional["Resource"], objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        if self.method not in obj.methods:
            raise AttributeError(f"{type(obj).__name__!r} object has no attribute {self.name!r}")

        @functools.wraps(self.func)
        def bound(*args: Any, callback: Optional[Callable[..., None]] = None, **kwargs: Any) -> Optional[Future]:
            if callback is None and len(args) == self.positional + 1 and callable(args[-1]):
                *args, callback = args
            try:
                self.signature.bind(obj, *args, **kwargs)
            except TypeError as e:
                raise TypeError(f"{self.name}(): {e}") from None
            future = obj.submit(self.func, obj, *args, **kwargs)
            if callback is None:
                return future
            _attach_callback(future, callback, self.arity)
            return None

        return bound


def operation(method: Method, *, arity: int) -> Callable[[Callable[..., tuple]], _Operation]:
    """Declare ``func`` as the implementation of ``method``, returning ``arity`` results."""

    def decorator(func: Callable[..., tuple]) -> _Operation:
        return _Operation(func, method, arity)

    return decorator


class Resource(ABC):
    """Abstract base for resource proxies.

    Subclasses set ``methods`` to the :class:`Method` members they support and
    call ``super().__init__`` with their addressing. Instances hold no state
    beyond that identity.

    Every declared operation accepts an optional keyword-only ``callback``.
    Without one, the call returns a :class:`concurrent.futures.Future` that
    resolves to the result tuple. With one, the call returns ``None`` and
    ``callback(error, *results)`` runs exactly once when the request settles.
    """

    methods: ClassVar[frozenset[Method]] = frozenset()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        invalid = [m for m in cls.methods if not isinstance(m, Method)]
        if invalid:
            raise TypeError(f"{cls.__name__}.methods contains non-Method entries: {invalid!r}")
        cls.methods = frozenset(cls.methods)

    def __init__(self, parent: Parent, *, base_url: str = "", id: str = "") -> None:
        self._resource = GenericResource(parent=parent, base_url=base_url, id=id)

    @abstractmethod
    def full_resource_name(self) -> str:
        """Return the relative resource name, e.g. ``projects/{id}``."""

    @property
    def parent(self) -> Parent:
        return self._resource.parent

    @property
    def base_url(self) -> str:
        return self._resource.base_url

    @property
    def id(self) -> str:
        return self._resource.id

    @property
    def url(self) -> str:
        return self._resource.url

    def request(self, method: str, uri: str = "", **kwargs: Any) -> ApiResponse:
        return self._resource.request(method, uri, **kwargs)

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        return self.parent.submit(fn, *args, **kwargs)

    @operation(Method.GET, arity=2)
    def get(self) -> tuple["Resource", ApiResponse]:
        """Fetch the resource; resolves with ``(self, api_response)``."""
        _, response = self._resource.fetch_metadata()
        return self, response

    @operation(Method.GET_METADATA, arity=2)
    def get_metadata(self) -> tuple[Any, ApiResponse]:
        """Fetch the resource's metadata; resolves with ``(metadata, api_response)``."""
        return self._resource.fetch_metadata()

    @operation(Method.EXISTS, arity=1)
    def exists(self) -> tuple[bool]:
        return (self._resource.exists(),)

    @operation(Method.SET_METADATA, arity=2)
    def set_metadata(self, metadata: dict) -> tuple[Any, ApiResponse]:
        return self._resource.set_metadata(metadata)

    @operation(Method.DELETE, arity=1)
    def delete(self) -> tuple[ApiResponse]:
        return (self._resource.delete(),)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self.url!r})"


__all__ = ["GenericResource", "Method", "Parent", "Resource", "operation"]
