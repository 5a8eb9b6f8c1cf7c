# bgg_client/request.py
from __future__ import annotations
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

import requests

from .exceptions import BGGConstructionError
from .pagination import PaginationStrategy, paginate
from .response import Response
from .types import PARAM_PAGE, Endpoint, SitemapLocationType

if TYPE_CHECKING:
    from .engine import ExecutionEngine
    from .models import SitemapUrl

log = logging.getLogger(__name__)

T = TypeVar("T")


class PaginationMode(Enum):
    NONE = "none"
    FIXED = "fixed"
    EXHAUSTIVE = "exhaustive"


@dataclass(frozen=True)
class Pagination:
    mode: PaginationMode = PaginationMode.NONE
    # The last page number to fetch in FIXED mode.
    to_page: Optional[int] = None


@dataclass(frozen=True)
class Request:
    """
    An immutable description of one call: the endpoint, where to find it and
    the query parameters. Parameters are kept in insertion order; absent
    values are never stored.
    """
    endpoint: Endpoint
    base_url: str
    path: str = ""
    params: Tuple[Tuple[str, str], ...] = ()
    pagination: Pagination = field(default_factory=Pagination)

    @property
    def location(self) -> str:
        return f"{self.base_url}/{self.path}" if self.path else self.base_url

    @property
    def url(self) -> str:
        """The fully encoded URL sent to the transport."""
        return requests.Request("GET", self.location, params=list(self.params)).prepare().url

    @property
    def page(self) -> int:
        """The page this request starts at. Absent or 0 means the first page."""
        value = self.param(PARAM_PAGE)
        return int(value) if value and int(value) > 0 else 1

    def param(self, name: str) -> Optional[str]:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def with_param(self, name: str, value: str) -> "Request":
        params = [(key, current) for key, current in self.params if key != name]
        params.append((name, value))
        return replace(self, params=tuple(params))

    def with_page(self, page: int) -> "Request":
        return self.with_param(PARAM_PAGE, str(page))

    def with_pagination(self, pagination: Pagination) -> "Request":
        return replace(self, pagination=pagination)


class Call(Generic[T]):
    """
    A ready-to-run request returned by the `BGGClient` entry points.

    Nothing is sent until `call_async()` or `call()` is invoked. `paginate()`
    returns a new Call; the original one is left untouched.
    """

    def __init__(
        self,
        engine: "ExecutionEngine",
        request: Request,
        strategy: Optional[PaginationStrategy] = None,
    ):
        self._engine = engine
        self.request = request
        self._strategy = strategy

    def paginate(self, to_page: Optional[int] = None) -> "Call[T]":
        """
        Fetches the following pages and merges them into the first one.

        Args:
            to_page (int, optional): The last page to fetch. Without it, pages
                are fetched until everything BGG reports is retrieved.

        Returns:
            Call: A new call with pagination enabled.

        Raises:
            BGGConstructionError: If the endpoint does not paginate, the request
                lacks the parameters that make it paginate, or `to_page` < 1.
        """
        if self._strategy is None:
            raise BGGConstructionError(f"The {self.request.endpoint.value} endpoint does not paginate.")
        if to_page is not None and to_page < 1:
            raise BGGConstructionError(f"Cannot paginate to page {to_page}, pages start at 1.")
        self._strategy.check(self.request)
        if to_page is None:
            pagination = Pagination(PaginationMode.EXHAUSTIVE)
        else:
            pagination = Pagination(PaginationMode.FIXED, to_page)
        return type(self)(self._engine, self.request.with_pagination(pagination), self._strategy)

    def call_async(self, on_complete: Optional[Callable[[Response[T]], None]] = None) -> "Future[Response[T]]":
        """
        Submits the call for execution in the background.

        Args:
            on_complete (callable, optional): Invoked once with the Response when
                the call finishes, unless the future was cancelled.

        Returns:
            Future: Resolves to a Response. Cancelling it stops further page fetches.
        """
        return self._engine.submit(self._execute, on_complete)

    def call(self, timeout: Optional[float] = None) -> Response[T]:
        """Runs the call and waits for its Response."""
        return self.call_async().result(timeout=timeout)

    def _execute(self, future: Future):
        if self.request.pagination.mode is PaginationMode.NONE:
            return self._engine.fetch(self.request)
        return paginate(self._engine.fetch, self.request, self._strategy, future.cancelled)


class SitemapIndexCall(Call):
    """A call for a sitemap index, which can also fetch the sitemaps it lists."""

    def diffuse(self, *location_types: SitemapLocationType) -> "DiffusingSitemapCall":
        """
        Fetches the index and then, one by one, every sitemap of the given types,
        or of all types when none are given.

        The Response data is a dict from location type to the URLs of all
        sitemaps of that type. Any failing sitemap fails the whole call.
        """
        return DiffusingSitemapCall(self._engine, self.request, location_types)


class DiffusingSitemapCall(Call):
    def __init__(self, engine: "ExecutionEngine", request: Request, location_types):
        super().__init__(engine, request)
        self.location_types = tuple(location_types)

    def _execute(self, future: Future) -> Dict[SitemapLocationType, List["SitemapUrl"]]:
        index = self._engine.fetch(self.request)
        sitemaps: Dict[SitemapLocationType, List["SitemapUrl"]] = {}
        for location in index.sitemaps:
            if self.location_types and location.type not in self.location_types:
                continue
            if future.cancelled():
                log.debug("Sitemap diffusion cancelled")
                break
            sitemap = self._engine.fetch(Request(endpoint=Endpoint.SITEMAP, base_url=location.location))
            sitemaps.setdefault(location.type, []).extend(sitemap.urls)
        return sitemaps
