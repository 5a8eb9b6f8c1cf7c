# bgg_client/pagination.py
"""
Fetching and merging the pages of paginated endpoints.

`paginate` drives the page loop; a `PaginationStrategy` per endpoint knows
where the page's declared total is reported, how many items a page holds and
how to append a page's items to the running aggregate. Everything that is
not a paginated list is taken from the first page.
"""
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Optional

from .exceptions import BGGConstructionError, BGGException, BGGPaginationAbortedError
from .models import Forum, Guild, Plays, Things, User
from .types import (
    PARAM_BUDDIES,
    PARAM_COMMENTS,
    PARAM_GUILDS,
    PARAM_MEMBERS,
    PARAM_PAGE_SIZE,
    PARAM_RATING_COMMENTS,
)

log = logging.getLogger(__name__)


class PaginationStrategy(ABC):
    """Base class describing how one endpoint paginates."""
    page_size = 100

    def check(self, request):
        """Raises BGGConstructionError if the request cannot paginate."""

    def page_size_for(self, request) -> int:
        return self.page_size

    @abstractmethod
    def declared_total(self, data) -> Optional[int]:
        """The total number of items BGG reports, or None when it reports none."""

    @abstractmethod
    def count(self, data) -> int:
        """The number of paged items on one page."""

    @abstractmethod
    def merge(self, aggregate, page):
        """Returns `aggregate` with the paged items of `page` appended."""


class ForumPagination(PaginationStrategy):
    page_size = 50

    def declared_total(self, data: Forum) -> Optional[int]:
        return data.num_threads

    def count(self, data: Forum) -> int:
        return len(data.threads)

    def merge(self, aggregate: Forum, page: Forum) -> Forum:
        return replace(aggregate, threads=aggregate.threads + page.threads)


class GuildPagination(PaginationStrategy):
    page_size = 25

    def check(self, request):
        if request.param(PARAM_MEMBERS) != "1":
            raise BGGConstructionError("Nothing to paginate without the members parameter set.")

    def declared_total(self, data: Guild) -> Optional[int]:
        return data.members.count if data.members is not None else None

    def count(self, data: Guild) -> int:
        return len(data.members.members) if data.members is not None else 0

    def merge(self, aggregate: Guild, page: Guild) -> Guild:
        members = replace(aggregate.members, members=aggregate.members.members + page.members.members)
        return replace(aggregate, members=members)


class PlaysPagination(PaginationStrategy):
    page_size = 100

    def declared_total(self, data: Plays) -> Optional[int]:
        return data.total

    def count(self, data: Plays) -> int:
        return len(data.plays)

    def merge(self, aggregate: Plays, page: Plays) -> Plays:
        return replace(aggregate, plays=aggregate.plays + page.plays)


class UserPagination(PaginationStrategy):
    """Buddies and guilds share the page parameter; both lists are merged."""
    page_size = 1000

    def check(self, request):
        if request.param(PARAM_BUDDIES) != "1" and request.param(PARAM_GUILDS) != "1":
            raise BGGConstructionError("Nothing to paginate without either buddies or guilds included.")

    def declared_total(self, data: User) -> Optional[int]:
        totals = [lst.total for lst in (data.buddies, data.guilds) if lst is not None]
        return max(totals) if totals else None

    def count(self, data: User) -> int:
        buddies = len(data.buddies.buddies) if data.buddies is not None else 0
        guilds = len(data.guilds.guilds) if data.guilds is not None else 0
        return max(buddies, guilds)

    def merge(self, aggregate: User, page: User) -> User:
        buddies = aggregate.buddies
        if buddies is not None and page.buddies is not None:
            buddies = replace(buddies, buddies=buddies.buddies + page.buddies.buddies)
        guilds = aggregate.guilds
        if guilds is not None and page.guilds is not None:
            guilds = replace(guilds, guilds=guilds.guilds + page.guilds.guilds)
        return replace(aggregate, buddies=buddies, guilds=guilds)


class ThingsPagination(PaginationStrategy):
    """
    Comments or rating comments of several things are paged together. The
    declared total is the largest comment count among them; each page's
    comments are appended to the thing with the same id.
    """
    page_size = 100

    def check(self, request):
        if request.param(PARAM_COMMENTS) != "1" and request.param(PARAM_RATING_COMMENTS) != "1":
            raise BGGConstructionError(
                "Nothing to paginate without either the comments or rating comments parameter set."
            )

    def page_size_for(self, request) -> int:
        page_size = request.param(PARAM_PAGE_SIZE)
        return int(page_size) if page_size else self.page_size

    def declared_total(self, data: Things) -> Optional[int]:
        totals = [thing.comments.total_items for thing in data.things if thing.comments is not None]
        return max(totals) if totals else None

    def count(self, data: Things) -> int:
        counts = [len(thing.comments.comments) for thing in data.things if thing.comments is not None]
        return max(counts) if counts else 0

    def merge(self, aggregate: Things, page: Things) -> Things:
        page_comments = {
            thing.id: thing.comments.comments for thing in page.things if thing.comments is not None
        }
        things = []
        for thing in aggregate.things:
            extra = page_comments.get(thing.id)
            if extra and thing.comments is not None:
                thing = replace(thing, comments=replace(thing.comments, comments=thing.comments.comments + extra))
            things.append(thing)
        return replace(aggregate, things=things)


def paginate(
    fetch: Callable,
    request,
    strategy: PaginationStrategy,
    is_cancelled: Callable[[], bool] = lambda: False,
):
    """
    Fetches the request's first page and then the following ones until the
    declared total is reached, the page cap is hit or a page comes back empty.

    Args:
        fetch (callable): Fetches and maps one request, raising a BGGException on failure.
        request (Request): The first page's request.
        strategy (PaginationStrategy): How the endpoint paginates.
        is_cancelled (callable): Checked before each page after the first.

    Returns:
        The merged aggregate.

    Raises:
        BGGException: If the first page fails.
        BGGPaginationAbortedError: If a later page fails. No partial aggregate is returned.
    """
    page = request.page
    aggregate = fetch(request)
    total = strategy.declared_total(aggregate)
    if total is None or strategy.count(aggregate) >= total:
        log.debug(f"{request.endpoint.value}: single page holds all {total} items")
        return aggregate

    last_page = math.ceil(total / strategy.page_size_for(request))
    if request.pagination.to_page is not None:
        last_page = min(last_page, request.pagination.to_page)
    log.debug(f"{request.endpoint.value}: paginating pages {page + 1}..{last_page} for {total} items")

    while page < last_page:
        if is_cancelled():
            log.debug(f"{request.endpoint.value}: pagination cancelled before page {page + 1}")
            break
        page += 1
        try:
            data = fetch(request.with_page(page))
        except BGGException as e:
            log.warning(f"{request.endpoint.value}: page {page} failed, discarding earlier pages")
            raise BGGPaginationAbortedError(page, e) from e
        if strategy.count(data) == 0:
            log.debug(f"{request.endpoint.value}: page {page} is empty, stopping")
            break
        aggregate = strategy.merge(aggregate, data)
        if strategy.count(aggregate) >= total:
            break

    log.info(f"{request.endpoint.value}: fetched {strategy.count(aggregate)} of {total} items up to page {page}")
    return aggregate
