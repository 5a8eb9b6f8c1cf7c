# bgg_client/client.py
import logging
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from .engine import ExecutionEngine
from .exceptions import BGGCallbackError, BGGConstructionError
from .mapper import Mapper
from .models import (
    Collection,
    Family,
    Forum,
    ForumList,
    GeekList,
    Guild,
    HotList,
    Plays,
    SearchResults,
    Sitemap,
    Things,
    Thread,
    User,
)
from .pagination import (
    ForumPagination,
    GuildPagination,
    PlaysPagination,
    ThingsPagination,
    UserPagination,
)
from .request import Call, Request, SitemapIndexCall
from .transport import HttpTransport, Transport
from .types import (
    COLLECTION_MODIFIED_SINCE_FORMAT,
    PARAM_BGG_RATING,
    PARAM_BRIEF,
    PARAM_BUDDIES,
    PARAM_COLLECTION_ID,
    PARAM_COMMENT,
    PARAM_COMMENTS,
    PARAM_COUNT,
    PARAM_DOMAIN,
    PARAM_EXACT,
    PARAM_EXCLUDE_SUBTYPE,
    PARAM_GUILDS,
    PARAM_HAS_PARTS,
    PARAM_HOT,
    PARAM_ID,
    PARAM_MARKETPLACE,
    PARAM_MAX_PLAYS,
    PARAM_MAXIMUM_DATE,
    PARAM_MEMBERS,
    PARAM_MINIMUM_ARTICLE_DATE,
    PARAM_MINIMUM_ARTICLE_ID,
    PARAM_MINIMUM_BGG_RATING,
    PARAM_MINIMUM_DATE,
    PARAM_MINIMUM_PLAYS,
    PARAM_MINIMUM_RATING,
    PARAM_MODIFIED_SINCE,
    PARAM_NAME,
    PARAM_OWN,
    PARAM_PAGE,
    PARAM_PAGE_SIZE,
    PARAM_PLAYED,
    PARAM_PRE_ORDERED,
    PARAM_PREVIOUSLY_OWNED,
    PARAM_QUERY,
    PARAM_RATED,
    PARAM_RATING,
    PARAM_RATING_COMMENTS,
    PARAM_SORT,
    PARAM_STATS,
    PARAM_SUBTYPE,
    PARAM_TOP,
    PARAM_TRADE,
    PARAM_TYPE,
    PARAM_USERNAME,
    PARAM_VERSION,
    PARAM_VERSIONS,
    PARAM_VIDEOS,
    PARAM_WANT,
    PARAM_WANT_PARTS,
    PARAM_WANT_TO_BUY,
    PARAM_WANT_TO_PLAY,
    PARAM_WISHLIST,
    PARAM_WISHLIST_PRIORITY,
    PATH_COLLECTION,
    PATH_FAMILY,
    PATH_FORUM,
    PATH_FORUM_LIST,
    PATH_GEEK_LIST,
    PATH_GUILDS,
    PATH_HOT,
    PATH_PLAYS,
    PATH_SEARCH,
    PATH_SITEMAP_INDEX,
    PATH_THING,
    PATH_THREAD,
    PATH_USER,
    REQUEST_DATE_FORMAT,
    REQUEST_DATE_TIME_FORMAT,
    XML1_API_URL,
    XML2_API_URL,
    Domain,
    Endpoint,
    FamilyType,
    ForumListType,
    HotListType,
    Inclusion,
    PlayThingType,
    SubType,
    ThingType,
)

log = logging.getLogger(__name__)


def _encode(value) -> Optional[str]:
    """Encodes one parameter value the way BGG expects it; None means 'leave out'."""
    if value is None or value is False:
        return None
    if value is True:
        return "1"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.strftime(REQUEST_DATE_TIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(REQUEST_DATE_FORMAT)
    if isinstance(value, (list, tuple, set)):
        return ",".join(_encode(v) for v in value) or None
    return str(value)


def _params(*pairs: Tuple[str, object]) -> Tuple[Tuple[str, str], ...]:
    encoded = ((name, _encode(value)) for name, value in pairs)
    return tuple((name, value) for name, value in encoded if value is not None)


def _require(condition: bool, message: str):
    if not condition:
        raise BGGConstructionError(message)


def _check_range(name: str, value: Optional[int], low: int, high: int):
    if value is not None:
        _require(low <= value <= high, f"{name} must be between {low} and {high}, got {value}.")


class BGGClient:
    """
    The main entry point for interacting with the BGG API.

    Every endpoint method builds a `Call` without touching the network; run it
    with `call_async()` for a future or `call()` to wait for the Response.

        with BGGClient() as bgg:
            response = bgg.user("Novaeux", buddies=Inclusion.INCLUDE).paginate().call()
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        max_workers: int = 4,
        strict_enums: bool = False,
        callback_error_handler: Optional[Callable[[BGGCallbackError], None]] = None,
        **transport_options,
    ):
        """
        Initializes the BGGClient.

        Args:
            transport (Transport, optional): Fetches documents. Defaults to an
                `HttpTransport` created from `transport_options`.
            max_workers (int): The number of calls executed concurrently.
            strict_enums (bool): Fail mapping on enumeration values this library doesn't know.
            callback_error_handler (callable, optional): Receives a BGGCallbackError when a
                completion callback raises. Defaults to logging the error.
            **transport_options: Passed to `HttpTransport`, e.g. `api_token` or `max_retries`.
        """
        if transport is not None and transport_options:
            raise BGGConstructionError("transport_options can only be used without a transport.")
        self._owns_transport = transport is None
        self.transport = transport or HttpTransport(**transport_options)
        self.mapper = Mapper(strict_enums=strict_enums)
        self.engine = ExecutionEngine(
            self.transport,
            self.mapper,
            max_workers=max_workers,
            callback_error_handler=callback_error_handler,
        )

    def __enter__(self) -> "BGGClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        """
        Waits for running calls, then releases the worker threads.

        When called from a completion callback it does not wait, since the
        callback runs on one of those workers.
        """
        self.engine.close()
        if self._owns_transport:
            self.transport.close()

    def _call(self, endpoint: Endpoint, path: str, params, strategy=None, base_url: str = XML2_API_URL) -> Call:
        request = Request(endpoint=endpoint, base_url=base_url, path=path, params=params)
        log.debug(f"Built {endpoint.value} request: {request.url}")
        return Call(self.engine, request, strategy)

    def collection(
        self,
        username: str,
        sub_type: Optional[ThingType] = None,
        exclude_sub_type: Optional[ThingType] = None,
        ids: Optional[Iterable[int]] = None,
        version: bool = False,
        brief: bool = False,
        stats: bool = False,
        own: Optional[Inclusion] = None,
        rated: Optional[Inclusion] = None,
        played: Optional[Inclusion] = None,
        comment: Optional[Inclusion] = None,
        trade: Optional[Inclusion] = None,
        want: Optional[Inclusion] = None,
        wishlist: Optional[Inclusion] = None,
        wishlist_priority: Optional[int] = None,
        pre_ordered: Optional[Inclusion] = None,
        want_to_play: Optional[Inclusion] = None,
        want_to_buy: Optional[Inclusion] = None,
        previously_owned: Optional[Inclusion] = None,
        has_parts: Optional[Inclusion] = None,
        want_parts: Optional[Inclusion] = None,
        min_rating: Optional[int] = None,
        rating: Optional[int] = None,
        min_bgg_rating: Optional[int] = None,
        bgg_rating: Optional[int] = None,
        min_plays: Optional[int] = None,
        max_plays: Optional[int] = None,
        collection_id: Optional[int] = None,
        modified_since: Optional[datetime] = None,
    ) -> Call[Collection]:
        """
        Retrieves the games and other things in a user's collection.

        BGG queues collection requests and answers 202 until the collection is
        ready; the transport retries these.

        Args:
            username (str): The BGG username.
            sub_type (ThingType, optional): Only items of this type. BGG defaults to board games.
            own, rated, played, ... (Inclusion, optional): Filter on the status flags.
            wishlist_priority (int, optional): Only wishlist items with this priority (1-5).
            min_rating, rating, min_bgg_rating, bgg_rating (int, optional): Rating bounds (1-10).
            modified_since (datetime, optional): Only items modified since this moment.

        Returns:
            Call[Collection]: The collection call.
        """
        _require(bool(username and username.strip()), "A username is required for a collection.")
        _check_range("wishlist_priority", wishlist_priority, 1, 5)
        _check_range("min_rating", min_rating, 1, 10)
        _check_range("rating", rating, 1, 10)
        _check_range("min_bgg_rating", min_bgg_rating, 1, 10)
        _check_range("bgg_rating", bgg_rating, 1, 10)
        params = _params(
            (PARAM_USERNAME, username),
            (PARAM_SUBTYPE, sub_type),
            (PARAM_EXCLUDE_SUBTYPE, exclude_sub_type),
            (PARAM_ID, list(ids) if ids is not None else None),
            (PARAM_VERSION, version),
            (PARAM_BRIEF, brief),
            (PARAM_STATS, stats),
            (PARAM_OWN, own),
            (PARAM_RATED, rated),
            (PARAM_PLAYED, played),
            (PARAM_COMMENT, comment),
            (PARAM_TRADE, trade),
            (PARAM_WANT, want),
            (PARAM_WISHLIST, wishlist),
            (PARAM_WISHLIST_PRIORITY, wishlist_priority),
            (PARAM_PRE_ORDERED, pre_ordered),
            (PARAM_WANT_TO_PLAY, want_to_play),
            (PARAM_WANT_TO_BUY, want_to_buy),
            (PARAM_PREVIOUSLY_OWNED, previously_owned),
            (PARAM_HAS_PARTS, has_parts),
            (PARAM_WANT_PARTS, want_parts),
            (PARAM_MINIMUM_RATING, min_rating),
            (PARAM_RATING, rating),
            (PARAM_MINIMUM_BGG_RATING, min_bgg_rating),
            (PARAM_BGG_RATING, bgg_rating),
            (PARAM_MINIMUM_PLAYS, min_plays),
            (PARAM_MAX_PLAYS, max_plays),
            (PARAM_COLLECTION_ID, collection_id),
            (
                PARAM_MODIFIED_SINCE,
                modified_since.strftime(COLLECTION_MODIFIED_SINCE_FORMAT) if modified_since else None,
            ),
        )
        return self._call(Endpoint.COLLECTION, PATH_COLLECTION, params)

    def things(
        self,
        ids: Iterable[int],
        types: Optional[Iterable[ThingType]] = None,
        stats: bool = False,
        versions: bool = False,
        videos: bool = False,
        marketplace: bool = False,
        comments: bool = False,
        rating_comments: bool = False,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Call[Things]:
        """
        Retrieves one or more things (board games, expansions, RPG items, ...).

        The call paginates over the comments or rating comments of the things.

        Args:
            ids (list[int]): The ids of the things.
            types (list[ThingType], optional): Only return things of these types.
            stats (bool): Include rating statistics.
            versions (bool): Include the things' versions.
            videos (bool): Include videos.
            marketplace (bool): Include marketplace listings.
            comments (bool): Include comments. Can't be combined with `rating_comments`.
            rating_comments (bool): Include comments with a rating.
            page (int, optional): The comments page to start at.
            page_size (int, optional): Comments per page (10-100, BGG defaults to 100).

        Returns:
            Call[Things]: The things call.
        """
        ids = list(ids)
        _require(bool(ids), "At least one id is required for things.")
        _check_range("page_size", page_size, 10, 100)
        _require(not (comments and rating_comments), "comments and rating_comments can't both be set.")
        params = _params(
            (PARAM_ID, ids),
            (PARAM_TYPE, list(types) if types else None),
            (PARAM_STATS, stats),
            (PARAM_VERSIONS, versions),
            (PARAM_VIDEOS, videos),
            (PARAM_MARKETPLACE, marketplace),
            (PARAM_COMMENTS, comments),
            (PARAM_RATING_COMMENTS, rating_comments),
            (PARAM_PAGE, page),
            (PARAM_PAGE_SIZE, page_size),
        )
        return self._call(Endpoint.THING, PATH_THING, params, ThingsPagination())

    def family(self, ids: Iterable[int], types: Optional[Iterable[FamilyType]] = None) -> Call[Family]:
        """Retrieves families, i.e. groups of related things such as a game series."""
        ids = list(ids)
        _require(bool(ids), "At least one id is required for family.")
        params = _params((PARAM_ID, ids), (PARAM_TYPE, list(types) if types else None))
        return self._call(Endpoint.FAMILY, PATH_FAMILY, params)

    def user(
        self,
        name: str,
        buddies: Optional[Inclusion] = None,
        guilds: Optional[Inclusion] = None,
        top: Optional[Inclusion] = None,
        hot: Optional[Inclusion] = None,
        domain: Optional[Domain] = None,
        page: Optional[int] = None,
    ) -> Call[User]:
        """
        Retrieves a BGG user by their username.

        Buddies and guilds come in pages of 1000; paginate to get them all.

        Args:
            name (str): The BGG username.
            buddies (Inclusion, optional): Include the user's buddies.
            guilds (Inclusion, optional): Include the user's guilds.
            top (Inclusion, optional): Include the user's top 10 list.
            hot (Inclusion, optional): Include the user's hot 10 list.
            domain (Domain, optional): The domain of the top and hot lists.
            page (int, optional): The buddies and guilds page to start at.

        Returns:
            Call[User]: The user call.
        """
        _require(bool(name and name.strip()), "A name is required for a user.")
        params = _params(
            (PARAM_NAME, name),
            (PARAM_BUDDIES, buddies),
            (PARAM_GUILDS, guilds),
            (PARAM_TOP, top),
            (PARAM_HOT, hot),
            (PARAM_DOMAIN, domain),
            (PARAM_PAGE, page),
        )
        return self._call(Endpoint.USER, PATH_USER, params, UserPagination())

    def forum_list(self, id: int, type: ForumListType = ForumListType.THING) -> Call[ForumList]:
        """Retrieves the forums of a thing or a family."""
        params = _params((PARAM_ID, id), (PARAM_TYPE, type))
        return self._call(Endpoint.FORUM_LIST, PATH_FORUM_LIST, params)

    def forum(self, id: int, page: Optional[int] = None) -> Call[Forum]:
        """Retrieves a forum and its threads, 50 per page."""
        params = _params((PARAM_ID, id), (PARAM_PAGE, page))
        return self._call(Endpoint.FORUM, PATH_FORUM, params, ForumPagination())

    def thread(
        self,
        id: int,
        min_article_id: Optional[int] = None,
        min_article_date: Optional[datetime] = None,
        count: Optional[int] = None,
    ) -> Call[Thread]:
        """
        Retrieves a forum thread with its articles.

        Args:
            id (int): The thread id.
            min_article_id (int, optional): Only articles with this id or higher.
            min_article_date (datetime, optional): Only articles posted since this moment.
            count (int, optional): The maximum number of articles.
        """
        params = _params(
            (PARAM_ID, id),
            (PARAM_MINIMUM_ARTICLE_ID, min_article_id),
            (PARAM_MINIMUM_ARTICLE_DATE, min_article_date),
            (PARAM_COUNT, count),
        )
        return self._call(Endpoint.THREAD, PATH_THREAD, params)

    def geek_list(self, id: int, comments: Optional[Inclusion] = None) -> Call[GeekList]:
        """Retrieves a geek list. Geek lists are only served by the XML API 1."""
        params = _params((PARAM_COMMENTS, comments))
        return self._call(Endpoint.GEEK_LIST, f"{PATH_GEEK_LIST}/{id}", params, base_url=XML1_API_URL)

    def guild(
        self,
        id: int,
        members: Optional[Inclusion] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
    ) -> Call[Guild]:
        """
        Retrieves a guild.

        Args:
            id (int): The guild id.
            members (Inclusion, optional): Include the members, 25 per page.
            sort (str, optional): Sort members by "username" or "date".
            page (int, optional): The members page to start at.
        """
        params = _params((PARAM_ID, id), (PARAM_MEMBERS, members), (PARAM_SORT, sort), (PARAM_PAGE, page))
        return self._call(Endpoint.GUILD, PATH_GUILDS, params, GuildPagination())

    def hot_list(self, type: Optional[HotListType] = None) -> Call[HotList]:
        """Retrieves the current hot items. BGG defaults to board games."""
        return self._call(Endpoint.HOT_LIST, PATH_HOT, _params((PARAM_TYPE, type)))

    def plays(
        self,
        username: str,
        id: Optional[int] = None,
        type: Optional[PlayThingType] = None,
        min_date: Optional[date] = None,
        max_date: Optional[date] = None,
        sub_type: Optional[SubType] = None,
        page: Optional[int] = None,
    ) -> Call[Plays]:
        """
        Retrieves the plays logged by a user, 100 per page.

        Args:
            username (str): The BGG username.
            id (int, optional): Only plays of this thing or family.
            type (PlayThingType, optional): Whether `id` is a thing or a family.
            min_date (date, optional): Only plays on or after this date.
            max_date (date, optional): Only plays on or before this date.
            sub_type (SubType, optional): Only plays of things of this sub type.
            page (int, optional): The page to start at.
        """
        _require(bool(username and username.strip()), "A username is required for plays.")
        params = _params(
            (PARAM_USERNAME, username),
            (PARAM_ID, id),
            (PARAM_TYPE, type),
            (PARAM_MINIMUM_DATE, min_date),
            (PARAM_MAXIMUM_DATE, max_date),
            (PARAM_SUBTYPE, sub_type),
            (PARAM_PAGE, page),
        )
        return self._call(Endpoint.PLAYS, PATH_PLAYS, params, PlaysPagination())

    def search(
        self,
        query: str,
        types: Optional[List[ThingType]] = None,
        exact: bool = False,
    ) -> Call[SearchResults]:
        """
        Searches for things by name.

        Args:
            query (str): The search query.
            types (list[ThingType], optional): Only return things of these types.
            exact (bool): Only return exact matches of the name.
        """
        _require(bool(query and query.strip()), "A query is required for search.")
        params = _params((PARAM_QUERY, query), (PARAM_EXACT, exact), (PARAM_TYPE, types or None))
        return self._call(Endpoint.SEARCH, PATH_SEARCH, params)

    def sitemap_index(self, domain: Domain = Domain.BOARD_GAME_GEEK) -> SitemapIndexCall:
        """
        Retrieves the sitemap index of a domain. Use `diffuse()` on the result
        to fetch the sitemaps it lists as well.
        """
        request = Request(endpoint=Endpoint.SITEMAP_INDEX, base_url=domain.address, path=PATH_SITEMAP_INDEX)
        return SitemapIndexCall(self.engine, request)

    def sitemap(self, url: str) -> Call[Sitemap]:
        """Retrieves one sitemap, typically a location from a sitemap index."""
        _require(bool(url and url.strip()), "A sitemap URL is required.")
        return Call(self.engine, Request(endpoint=Endpoint.SITEMAP, base_url=url))
