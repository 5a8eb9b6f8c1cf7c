# bgg_client/mapper.py
"""
Turns raw BGG XML documents into the records in `models`.

The mapper is pure: no I/O and no shared state beyond its configuration, so
one instance can serve any number of threads.
"""
import logging
from datetime import date, datetime
from email.utils import parsedate_to_datetime
from typing import Callable, List, Optional, Union

from lxml import etree

from .exceptions import (
    BGGMappingError,
    BGGMissingFieldError,
    BGGSchemaMismatchError,
    BGGTypeMismatchError,
    BGGUnknownEnumValueError,
)
from .models import (
    Article,
    Buddies,
    Buddy,
    Collection,
    CollectionItem,
    CollectionStatistics,
    CollectionStatus,
    Comment,
    Comments,
    Family,
    FamilyItem,
    Forum,
    ForumList,
    ForumSummary,
    GeekList,
    GeekListComment,
    GeekListItem,
    Guild,
    GuildMember,
    GuildMembers,
    GuildReference,
    HotList,
    HotListItem,
    Link,
    ListItem,
    Location,
    MarketplaceListing,
    Name,
    Play,
    PlayItem,
    Player,
    Plays,
    Poll,
    PollResult,
    PollResults,
    PollSummary,
    PollSummaryResult,
    Price,
    Rank,
    Ratings,
    SearchResult,
    SearchResults,
    Sitemap,
    SitemapIndex,
    SitemapLocation,
    SitemapUrl,
    Statistics,
    Thing,
    Things,
    Thread,
    ThreadSummary,
    User,
    UserGuilds,
    UserList,
    Version,
    Video,
    Weblink,
)
from .types import (
    Endpoint,
    FamilyType,
    ForumListType,
    SitemapLocationType,
    SubType,
    ThingType,
)

log = logging.getLogger(__name__)

# Root elements the service uses to report a failed request instead of data.
ERROR_ROOTS = ("error", "errors", "message")

COMPACT_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


# region Attribute and element access

def _localname(element) -> str:
    return etree.QName(element).localname


def _attr(element, name: str, required: bool = False) -> Optional[str]:
    """Returns the trimmed attribute value; empty values are treated as absent."""
    value = element.get(name)
    if value is not None:
        value = value.strip()
    if not value:
        if required:
            raise BGGMissingFieldError(name, _localname(element))
        return None
    return value


def _convert(value: Optional[str], convert: Callable, field: str, expected: str):
    if value is None:
        return None
    try:
        return convert(value)
    except (TypeError, ValueError) as e:
        raise BGGTypeMismatchError(field, value, expected) from e


def _to_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true"):
        return True
    if lowered in ("0", "false"):
        return False
    raise ValueError(value)


def _attr_int(element, name: str, required: bool = False) -> Optional[int]:
    return _convert(_attr(element, name, required), int, name, "an integer")


def _attr_float(element, name: str, required: bool = False) -> Optional[float]:
    return _convert(_attr(element, name, required), float, name, "a number")


def _attr_bool(element, name: str, default: bool = False) -> bool:
    value = _convert(_attr(element, name), _to_bool, name, "a boolean")
    return default if value is None else value


def _child(parent, tag: str, required: bool = False):
    child = parent.find(tag)
    if child is None and required:
        raise BGGMissingFieldError(tag.replace("{*}", ""), _localname(parent))
    return child


def _value(parent, tag: str, required: bool = False) -> Optional[str]:
    """Reads elements of the form <tag value="..."/>."""
    child = _child(parent, tag, required)
    if child is None:
        return None
    return _attr(child, "value", required)


def _value_int(parent, tag: str, required: bool = False) -> Optional[int]:
    return _convert(_value(parent, tag, required), int, tag, "an integer")


def _value_float(parent, tag: str) -> Optional[float]:
    return _convert(_value(parent, tag), float, tag, "a number")


def _text(parent, tag: str, required: bool = False) -> Optional[str]:
    """Reads elements of the form <tag>text</tag>."""
    child = _child(parent, tag, required)
    text = child.text.strip() if child is not None and child.text else None
    if not text:
        if required:
            raise BGGMissingFieldError(tag.replace("{*}", ""), _localname(parent))
        return None
    return text


def _text_int(parent, tag: str) -> Optional[int]:
    return _convert(_text(parent, tag), int, tag, "an integer")


def _own_text(element) -> Optional[str]:
    text = element.text.strip() if element.text else None
    return text or None

# endregion


# region Dates

def _is_zero_date(value: str) -> bool:
    return not value.strip("0-: T")


def _rfc_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    """Parses e.g. 'Tue, 06 Feb 2024 16:45:12 +0000' into an aware datetime."""
    if value is None or _is_zero_date(value):
        return None
    return _convert(value, parsedate_to_datetime, field, "an RFC 1123 date")


def _compact_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    """Parses e.g. '2023-03-20 04:58:43' into a naive datetime."""
    if value is None or _is_zero_date(value):
        return None
    return _convert(
        value,
        lambda v: datetime.strptime(v, COMPACT_DATE_TIME_FORMAT),
        field,
        "a yyyy-MM-dd HH:mm:ss date",
    )


def _iso_datetime(value: Optional[str], field: str) -> Optional[datetime]:
    """Parses e.g. '2024-01-28T04:51:50-06:00' into an aware datetime."""
    if value is None or _is_zero_date(value):
        return None
    return _convert(value, datetime.fromisoformat, field, "an ISO 8601 date")


def _iso_date(value: Optional[str], field: str) -> Optional[date]:
    """Parses e.g. '2024-02-05'. A time part, if present, is dropped."""
    if value is None or _is_zero_date(value):
        return None
    return _convert(value[:10], date.fromisoformat, field, "a yyyy-MM-dd date")

# endregion


class Mapper:
    """
    Maps raw documents to domain records.

    Args:
        strict_enums (bool): If True, an enumeration value this library does not
            know raises `BGGUnknownEnumValueError`. By default the raw string is
            kept instead, since BGG adds new types over time.
    """

    def __init__(self, strict_enums: bool = False):
        self.strict_enums = strict_enums
        self._mappers = {
            Endpoint.COLLECTION: self._collection,
            Endpoint.THING: self._things,
            Endpoint.FAMILY: self._family,
            Endpoint.USER: self._user,
            Endpoint.FORUM_LIST: self._forum_list,
            Endpoint.FORUM: self._forum,
            Endpoint.THREAD: self._thread,
            Endpoint.GEEK_LIST: self._geek_list,
            Endpoint.GUILD: self._guild,
            Endpoint.HOT_LIST: self._hot_list,
            Endpoint.PLAYS: self._plays,
            Endpoint.SEARCH: self._search,
            Endpoint.SITEMAP_INDEX: self._sitemap_index,
            Endpoint.SITEMAP: self._sitemap,
        }

    def map(self, endpoint: Endpoint, raw: Union[bytes, str]):
        """
        Maps one document for the given endpoint.

        Args:
            endpoint (Endpoint): The endpoint the document was fetched from.
            raw (bytes | str): The document body.

        Returns:
            The endpoint's domain record, e.g. `Things` for `Endpoint.THING`.

        Raises:
            BGGMappingError: If the document is not XML, does not belong to the
                endpoint, or a field is missing or malformed. The error's `raw`
                holds the document text.
        """
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        content = raw if isinstance(raw, bytes) else raw.encode("utf-8")
        try:
            try:
                root = etree.fromstring(content)
            except etree.XMLSyntaxError as e:
                raise BGGSchemaMismatchError(
                    f"Failed to parse XML response for {endpoint.value}: {e}"
                ) from e
            self._check_root(endpoint, root)
            return self._mappers[endpoint](root)
        except BGGMappingError as e:
            if e.raw is None:
                e.raw = text
            raise

    def _check_root(self, endpoint: Endpoint, root):
        name = _localname(root)
        if name in ERROR_ROOTS:
            raise BGGSchemaMismatchError(
                f"BGG returned an error for {endpoint.value}: {_error_message(root)}"
            )
        if name != endpoint.root_element:
            raise BGGSchemaMismatchError(
                f"Expected <{endpoint.root_element}> for {endpoint.value}, got <{name}>"
            )
        error = root.find("error")
        if error is not None:
            raise BGGSchemaMismatchError(
                f"BGG returned an error for {endpoint.value}: {_error_message(error)}"
            )
        if name == "items" and not self._items_match(endpoint, root):
            raise BGGSchemaMismatchError(f"Document does not look like a {endpoint.value} response")

    @staticmethod
    def _items_match(endpoint: Endpoint, root) -> bool:
        # Several endpoints answer with <items>; tell them apart by their markers.
        items = root.findall("item")
        ranked = any(item.get("rank") is not None for item in items)
        types = {item.get("type") for item in items}
        if endpoint is Endpoint.COLLECTION:
            return root.get("totalitems") is not None
        if endpoint is Endpoint.SEARCH:
            return root.get("total") is not None and not ranked
        if root.get("totalitems") is not None or root.get("total") is not None:
            return False
        if endpoint is Endpoint.HOT_LIST:
            return all(item.get("rank") is not None for item in items)
        if ranked:
            return False
        if endpoint is Endpoint.THING:
            return not types & {member.value for member in FamilyType}
        if endpoint is Endpoint.FAMILY:
            return not types & {member.value for member in ThingType}
        return True

    def _enum(self, enum_cls, value: Optional[str], field: str):
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            if self.strict_enums:
                raise BGGUnknownEnumValueError(enum_cls.__name__, value) from None
            log.debug(f"Unknown {enum_cls.__name__} value '{value}' in '{field}', keeping raw value")
            return value

    # region Shared structures

    def _names(self, parent) -> List[Name]:
        return [
            Name(
                value=_attr(el, "value", required=True),
                type=_attr(el, "type"),
                sort_index=_attr_int(el, "sortindex"),
            )
            for el in parent.findall("name")
        ]

    def _links(self, parent) -> List[Link]:
        return [
            Link(
                type=_attr(el, "type", required=True),
                id=_attr_int(el, "id", required=True),
                value=_attr(el, "value") or "",
                inbound=_convert(_attr(el, "inbound"), _to_bool, "inbound", "a boolean"),
            )
            for el in parent.findall("link")
        ]

    def _ratings(self, el) -> Ratings:
        ranks_el = el.find("ranks")
        ranks = []
        if ranks_el is not None:
            for rank in ranks_el.findall("rank"):
                ranks.append(
                    Rank(
                        id=_attr_int(rank, "id", required=True),
                        type=_attr(rank, "type", required=True),
                        name=_attr(rank, "name", required=True),
                        friendly_name=_attr(rank, "friendlyname"),
                        value=_attr(rank, "value"),
                        bayes_average=_attr(rank, "bayesaverage"),
                    )
                )
        return Ratings(
            value=_attr(el, "value"),
            users_rated=_value_int(el, "usersrated"),
            average=_value_float(el, "average"),
            bayes_average=_value_float(el, "bayesaverage"),
            stddev=_value_float(el, "stddev"),
            median=_value_float(el, "median"),
            owned=_value_int(el, "owned"),
            trading=_value_int(el, "trading"),
            wanting=_value_int(el, "wanting"),
            wishing=_value_int(el, "wishing"),
            num_comments=_value_int(el, "numcomments"),
            num_weights=_value_int(el, "numweights"),
            average_weight=_value_float(el, "averageweight"),
            ranks=ranks,
        )

    # endregion

    # region Things and families

    def _things(self, root) -> Things:
        return Things(
            terms_of_use=_attr(root, "termsofuse"),
            things=[self._thing(el) for el in root.findall("item")],
        )

    def _thing(self, el) -> Thing:
        names = self._names(el)
        statistics_el = el.find("statistics")
        statistics = None
        if statistics_el is not None:
            ratings_el = statistics_el.find("ratings")
            statistics = Statistics(
                page=_attr_int(statistics_el, "page"),
                ratings=self._ratings(ratings_el) if ratings_el is not None else None,
            )
        comments_el = el.find("comments")
        error_el = el.find("error")
        return Thing(
            id=_attr_int(el, "id", required=True),
            type=self._enum(ThingType, _attr(el, "type"), "type"),
            name=_primary_name(names),
            names=names,
            error=_error_message(error_el) if error_el is not None else None,
            thumbnail=_text(el, "thumbnail"),
            image=_text(el, "image"),
            description=_text(el, "description"),
            year_published=_value_int(el, "yearpublished"),
            date_published=_value(el, "datepublished"),
            release_date=_iso_date(_value(el, "releasedate"), "releasedate"),
            min_players=_value_int(el, "minplayers"),
            max_players=_value_int(el, "maxplayers"),
            playing_time=_value_int(el, "playingtime"),
            min_play_time=_value_int(el, "minplaytime"),
            max_play_time=_value_int(el, "maxplaytime"),
            min_age=_value_int(el, "minage"),
            series_code=_value(el, "seriescode"),
            issue_index=_value_int(el, "issueindex"),
            links=self._links(el),
            polls=[self._poll(poll) for poll in el.findall("poll")],
            poll_summaries=[self._poll_summary(summary) for summary in el.findall("poll-summary")],
            videos=[self._video(video) for video in el.findall("videos/video")],
            comments=self._comments(comments_el) if comments_el is not None else None,
            statistics=statistics,
            listings=[self._listing(listing) for listing in el.findall("marketplacelistings/listing")],
            versions=[self._version(version) for version in el.findall("versions/item")],
        )

    def _poll(self, el) -> Poll:
        results = []
        for results_el in el.findall("results"):
            results.append(
                PollResults(
                    num_players=_attr(results_el, "numplayers"),
                    results=[
                        PollResult(
                            value=_attr(result, "value", required=True),
                            num_votes=_attr_int(result, "numvotes") or 0,
                            level=_attr_int(result, "level"),
                        )
                        for result in results_el.findall("result")
                    ],
                )
            )
        return Poll(
            name=_attr(el, "name", required=True),
            title=_attr(el, "title"),
            total_votes=_attr_int(el, "totalvotes") or 0,
            results=results,
        )

    def _poll_summary(self, el) -> PollSummary:
        return PollSummary(
            name=_attr(el, "name"),
            title=_attr(el, "title"),
            results=[
                PollSummaryResult(name=_attr(result, "name"), value=_attr(result, "value"))
                for result in el.findall("result")
            ],
        )

    def _video(self, el) -> Video:
        return Video(
            id=_attr_int(el, "id", required=True),
            title=_attr(el, "title"),
            category=_attr(el, "category"),
            language=_attr(el, "language"),
            link=_attr(el, "link"),
            username=_attr(el, "username"),
            user_id=_attr_int(el, "userid"),
            post_date=_iso_datetime(_attr(el, "postdate"), "postdate"),
        )

    def _comments(self, el) -> Comments:
        return Comments(
            page=_attr_int(el, "page") or 1,
            total_items=_attr_int(el, "totalitems") or 0,
            comments=[
                Comment(
                    username=_attr(comment, "username", required=True),
                    rating=_attr(comment, "rating"),
                    value=_attr(comment, "value"),
                )
                for comment in el.findall("comment")
            ],
        )

    def _listing(self, el) -> MarketplaceListing:
        price_el = el.find("price")
        link_el = el.find("link")
        return MarketplaceListing(
            list_date=_rfc_datetime(_value(el, "listdate"), "listdate"),
            price=Price(
                value=_attr_float(price_el, "value"),
                currency=_attr(price_el, "currency"),
            ) if price_el is not None else None,
            condition=_value(el, "condition"),
            notes=_value(el, "notes"),
            link=Weblink(
                href=_attr(link_el, "href"),
                title=_attr(link_el, "title"),
            ) if link_el is not None else None,
        )

    def _version(self, el) -> Version:
        names = self._names(el)
        return Version(
            id=_attr_int(el, "id", required=True),
            type=_attr(el, "type", required=True),
            name=_primary_name(names),
            names=names,
            thumbnail=_text(el, "thumbnail"),
            image=_text(el, "image"),
            links=self._links(el),
            year_published=_value_int(el, "yearpublished"),
            release_date=_iso_date(_value(el, "releasedate"), "releasedate"),
            product_code=_value(el, "productcode"),
            width=_value_float(el, "width"),
            length=_value_float(el, "length"),
            depth=_value_float(el, "depth"),
            weight=_value_float(el, "weight"),
        )

    def _family(self, root) -> Family:
        items = []
        for el in root.findall("item"):
            names = self._names(el)
            items.append(
                FamilyItem(
                    id=_attr_int(el, "id", required=True),
                    type=self._enum(FamilyType, _attr(el, "type"), "type"),
                    name=_primary_name(names),
                    names=names,
                    thumbnail=_text(el, "thumbnail"),
                    image=_text(el, "image"),
                    description=_text(el, "description"),
                    links=self._links(el),
                )
            )
        return Family(terms_of_use=_attr(root, "termsofuse"), items=items)

    # endregion

    # region Collection

    def _collection(self, root) -> Collection:
        return Collection(
            terms_of_use=_attr(root, "termsofuse"),
            total_items=_attr_int(root, "totalitems") or 0,
            publish_date=_rfc_datetime(_attr(root, "pubdate"), "pubdate"),
            items=[self._collection_item(el) for el in root.findall("item")],
        )

    def _collection_item(self, el) -> CollectionItem:
        status_el = el.find("status")
        stats_el = el.find("stats")
        return CollectionItem(
            collection_id=_attr_int(el, "collid", required=True),
            object_id=_attr_int(el, "objectid", required=True),
            type=self._enum(ThingType, _attr(el, "subtype", required=True), "subtype"),
            name=_text(el, "name", required=True),
            original_name=_text(el, "originalname"),
            year_published=_text_int(el, "yearpublished"),
            thumbnail=_text(el, "thumbnail"),
            image=_text(el, "image"),
            status=self._collection_status(status_el) if status_el is not None else None,
            num_plays=_text_int(el, "numplays"),
            comment=_text(el, "comment"),
            condition_text=_text(el, "conditiontext"),
            stats=self._collection_stats(stats_el) if stats_el is not None else None,
        )

    def _collection_status(self, el) -> CollectionStatus:
        return CollectionStatus(
            own=_attr_bool(el, "own"),
            previously_owned=_attr_bool(el, "prevowned"),
            for_trade=_attr_bool(el, "fortrade"),
            want=_attr_bool(el, "want"),
            want_to_play=_attr_bool(el, "wanttoplay"),
            want_to_buy=_attr_bool(el, "wanttobuy"),
            wishlist=_attr_bool(el, "wishlist"),
            wishlist_priority=_attr_int(el, "wishlistpriority"),
            pre_ordered=_attr_bool(el, "preordered"),
            last_modified=_compact_datetime(_attr(el, "lastmodified"), "lastmodified"),
        )

    def _collection_stats(self, el) -> CollectionStatistics:
        rating_el = el.find("rating")
        return CollectionStatistics(
            min_players=_attr_int(el, "minplayers"),
            max_players=_attr_int(el, "maxplayers"),
            min_play_time=_attr_int(el, "minplaytime"),
            max_play_time=_attr_int(el, "maxplaytime"),
            playing_time=_attr_int(el, "playingtime"),
            num_owned=_attr_int(el, "numowned"),
            ratings=self._ratings(rating_el) if rating_el is not None else None,
        )

    # endregion

    # region Users

    def _user(self, root) -> User:
        buddies_el = root.find("buddies")
        guilds_el = root.find("guilds")
        top_el = root.find("top")
        hot_el = root.find("hot")
        return User(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            name=_attr(root, "name", required=True),
            first_name=_value(root, "firstname"),
            last_name=_value(root, "lastname"),
            avatar_link=_value(root, "avatarlink"),
            year_registered=_value_int(root, "yearregistered"),
            last_login=_iso_date(_value(root, "lastlogin"), "lastlogin"),
            state_or_province=_value(root, "stateorprovince"),
            country=_value(root, "country"),
            web_address=_value(root, "webaddress"),
            xbox_account=_value(root, "xboxaccount"),
            wii_account=_value(root, "wiiaccount"),
            psn_account=_value(root, "psnaccount"),
            battle_net_account=_value(root, "battlenetaccount"),
            steam_account=_value(root, "steamaccount"),
            trade_rating=_value_int(root, "traderating"),
            buddies=Buddies(
                total=_attr_int(buddies_el, "total") or 0,
                page=_attr_int(buddies_el, "page") or 1,
                buddies=[
                    Buddy(id=_attr_int(el, "id", required=True), name=_attr(el, "name", required=True))
                    for el in buddies_el.findall("buddy")
                ],
            ) if buddies_el is not None else None,
            guilds=UserGuilds(
                total=_attr_int(guilds_el, "total") or 0,
                page=_attr_int(guilds_el, "page") or 1,
                guilds=[
                    GuildReference(id=_attr_int(el, "id", required=True), name=_attr(el, "name", required=True))
                    for el in guilds_el.findall("guild")
                ],
            ) if guilds_el is not None else None,
            top=self._user_list(top_el) if top_el is not None else None,
            hot=self._user_list(hot_el) if hot_el is not None else None,
        )

    def _user_list(self, el) -> UserList:
        return UserList(
            domain=_attr(el, "domain"),
            items=[
                ListItem(
                    rank=_attr_int(item, "rank", required=True),
                    type=_attr(item, "type", required=True),
                    id=_attr_int(item, "id", required=True),
                    name=_attr(item, "name", required=True),
                )
                for item in el.findall("item")
            ],
        )

    # endregion

    # region Forums and threads

    def _forum_list(self, root) -> ForumList:
        return ForumList(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            type=self._enum(ForumListType, _attr(root, "type", required=True), "type"),
            forums=[
                ForumSummary(
                    id=_attr_int(el, "id", required=True),
                    group_id=_attr_int(el, "groupid"),
                    title=_attr(el, "title", required=True),
                    no_posting=_attr_bool(el, "noposting"),
                    description=_attr(el, "description"),
                    num_threads=_attr_int(el, "numthreads") or 0,
                    num_posts=_attr_int(el, "numposts") or 0,
                    last_post_date=_rfc_datetime(_attr(el, "lastpostdate"), "lastpostdate"),
                )
                for el in root.findall("forum")
            ],
        )

    def _forum(self, root) -> Forum:
        return Forum(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            title=_attr(root, "title", required=True),
            num_threads=_attr_int(root, "numthreads") or 0,
            num_posts=_attr_int(root, "numposts") or 0,
            last_post_date=_rfc_datetime(_attr(root, "lastpostdate"), "lastpostdate"),
            no_posting=_attr_bool(root, "noposting"),
            threads=[
                ThreadSummary(
                    id=_attr_int(el, "id", required=True),
                    subject=_attr(el, "subject", required=True),
                    author=_attr(el, "author"),
                    num_articles=_attr_int(el, "numarticles") or 0,
                    post_date=_rfc_datetime(_attr(el, "postdate"), "postdate"),
                    last_post_date=_rfc_datetime(_attr(el, "lastpostdate"), "lastpostdate"),
                )
                for el in root.findall("threads/thread")
            ],
        )

    def _thread(self, root) -> Thread:
        return Thread(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            num_articles=_attr_int(root, "numarticles") or 0,
            link=_attr(root, "link"),
            subject=_text(root, "subject"),
            articles=[
                Article(
                    id=_attr_int(el, "id", required=True),
                    username=_attr(el, "username"),
                    link=_attr(el, "link"),
                    post_date=_iso_datetime(_attr(el, "postdate"), "postdate"),
                    edit_date=_iso_datetime(_attr(el, "editdate"), "editdate"),
                    num_edits=_attr_int(el, "numedits") or 0,
                    subject=_text(el, "subject"),
                    body=_text(el, "body"),
                )
                for el in root.findall("articles/article")
            ],
        )

    # endregion

    # region Geek lists

    def _geek_list(self, root) -> GeekList:
        return GeekList(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            post_date=_rfc_datetime(_text(root, "postdate"), "postdate"),
            edit_date=_rfc_datetime(_text(root, "editdate"), "editdate"),
            thumbs=_text_int(root, "thumbs") or 0,
            num_items=_text_int(root, "numitems") or 0,
            username=_text(root, "username"),
            title=_text(root, "title"),
            description=_text(root, "description"),
            items=[self._geek_list_item(el) for el in root.findall("item")],
            comments=[self._geek_list_comment(el) for el in root.findall("comment")],
        )

    def _geek_list_item(self, el) -> GeekListItem:
        return GeekListItem(
            id=_attr_int(el, "id", required=True),
            object_type=_attr(el, "objecttype"),
            sub_type=self._enum(SubType, _attr(el, "subtype"), "subtype"),
            object_id=_attr_int(el, "objectid", required=True),
            object_name=_attr(el, "objectname"),
            username=_attr(el, "username"),
            post_date=_rfc_datetime(_attr(el, "postdate"), "postdate"),
            edit_date=_rfc_datetime(_attr(el, "editdate"), "editdate"),
            thumbs=_attr_int(el, "thumbs") or 0,
            image_id=_attr_int(el, "imageid"),
            body=_text(el, "body"),
            comments=[self._geek_list_comment(comment) for comment in el.findall("comment")],
        )

    def _geek_list_comment(self, el) -> GeekListComment:
        return GeekListComment(
            username=_attr(el, "username", required=True),
            date=_rfc_datetime(_attr(el, "date"), "date"),
            post_date=_rfc_datetime(_attr(el, "postdate"), "postdate"),
            edit_date=_rfc_datetime(_attr(el, "editdate"), "editdate"),
            thumbs=_attr_int(el, "thumbs") or 0,
            value=_own_text(el),
        )

    # endregion

    # region Guilds

    def _guild(self, root) -> Guild:
        location_el = root.find("location")
        members_el = root.find("members")
        return Guild(
            terms_of_use=_attr(root, "termsofuse"),
            id=_attr_int(root, "id", required=True),
            name=_attr(root, "name", required=True),
            created_at=_rfc_datetime(_attr(root, "created"), "created"),
            category=_text(root, "category"),
            website=_text(root, "website"),
            manager=_text(root, "manager"),
            description=_text(root, "description"),
            location=Location(
                address_line1=_text(location_el, "addr1"),
                address_line2=_text(location_el, "addr2"),
                city=_text(location_el, "city"),
                state_or_province=_text(location_el, "stateorprovince"),
                postal_code=_text(location_el, "postalcode"),
                country=_text(location_el, "country"),
            ) if location_el is not None else None,
            members=GuildMembers(
                count=_attr_int(members_el, "count") or 0,
                page=_attr_int(members_el, "page") or 1,
                members=[
                    GuildMember(
                        name=_attr(el, "name", required=True),
                        join_date=_rfc_datetime(_attr(el, "date"), "date"),
                    )
                    for el in members_el.findall("member")
                ],
            ) if members_el is not None else None,
        )

    # endregion

    # region Hot list and search

    def _hot_list(self, root) -> HotList:
        return HotList(
            terms_of_use=_attr(root, "termsofuse"),
            results=[
                HotListItem(
                    id=_attr_int(el, "id", required=True),
                    rank=_attr_int(el, "rank", required=True),
                    name=_value(el, "name"),
                    thumbnail=_value(el, "thumbnail"),
                    year_published=_value_int(el, "yearpublished"),
                )
                for el in root.findall("item")
            ],
        )

    def _search(self, root) -> SearchResults:
        results = []
        for el in root.findall("item"):
            name_el = _child(el, "name", required=True)
            results.append(
                SearchResult(
                    id=_attr_int(el, "id", required=True),
                    type=self._enum(ThingType, _attr(el, "type", required=True), "type"),
                    name=Name(
                        value=_attr(name_el, "value", required=True),
                        type=_attr(name_el, "type"),
                        sort_index=_attr_int(name_el, "sortindex"),
                    ),
                    year_published=_value_int(el, "yearpublished"),
                )
            )
        return SearchResults(
            terms_of_use=_attr(root, "termsofuse"),
            total=_attr_int(root, "total") or 0,
            results=results,
        )

    # endregion

    # region Plays

    def _plays(self, root) -> Plays:
        return Plays(
            terms_of_use=_attr(root, "termsofuse"),
            user_id=_attr_int(root, "userid"),
            username=_attr(root, "username"),
            total=_attr_int(root, "total") or 0,
            page=_attr_int(root, "page") or 1,
            plays=[self._play(el) for el in root.findall("play")],
        )

    def _play(self, el) -> Play:
        item_el = el.find("item")
        item = None
        if item_el is not None:
            item = PlayItem(
                name=_attr(item_el, "name"),
                object_type=_attr(item_el, "objecttype"),
                object_id=_attr_int(item_el, "objectid", required=True),
                sub_types=[
                    self._enum(SubType, _attr(sub_type, "value", required=True), "subtype")
                    for sub_type in item_el.findall("subtypes/subtype")
                ],
            )
        return Play(
            id=_attr_int(el, "id", required=True),
            date=_iso_date(_attr(el, "date"), "date"),
            quantity=_attr_int(el, "quantity") or 1,
            length_in_minutes=_attr_int(el, "length") or 0,
            incomplete=_attr_bool(el, "incomplete"),
            no_win_stats=_attr_bool(el, "nowinstats"),
            location=_attr(el, "location"),
            item=item,
            comments=_text(el, "comments"),
            players=[
                Player(
                    username=_attr(player, "username"),
                    user_id=_attr_int(player, "userid"),
                    name=_attr(player, "name"),
                    start_position=_attr(player, "startposition"),
                    color=_attr(player, "color"),
                    score=_attr(player, "score"),
                    new=_attr_bool(player, "new"),
                    rating=_attr_float(player, "rating"),
                    win=_attr_bool(player, "win"),
                )
                for player in el.findall("players/player")
            ],
        )

    # endregion

    # region Sitemaps

    def _sitemap_index(self, root) -> SitemapIndex:
        sitemaps = []
        for el in root.findall("{*}sitemap"):
            location = _text(el, "{*}loc", required=True)
            sitemaps.append(SitemapLocation(location=location, type=SitemapLocationType.from_url(location)))
        return SitemapIndex(sitemaps=sitemaps)

    def _sitemap(self, root) -> Sitemap:
        return Sitemap(
            urls=[
                SitemapUrl(
                    location=_text(el, "{*}loc", required=True),
                    change_frequency=_text(el, "{*}changefreq"),
                    priority=_convert(_text(el, "{*}priority"), float, "priority", "a number"),
                    last_modified=_iso_date(_text(el, "{*}lastmod"), "lastmod"),
                )
                for el in root.findall("{*}url")
            ]
        )

    # endregion


def _primary_name(names: List[Name]) -> Optional[str]:
    for name in names:
        if name.type == "primary":
            return name.value
    return names[0].value if names else None


def _error_message(element) -> str:
    """Extracts the service's error text from <error>, <errors> or <message> elements."""
    message = element.get("message")
    if message:
        return message.strip()
    texts = [text.strip() for text in element.itertext() if text.strip()]
    return " ".join(texts) or "unknown error"
