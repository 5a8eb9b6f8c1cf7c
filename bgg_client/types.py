# bgg_client/types.py
from enum import Enum

XML2_API_URL = "https://boardgamegeek.com/xmlapi2"
XML1_API_URL = "https://boardgamegeek.com/xmlapi"

PATH_COLLECTION = "collection"
PATH_FAMILY = "family"
PATH_FORUM_LIST = "forumlist"
PATH_FORUM = "forum"
PATH_GEEK_LIST = "geeklist"
PATH_GUILDS = "guilds"
PATH_HOT = "hot"
PATH_PLAYS = "plays"
PATH_SEARCH = "search"
PATH_SITEMAP_INDEX = "sitemapindex"
PATH_THING = "thing"
PATH_THREAD = "thread"
PATH_USER = "user"

PARAM_BGG_RATING = "bggrating"
PARAM_BRIEF = "brief"
PARAM_BUDDIES = "buddies"
PARAM_COLLECTION_ID = "collid"
PARAM_COMMENT = "comment"
PARAM_COMMENTS = "comments"
PARAM_COUNT = "count"
PARAM_DOMAIN = "domain"
PARAM_EXACT = "exact"
PARAM_EXCLUDE_SUBTYPE = "excludesubtype"
PARAM_GUILDS = "guilds"
PARAM_HAS_PARTS = "hasparts"
PARAM_HOT = "hot"
PARAM_ID = "id"
PARAM_MARKETPLACE = "marketplace"
PARAM_MAX_PLAYS = "maxplays"
PARAM_MAXIMUM_DATE = "maxdate"
PARAM_MEMBERS = "members"
PARAM_MINIMUM_ARTICLE_DATE = "minarticledate"
PARAM_MINIMUM_ARTICLE_ID = "minarticleid"
PARAM_MINIMUM_BGG_RATING = "minbggrating"
PARAM_MINIMUM_DATE = "mindate"
PARAM_MINIMUM_PLAYS = "minplays"
PARAM_MINIMUM_RATING = "minrating"
PARAM_MODIFIED_SINCE = "modifiedsince"
PARAM_NAME = "name"
PARAM_OWN = "own"
PARAM_PAGE = "page"
PARAM_PAGE_SIZE = "pagesize"
PARAM_PLAYED = "played"
PARAM_PRE_ORDERED = "preordered"
PARAM_PREVIOUSLY_OWNED = "prevowned"
PARAM_QUERY = "query"
PARAM_RATED = "rated"
PARAM_RATING = "rating"
PARAM_RATING_COMMENTS = "ratingcomments"
PARAM_SORT = "sort"
PARAM_STATS = "stats"
PARAM_SUBTYPE = "subtype"
PARAM_TOP = "top"
PARAM_TRADE = "trade"
PARAM_TYPE = "type"
PARAM_USERNAME = "username"
PARAM_VERSION = "version"
PARAM_VERSIONS = "versions"
PARAM_VIDEOS = "videos"
PARAM_WANT = "want"
PARAM_WANT_PARTS = "wantparts"
PARAM_WANT_TO_BUY = "wanttobuy"
PARAM_WANT_TO_PLAY = "wanttoplay"
PARAM_WISHLIST = "wishlist"
PARAM_WISHLIST_PRIORITY = "wishlistpriority"

REQUEST_DATE_FORMAT = "%Y-%m-%d"
REQUEST_DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
# The collection endpoint only understands a two digit year.
COLLECTION_MODIFIED_SINCE_FORMAT = "%y-%m-%d %H:%M:%S"


class Endpoint(Enum):
    """
    The remote query shapes. The value is the root element a well-formed
    response document for that endpoint has.
    """
    COLLECTION = "collection"
    THING = "thing"
    FAMILY = "family"
    USER = "user"
    FORUM_LIST = "forumlist"
    FORUM = "forum"
    THREAD = "thread"
    GEEK_LIST = "geeklist"
    GUILD = "guild"
    HOT_LIST = "hotlist"
    PLAYS = "plays"
    SEARCH = "search"
    SITEMAP_INDEX = "sitemapindex"
    SITEMAP = "sitemap"

    @property
    def root_element(self) -> str:
        return _ROOT_ELEMENTS[self]


_ROOT_ELEMENTS = {
    Endpoint.COLLECTION: "items",
    Endpoint.THING: "items",
    Endpoint.FAMILY: "items",
    Endpoint.USER: "user",
    Endpoint.FORUM_LIST: "forums",
    Endpoint.FORUM: "forum",
    Endpoint.THREAD: "thread",
    Endpoint.GEEK_LIST: "geeklist",
    Endpoint.GUILD: "guild",
    Endpoint.HOT_LIST: "items",
    Endpoint.PLAYS: "plays",
    Endpoint.SEARCH: "items",
    Endpoint.SITEMAP_INDEX: "sitemapindex",
    Endpoint.SITEMAP: "urlset",
}


class ThingType(str, Enum):
    """The kind of thing BGG returns, e.g. a board game or an expansion."""
    BOARD_GAME = "boardgame"
    BOARD_GAME_EXPANSION = "boardgameexpansion"
    BOARD_GAME_ACCESSORY = "boardgameaccessory"
    VIDEO_GAME = "videogame"
    RPG_ITEM = "rpgitem"
    RPG_ISSUE = "rpgissue"


class SubType(str, Enum):
    """Sub types used by plays and geek lists."""
    BOARD_GAME = "boardgame"
    BOARD_GAME_EXPANSION = "boardgameexpansion"
    BOARD_GAME_ACCESSORY = "boardgameaccessory"
    BOARD_GAME_INTEGRATION = "boardgameintegration"
    BOARD_GAME_COMPILATION = "boardgamecompilation"
    BOARD_GAME_IMPLEMENTATION = "boardgameimplementation"
    RPG = "rpg"
    RPG_ITEM = "rpgitem"
    VIDEO_GAME = "videogame"


class FamilyType(str, Enum):
    RPG = "rpg"
    RPG_PERIODICAL = "rpgperiodical"
    BOARD_GAME_FAMILY = "boardgamefamily"


class HotListType(str, Enum):
    """
    Types of hot lists. About half of these are accepted by the API but
    never return any items.
    """
    BOARD_GAME = "boardgame"
    BOARD_GAME_COMPANY = "boardgamecompany"
    BOARD_GAME_PERSON = "boardgameperson"
    RPG = "rpg"
    RPG_COMPANY = "rpgcompany"
    RPG_PERSON = "rpgperson"
    VIDEO_GAME = "videogame"
    VIDEO_GAME_COMPANY = "videogamecompany"


class ForumListType(str, Enum):
    THING = "thing"
    FAMILY = "family"


class PlayThingType(str, Enum):
    THING = "thing"
    FAMILY = "family"


class Domain(str, Enum):
    """The BGG network sites. The value is the domain's `domain` parameter."""
    BOARD_GAME_GEEK = "boardgame"
    RPG_GEEK = "rpg"
    VIDEO_GAME_GEEK = "videogame"

    @property
    def address(self) -> str:
        return _DOMAIN_ADDRESSES[self]


_DOMAIN_ADDRESSES = {
    Domain.BOARD_GAME_GEEK: "https://boardgamegeek.com",
    Domain.RPG_GEEK: "https://rpggeek.com",
    Domain.VIDEO_GAME_GEEK: "https://videogamegeek.com",
}


class Inclusion(Enum):
    """Either include or exclude items marked with a certain flag."""
    INCLUDE = "1"
    EXCLUDE = "0"


class SitemapLocationType(str, Enum):
    """
    The kind of pages a sitemap lists. The value is the part of the sitemap
    URL that identifies it, e.g. `sitemap_geekitems_boardgame_page_15`.
    """
    UNKNOWN = ""
    BOARD_GAMES = "geekitems_boardgame_page"
    BOARD_GAME_ACCESSORIES = "boardgameaccessory_page"
    BOARD_GAME_ACCESSORY_FAMILIES = "bgaccessoryfamily_page"
    BOARD_GAME_ACCESSORY_VERSIONS = "bgaccessoryversion_page"
    BOARD_GAME_ARTISTS = "boardgameartist_page"
    BOARD_GAME_AUTHORS = "boardgameauthor_page"
    BOARD_GAME_COMPILATIONS = "boardgamecompilation_page"
    BOARD_GAME_DESIGNERS = "boardgamedesigner_page"
    BOARD_GAME_EVENTS = "boardgameevent_page"
    BOARD_GAME_EXPANSIONS = "boardgameexpansion_page"
    BOARD_GAME_FAMILIES = "boardgamefamily_page"
    BOARD_GAME_IMPLEMENTATIONS = "boardgameimplementation_page"
    BOARD_GAME_ISSUES = "boardgameissue_page"
    BOARD_GAME_ISSUE_ARTICLES = "boardgameissuearticle_page"
    BOARD_GAME_ISSUE_VERSIONS = "boardgameissueversion_page"
    BOARD_GAME_PERIODICALS = "boardgameperiodical_page"
    BOARD_GAME_PUBLISHERS = "boardgamepublisher_page"
    BOARD_GAME_SLEEVES = "bgsleeve_page"
    BOARD_GAME_SLEEVE_MANUFACTURERS = "bgsleevemfg_page"
    BOARD_GAME_SUB_DOMAINS = "boardgamesubdomain_page"
    BOARD_GAME_VERSIONS = "boardgameversion_page_"
    CARD_TYPES = "cardtype_page"
    CARD_SETS = "cardset_page"
    FILES = "files_page"
    GEEK_LISTS = "geeklists_page"
    IMAGES = "images_page"
    RPG = "rpg_page"
    RPG_ARTISTS = "rpgartist_page"
    RPG_CATEGORIES = "rpgcategory_page"
    RPG_DESIGNERS = "rpgdesigner_page"
    RPG_FAMILIES = "rpgfamily_page"
    RPG_GENRES = "rpggenre_page"
    RPG_ISSUE = "rpgissue_page"
    RPG_ISSUE_ARTICLE = "rpgissuearticle_page"
    RPG_ISSUE_VERSION = "rpgissueversion_page"
    RPG_ITEM = "rpgitem_page"
    RPG_ITEM_VERSION = "rpgitemversion_page"
    RPG_MECHANIC = "rpgmechanic_page"
    RPG_PERIODICAL = "rpgperiodical_page"
    RPG_PRODUCERS = "rpgproducer_page"
    RPG_PUBLISHER = "rpgpublisher_page"
    RPG_SERIES = "rpgseries_page"
    RPG_SETTING = "rpgsetting_page"
    RPG_SYSTEM = "rpgsystem_page"
    THREADS = "threads_page"
    VIDEO_GAMES = "videogame_page"
    VIDEO_GAME_BOARD_GAMES = "videogamebg_page"
    VIDEO_GAME_CHARACTERS = "videogamecharacter_page"
    VIDEO_GAME_CHARACTER_VERSIONS = "vgcharacterversion_page"
    VIDEO_GAME_COMPILATION = "videogamecompilation_page"
    VIDEO_GAME_DEVELOPER = "videogamedeveloper_page"
    VIDEO_GAME_EXPANSION = "videogameexpansion_page"
    VIDEO_GAME_FRANCHISE = "videogamefranchise_page"
    VIDEO_GAME_GENRES = "videogamegenre_page"
    VIDEO_GAME_HARDWARE = "videogamehardware_page"
    VIDEO_GAME_HARDWARE_VERSION = "videogamehwversion_page"
    VIDEO_GAME_PLATFORM = "videogameplatform_page"
    VIDEO_GAME_PUBLISHER = "videogamepublisher_page"
    VIDEO_GAME_SERIES = "videogameseries_page"
    VIDEO_GAME_THEMES = "videogametheme_page"
    VIDEO_GAME_VERSION = "videogameversion_page"
    WIKI_PAGES = "wiki_page"

    @classmethod
    def from_url(cls, url: str) -> "SitemapLocationType":
        """Identifies the type of sitemap by a partial match on its URL."""
        for location_type in cls:
            if location_type.value and url.find(location_type.value) > 0:
                return location_type
        return cls.UNKNOWN
