# bgg_client/models.py
"""
Domain records produced by the mapper.

All records are immutable and compare by value, so mapping the same document
twice yields equal objects. Absent attributes are None and absent lists are
empty; only counts that are meaningful as zero default to 0.

Fields holding a BGG enumeration are typed `Union[<Enum>, str]`: a value the
enumeration does not know is kept as the raw string.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Union

from .types import (
    FamilyType,
    ForumListType,
    SitemapLocationType,
    SubType,
    ThingType,
)


# region Common

@dataclass(frozen=True)
class Name:
    value: str
    type: Optional[str] = None
    sort_index: Optional[int] = None


@dataclass(frozen=True)
class Link:
    """
    A relation from a thing or family to another entity. `type` is the
    discriminator, e.g. "boardgamedesigner", "boardgamemechanic" or
    "boardgameexpansion", and is kept as BGG sends it.
    """
    type: str
    id: int
    value: str
    inbound: Optional[bool] = None


@dataclass(frozen=True)
class Rank:
    id: int
    type: str
    name: str
    friendly_name: Optional[str] = None
    # "Not Ranked" for unranked things.
    value: Optional[str] = None
    bayes_average: Optional[str] = None


@dataclass(frozen=True)
class Ratings:
    """Rating statistics. `value` is the user's own rating in collections, "N/A" if unrated."""
    value: Optional[str] = None
    users_rated: Optional[int] = None
    average: Optional[float] = None
    bayes_average: Optional[float] = None
    stddev: Optional[float] = None
    median: Optional[float] = None
    owned: Optional[int] = None
    trading: Optional[int] = None
    wanting: Optional[int] = None
    wishing: Optional[int] = None
    num_comments: Optional[int] = None
    num_weights: Optional[int] = None
    average_weight: Optional[float] = None
    ranks: List[Rank] = field(default_factory=list)


@dataclass(frozen=True)
class Statistics:
    page: Optional[int]
    ratings: Optional[Ratings]

# endregion


# region Things

@dataclass(frozen=True)
class PollResult:
    value: str
    num_votes: int
    level: Optional[int] = None


@dataclass(frozen=True)
class PollResults:
    """One group of poll results. `num_players` is only set for player count polls."""
    num_players: Optional[str]
    results: List[PollResult] = field(default_factory=list)


@dataclass(frozen=True)
class Poll:
    """
    A community poll. `name` is the discriminator, e.g. "suggested_numplayers",
    "suggested_playerage" or "language_dependence".
    """
    name: str
    title: Optional[str] = None
    total_votes: int = 0
    results: List[PollResults] = field(default_factory=list)


@dataclass(frozen=True)
class PollSummaryResult:
    name: Optional[str]
    value: Optional[str]


@dataclass(frozen=True)
class PollSummary:
    name: Optional[str]
    title: Optional[str]
    results: List[PollSummaryResult] = field(default_factory=list)


@dataclass(frozen=True)
class Video:
    id: int
    title: Optional[str]
    category: Optional[str]
    language: Optional[str]
    link: Optional[str]
    username: Optional[str]
    user_id: Optional[int]
    post_date: Optional[datetime]


@dataclass(frozen=True)
class Comment:
    username: str
    # A number, or "N/A" for comments without a rating.
    rating: Optional[str] = None
    value: Optional[str] = None


@dataclass(frozen=True)
class Comments:
    page: int
    total_items: int
    comments: List[Comment] = field(default_factory=list)


@dataclass(frozen=True)
class Price:
    value: Optional[float]
    currency: Optional[str]


@dataclass(frozen=True)
class Weblink:
    href: Optional[str]
    title: Optional[str]


@dataclass(frozen=True)
class MarketplaceListing:
    list_date: Optional[datetime]
    price: Optional[Price]
    condition: Optional[str]
    notes: Optional[str]
    link: Optional[Weblink]


@dataclass(frozen=True)
class Version:
    id: int
    type: str
    name: Optional[str] = None
    names: List[Name] = field(default_factory=list)
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    links: List[Link] = field(default_factory=list)
    year_published: Optional[int] = None
    release_date: Optional[date] = None
    product_code: Optional[str] = None
    width: Optional[float] = None
    length: Optional[float] = None
    depth: Optional[float] = None
    weight: Optional[float] = None


@dataclass(frozen=True)
class Thing:
    id: int
    type: Optional[Union[ThingType, str]] = None
    # The primary name.
    name: Optional[str] = None
    names: List[Name] = field(default_factory=list)
    error: Optional[str] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    year_published: Optional[int] = None
    date_published: Optional[str] = None
    release_date: Optional[date] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    playing_time: Optional[int] = None
    min_play_time: Optional[int] = None
    max_play_time: Optional[int] = None
    min_age: Optional[int] = None
    series_code: Optional[str] = None
    issue_index: Optional[int] = None
    links: List[Link] = field(default_factory=list)
    polls: List[Poll] = field(default_factory=list)
    poll_summaries: List[PollSummary] = field(default_factory=list)
    videos: List[Video] = field(default_factory=list)
    comments: Optional[Comments] = None
    statistics: Optional[Statistics] = None
    listings: List[MarketplaceListing] = field(default_factory=list)
    versions: List[Version] = field(default_factory=list)


@dataclass(frozen=True)
class Things:
    terms_of_use: Optional[str]
    things: List[Thing] = field(default_factory=list)

# endregion


# region Family

@dataclass(frozen=True)
class FamilyItem:
    id: int
    type: Optional[Union[FamilyType, str]] = None
    name: Optional[str] = None
    names: List[Name] = field(default_factory=list)
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    links: List[Link] = field(default_factory=list)


@dataclass(frozen=True)
class Family:
    terms_of_use: Optional[str]
    items: List[FamilyItem] = field(default_factory=list)

# endregion


# region Collection

@dataclass(frozen=True)
class CollectionStatus:
    own: bool = False
    previously_owned: bool = False
    for_trade: bool = False
    want: bool = False
    want_to_play: bool = False
    want_to_buy: bool = False
    wishlist: bool = False
    wishlist_priority: Optional[int] = None
    pre_ordered: bool = False
    last_modified: Optional[datetime] = None


@dataclass(frozen=True)
class CollectionStatistics:
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    min_play_time: Optional[int] = None
    max_play_time: Optional[int] = None
    playing_time: Optional[int] = None
    num_owned: Optional[int] = None
    ratings: Optional[Ratings] = None


@dataclass(frozen=True)
class CollectionItem:
    collection_id: int
    object_id: int
    type: Union[ThingType, str]
    name: str
    original_name: Optional[str] = None
    year_published: Optional[int] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    status: Optional[CollectionStatus] = None
    num_plays: Optional[int] = None
    comment: Optional[str] = None
    condition_text: Optional[str] = None
    stats: Optional[CollectionStatistics] = None


@dataclass(frozen=True)
class Collection:
    terms_of_use: Optional[str]
    total_items: int
    publish_date: Optional[datetime]
    items: List[CollectionItem] = field(default_factory=list)

# endregion


# region User

@dataclass(frozen=True)
class Buddy:
    id: int
    name: str


@dataclass(frozen=True)
class Buddies:
    total: int
    page: int
    buddies: List[Buddy] = field(default_factory=list)


@dataclass(frozen=True)
class GuildReference:
    id: int
    name: str


@dataclass(frozen=True)
class UserGuilds:
    total: int
    page: int
    guilds: List[GuildReference] = field(default_factory=list)


@dataclass(frozen=True)
class ListItem:
    rank: int
    type: str
    id: int
    name: str


@dataclass(frozen=True)
class UserList:
    """A user's top or hot list."""
    domain: Optional[str]
    items: List[ListItem] = field(default_factory=list)


@dataclass(frozen=True)
class User:
    terms_of_use: Optional[str]
    id: int
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar_link: Optional[str] = None
    year_registered: Optional[int] = None
    last_login: Optional[date] = None
    state_or_province: Optional[str] = None
    country: Optional[str] = None
    web_address: Optional[str] = None
    xbox_account: Optional[str] = None
    wii_account: Optional[str] = None
    psn_account: Optional[str] = None
    battle_net_account: Optional[str] = None
    steam_account: Optional[str] = None
    trade_rating: Optional[int] = None
    buddies: Optional[Buddies] = None
    guilds: Optional[UserGuilds] = None
    top: Optional[UserList] = None
    hot: Optional[UserList] = None

# endregion


# region Forums and threads

@dataclass(frozen=True)
class ForumSummary:
    id: int
    group_id: Optional[int]
    title: str
    no_posting: bool = False
    description: Optional[str] = None
    num_threads: int = 0
    num_posts: int = 0
    last_post_date: Optional[datetime] = None


@dataclass(frozen=True)
class ForumList:
    terms_of_use: Optional[str]
    id: int
    type: Union[ForumListType, str]
    forums: List[ForumSummary] = field(default_factory=list)


@dataclass(frozen=True)
class ThreadSummary:
    id: int
    subject: str
    author: Optional[str] = None
    num_articles: int = 0
    post_date: Optional[datetime] = None
    last_post_date: Optional[datetime] = None


@dataclass(frozen=True)
class Forum:
    terms_of_use: Optional[str]
    id: int
    title: str
    num_threads: int = 0
    num_posts: int = 0
    last_post_date: Optional[datetime] = None
    no_posting: bool = False
    threads: List[ThreadSummary] = field(default_factory=list)


@dataclass(frozen=True)
class Article:
    id: int
    username: Optional[str]
    link: Optional[str] = None
    post_date: Optional[datetime] = None
    edit_date: Optional[datetime] = None
    num_edits: int = 0
    subject: Optional[str] = None
    body: Optional[str] = None


@dataclass(frozen=True)
class Thread:
    terms_of_use: Optional[str]
    id: int
    num_articles: int = 0
    link: Optional[str] = None
    subject: Optional[str] = None
    articles: List[Article] = field(default_factory=list)

# endregion


# region Geek lists

@dataclass(frozen=True)
class GeekListComment:
    username: str
    date: Optional[datetime] = None
    post_date: Optional[datetime] = None
    edit_date: Optional[datetime] = None
    thumbs: int = 0
    value: Optional[str] = None


@dataclass(frozen=True)
class GeekListItem:
    id: int
    object_type: Optional[str]
    sub_type: Optional[Union[SubType, str]]
    object_id: int
    object_name: Optional[str]
    username: Optional[str]
    post_date: Optional[datetime] = None
    edit_date: Optional[datetime] = None
    thumbs: int = 0
    image_id: Optional[int] = None
    body: Optional[str] = None
    comments: List[GeekListComment] = field(default_factory=list)


@dataclass(frozen=True)
class GeekList:
    terms_of_use: Optional[str]
    id: int
    post_date: Optional[datetime] = None
    edit_date: Optional[datetime] = None
    thumbs: int = 0
    num_items: int = 0
    username: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    items: List[GeekListItem] = field(default_factory=list)
    comments: List[GeekListComment] = field(default_factory=list)

# endregion


# region Guilds

@dataclass(frozen=True)
class Location:
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    city: Optional[str] = None
    state_or_province: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class GuildMember:
    name: str
    join_date: Optional[datetime] = None


@dataclass(frozen=True)
class GuildMembers:
    count: int
    page: int
    members: List[GuildMember] = field(default_factory=list)


@dataclass(frozen=True)
class Guild:
    terms_of_use: Optional[str]
    id: int
    name: str
    created_at: Optional[datetime] = None
    category: Optional[str] = None
    website: Optional[str] = None
    manager: Optional[str] = None
    description: Optional[str] = None
    location: Optional[Location] = None
    members: Optional[GuildMembers] = None

# endregion


# region Hot list and search

@dataclass(frozen=True)
class HotListItem:
    id: int
    rank: int
    name: Optional[str] = None
    thumbnail: Optional[str] = None
    year_published: Optional[int] = None


@dataclass(frozen=True)
class HotList:
    terms_of_use: Optional[str]
    results: List[HotListItem] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    id: int
    type: Union[ThingType, str]
    name: Name
    year_published: Optional[int] = None


@dataclass(frozen=True)
class SearchResults:
    terms_of_use: Optional[str]
    total: int
    results: List[SearchResult] = field(default_factory=list)

# endregion


# region Plays

@dataclass(frozen=True)
class PlayItem:
    name: Optional[str]
    object_type: Optional[str]
    object_id: int
    sub_types: List[Union[SubType, str]] = field(default_factory=list)


@dataclass(frozen=True)
class Player:
    username: Optional[str] = None
    user_id: Optional[int] = None
    name: Optional[str] = None
    start_position: Optional[str] = None
    color: Optional[str] = None
    score: Optional[str] = None
    new: bool = False
    rating: Optional[float] = None
    win: bool = False


@dataclass(frozen=True)
class Play:
    id: int
    date: Optional[date]
    quantity: int = 1
    length_in_minutes: int = 0
    incomplete: bool = False
    no_win_stats: bool = False
    location: Optional[str] = None
    item: Optional[PlayItem] = None
    comments: Optional[str] = None
    players: List[Player] = field(default_factory=list)


@dataclass(frozen=True)
class Plays:
    terms_of_use: Optional[str]
    user_id: Optional[int]
    username: Optional[str]
    total: int
    page: int
    plays: List[Play] = field(default_factory=list)

# endregion


# region Sitemaps

@dataclass(frozen=True)
class SitemapLocation:
    location: str
    type: SitemapLocationType


@dataclass(frozen=True)
class SitemapIndex:
    sitemaps: List[SitemapLocation] = field(default_factory=list)


@dataclass(frozen=True)
class SitemapUrl:
    location: str
    change_frequency: Optional[str] = None
    priority: Optional[float] = None
    last_modified: Optional[date] = None


@dataclass(frozen=True)
class Sitemap:
    urls: List[SitemapUrl] = field(default_factory=list)

# endregion
