import pytest
from datetime import date, datetime, timedelta, timezone

from bgg_client.exceptions import (
    BGGMissingFieldError,
    BGGSchemaMismatchError,
    BGGTypeMismatchError,
    BGGUnknownEnumValueError,
)
from bgg_client.mapper import Mapper
from bgg_client.models import Buddy, Name, PollResult, Price
from bgg_client.types import (
    Endpoint,
    FamilyType,
    ForumListType,
    SitemapLocationType,
    SubType,
    ThingType,
)

from pages import load_fixture, plays_page

UTC = timezone.utc


@pytest.fixture
def mapper():
    return Mapper()


class TestCollection:
    def test_collection_item(self, mapper):
        collection = mapper.map(Endpoint.COLLECTION, load_fixture("collection_novaeux.xml"))

        assert collection.total_items == 1
        assert collection.publish_date == datetime(2024, 2, 6, 16, 45, 12, tzinfo=UTC)
        assert len(collection.items) == 1

        item = collection.items[0]
        assert item.collection_id == 117124329
        assert item.object_id == 224517
        assert item.type == ThingType.BOARD_GAME
        assert item.name == "Brass: Birmingham"
        assert item.original_name is None
        assert item.year_published == 2018
        assert item.num_plays == 3
        assert item.comment == "Played with the Dutch group."
        assert item.condition_text is None

    def test_collection_status_uses_compact_dates(self, mapper):
        item = mapper.map(Endpoint.COLLECTION, load_fixture("collection_novaeux.xml")).items[0]

        assert item.status.own is True
        assert item.status.previously_owned is False
        assert item.status.wishlist is True
        assert item.status.wishlist_priority == 2
        # Compact dates carry no offset and stay naive.
        assert item.status.last_modified == datetime(2023, 3, 20, 4, 58, 43)

    def test_collection_stats_keep_rating_sentinel(self, mapper):
        stats = mapper.map(Endpoint.COLLECTION, load_fixture("collection_novaeux.xml")).items[0].stats

        assert stats.min_players == 2
        assert stats.max_players == 4
        assert stats.playing_time == 120
        assert stats.num_owned == 58211
        assert stats.ratings.value == "N/A"
        assert stats.ratings.users_rated == 46210
        assert stats.ratings.average == pytest.approx(8.59725)
        assert stats.ratings.median == 0
        assert [rank.name for rank in stats.ratings.ranks] == ["boardgame", "strategygames"]


class TestThings:
    @pytest.fixture
    def thing(self, mapper):
        things = mapper.map(Endpoint.THING, load_fixture("thing_224517.xml"))
        assert len(things.things) == 1
        return things.things[0]

    def test_basic_fields(self, thing):
        assert thing.id == 224517
        assert thing.type == ThingType.BOARD_GAME
        assert thing.name == "Brass: Birmingham"
        assert thing.names[1] == Name(value="Brass: Бірмінгем", type="alternate", sort_index=1)
        assert thing.description.startswith("Brass: Birmingham is an economic strategy game")
        assert thing.year_published == 2018
        assert thing.min_players == 2
        assert thing.max_players == 4
        assert thing.playing_time == 120
        assert thing.min_play_time == 60
        assert thing.min_age == 14
        assert thing.release_date is None
        assert thing.error is None

    def test_polls_are_uniform_records(self, thing):
        assert [poll.name for poll in thing.polls] == [
            "suggested_numplayers",
            "suggested_playerage",
            "language_dependence",
        ]
        players = thing.polls[0]
        assert players.total_votes == 1075
        assert players.results[1].num_players == "3"
        assert players.results[1].results[0] == PollResult(value="Best", num_votes=642)

        language = thing.polls[2]
        assert language.results[0].num_players is None
        assert language.results[0].results[0].level == 1

        assert thing.poll_summaries[0].results[0].value == "Best with 4 players"

    def test_links_keep_unknown_discriminators(self, thing):
        assert [link.type for link in thing.links] == [
            "boardgamecategory",
            "boardgamemechanic",
            "boardgamedesigner",
            "boardgamecollectible",
            "boardgameimplementation",
        ]
        assert thing.links[3].value == "A brand new discriminator"
        assert thing.links[0].inbound is None
        assert thing.links[4].inbound is True

    def test_versions_videos_and_listings(self, thing):
        version = thing.versions[0]
        assert version.id == 453103
        assert version.type == "boardgameversion"
        assert version.name == "English deluxe edition"
        assert version.product_code == "ROX802"
        assert version.width == pytest.approx(12.0079)
        assert version.weight == 0
        assert len(version.links) == 2

        video = thing.videos[0]
        assert video.category == "instructional"
        assert video.user_id == 1254562
        assert video.post_date == datetime(2024, 1, 28, 4, 51, 50, tzinfo=timezone(timedelta(hours=-6)))

        listing = thing.listings[0]
        assert listing.list_date == datetime(2024, 2, 6, 16, 45, 12, tzinfo=UTC)
        assert listing.price == Price(value=64.5, currency="EUR")
        assert listing.condition == "new"
        assert listing.link.href == "https://boardgamegeek.com/market/product/3402146"

    def test_comments_and_statistics(self, thing):
        assert thing.comments.page == 1
        assert thing.comments.total_items == 2
        assert thing.comments.comments[0].rating == "10"
        assert thing.comments.comments[1].rating == "N/A"

        ratings = thing.statistics.ratings
        assert thing.statistics.page == 1
        assert ratings.users_rated == 46210
        assert ratings.owned == 58211
        assert ratings.average_weight == pytest.approx(3.8836)
        assert ratings.ranks[0].value == "1"
        assert ratings.ranks[1].value == "Not Ranked"
        assert ratings.ranks[1].bayes_average == "Not Ranked"

    def test_unknown_thing_type_is_kept(self, mapper):
        raw = '<items><item type="boardgamepuzzle" id="1"><name type="primary" value="Puzzle" /></item></items>'
        thing = mapper.map(Endpoint.THING, raw).things[0]
        assert thing.type == "boardgamepuzzle"

    def test_unknown_thing_type_fails_when_strict(self):
        raw = '<items><item type="boardgamepuzzle" id="1"><name type="primary" value="Puzzle" /></item></items>'
        with pytest.raises(BGGUnknownEnumValueError) as exc_info:
            Mapper(strict_enums=True).map(Endpoint.THING, raw)
        assert exc_info.value.kind == "UnknownEnumValue"
        assert exc_info.value.value == "boardgamepuzzle"
        assert exc_info.value.raw == raw

    def test_mapping_is_idempotent(self, mapper):
        raw = load_fixture("thing_224517.xml")
        assert mapper.map(Endpoint.THING, raw) == mapper.map(Endpoint.THING, raw)

    def test_accepts_bytes(self, mapper):
        raw = load_fixture("thing_224517.xml")
        assert mapper.map(Endpoint.THING, raw.encode("utf-8")) == mapper.map(Endpoint.THING, raw)


def test_family(mapper):
    family = mapper.map(Endpoint.FAMILY, load_fixture("family_8374.xml"))
    item = family.items[0]
    assert item.id == 8374
    assert item.type == FamilyType.BOARD_GAME_FAMILY
    assert item.name == "Players: Games with Solitaire Rules"
    assert [link.value for link in item.links] == ["Dark Tower", "Shadows over Camelot"]
    assert all(link.inbound for link in item.links)


def test_user(mapper):
    user = mapper.map(Endpoint.USER, load_fixture("user_novaeux.xml"))
    assert user.id == 2489127
    assert user.name == "Novaeux"
    assert user.first_name == "Wiebe"
    assert user.last_name == "Elsinga"
    assert user.avatar_link == "N/A"
    assert user.year_registered == 2020
    assert user.last_login == date(2024, 2, 5)
    # Empty values are absent, not empty strings.
    assert user.state_or_province is None
    assert user.web_address is None
    assert user.country == "Netherlands"
    assert user.trade_rating == 0
    assert user.buddies.total == 2
    assert user.buddies.buddies[0] == Buddy(id=2489142, name="Yunuyei")
    assert user.guilds.guilds[0].name == "Dutch Board Gamers"
    assert [item.name for item in user.top.items] == ["Brass: Birmingham", "Ark Nova"]
    assert user.hot.domain == "boardgame"


def test_user_without_optional_lists(mapper):
    user = mapper.map(Endpoint.USER, '<user id="1" name="someone"><firstname value="Some" /></user>')
    assert user.buddies is None
    assert user.guilds is None
    assert user.top is None
    assert user.hot is None
    assert user.last_login is None


def test_forum_list(mapper):
    forum_list = mapper.map(Endpoint.FORUM_LIST, load_fixture("forum_list_342942.xml"))
    assert forum_list.id == 342942
    assert forum_list.type == ForumListType.THING
    assert len(forum_list.forums) == 3
    rules = forum_list.forums[1]
    assert rules.title == "Rules"
    assert rules.num_threads == 880
    assert rules.last_post_date == datetime(2024, 2, 7, 8, 12, 30, tzinfo=UTC)
    archive = forum_list.forums[2]
    assert archive.no_posting is True
    assert archive.group_id == 1
    assert archive.description is None
    assert archive.last_post_date is None


def test_thread_uses_iso_dates(mapper):
    thread = mapper.map(Endpoint.THREAD, load_fixture("thread_3208373.xml"))
    assert thread.id == 3208373
    assert thread.num_articles == 2
    assert thread.subject == "New Maps = New Game"
    first = thread.articles[0]
    assert first.username == "Corwin007"
    assert first.num_edits == 1
    assert first.body == "I love the new maps!"
    assert first.edit_date == datetime(2024, 1, 28, 5, 2, 10, tzinfo=timezone(timedelta(hours=-6)))
    assert thread.articles[1].subject == "Re: New Maps = New Game"


def test_geek_list(mapper):
    geek_list = mapper.map(Endpoint.GEEK_LIST, load_fixture("geeklist_331520.xml"))
    assert geek_list.id == 331520
    assert geek_list.post_date == datetime(2024, 1, 7, 15, 4, 12, tzinfo=UTC)
    assert geek_list.thumbs == 7
    assert geek_list.num_items == 2
    assert geek_list.username == "Zeebrugge"
    assert geek_list.title == "Top 10 games of 2023"
    assert geek_list.comments[0].value == "Great list!"

    first, second = geek_list.items
    assert first.sub_type == SubType.BOARD_GAME
    assert first.object_name == "Ark Nova"
    assert first.image_id == 6293412
    assert first.comments[0].username == "Yunuyei"
    assert second.sub_type == SubType.BOARD_GAME_EXPANSION
    assert second.image_id is None
    assert second.body is None


def test_guild(mapper):
    guild = mapper.map(Endpoint.GUILD, load_fixture("guild_2310.xml"))
    assert guild.id == 2310
    assert guild.name == "Dutch Board Gamers"
    assert guild.created_at == datetime(2007, 7, 23, 14, 11, 22, tzinfo=UTC)
    assert guild.category == "region"
    assert guild.location.city == "Amsterdam"
    assert guild.location.address_line1 is None
    assert guild.members is None


def test_hot_list(mapper):
    hot = mapper.map(Endpoint.HOT_LIST, load_fixture("hot_boardgame.xml"))
    assert [(item.rank, item.name) for item in hot.results] == [(1, "Arcs"), (2, "Ark Nova")]
    assert hot.results[0].year_published == 2024
    assert hot.results[1].year_published is None


def test_search(mapper):
    results = mapper.map(Endpoint.SEARCH, load_fixture("search_brass.xml"))
    assert results.total == 2
    assert results.results[0].name == Name(value="Brass: Birmingham", type="primary")
    assert results.results[1].type == ThingType.BOARD_GAME
    assert results.results[1].year_published == 2007


def test_plays(mapper):
    plays = mapper.map(Endpoint.PLAYS, plays_page("Novaeux", page=1, total=2))
    assert plays.username == "Novaeux"
    assert plays.total == 2
    play = plays.plays[0]
    assert play.date == date(2024, 2, 5)
    assert play.length_in_minutes == 90
    assert play.item.object_id == 342942
    assert play.item.sub_types == [SubType.BOARD_GAME]
    assert play.players[0].win is True
    assert play.players[0].new is False
    assert play.players[0].score == "100"


def test_sitemap_index_is_namespaced(mapper):
    index = mapper.map(Endpoint.SITEMAP_INDEX, load_fixture("sitemapindex_boardgame.xml"))
    assert [sitemap.type for sitemap in index.sitemaps] == [
        SitemapLocationType.BOARD_GAMES,
        SitemapLocationType.BOARD_GAMES,
        SitemapLocationType.BOARD_GAME_VERSIONS,
        SitemapLocationType.FILES,
        SitemapLocationType.UNKNOWN,
    ]


def test_sitemap(mapper):
    sitemap = mapper.map(Endpoint.SITEMAP, load_fixture("sitemap_boardgame_page_1.xml"))
    assert sitemap.urls[0].location == "https://boardgamegeek.com/boardgame/1/die-macher"
    assert sitemap.urls[0].change_frequency == "daily"
    assert sitemap.urls[0].priority == pytest.approx(0.8)
    assert sitemap.urls[0].last_modified == date(2024, 2, 5)
    assert sitemap.urls[1].last_modified is None


class TestMappingErrors:
    def test_root_mismatch(self, mapper):
        raw = load_fixture("thread_3208373.xml")
        with pytest.raises(BGGSchemaMismatchError) as exc_info:
            mapper.map(Endpoint.USER, raw)
        assert exc_info.value.kind == "SchemaMismatch"
        assert exc_info.value.raw == raw

    @pytest.mark.parametrize(
        "raw, message",
        [
            ('<error message="Thread Not Found" />', "Thread Not Found"),
            ("<errors><error><message>Invalid username specified</message></error></errors>", "Invalid username specified"),
            ("<message>Your request for this collection has been accepted</message>", "has been accepted"),
        ],
    )
    def test_service_errors(self, mapper, raw, message):
        with pytest.raises(BGGSchemaMismatchError) as exc_info:
            mapper.map(Endpoint.THREAD, raw)
        assert message in exc_info.value.message
        assert exc_info.value.raw == raw

    def test_error_inside_expected_root(self, mapper):
        raw = '<guild id="0" termsofuse="x"><error>Guild not found.</error></guild>'
        with pytest.raises(BGGSchemaMismatchError, match="Guild not found"):
            mapper.map(Endpoint.GUILD, raw)

    @pytest.mark.parametrize(
        "endpoint, fixture",
        [
            (Endpoint.THING, "search_brass.xml"),
            (Endpoint.THING, "collection_novaeux.xml"),
            (Endpoint.THING, "family_8374.xml"),
            (Endpoint.HOT_LIST, "thing_224517.xml"),
            (Endpoint.SEARCH, "hot_boardgame.xml"),
            (Endpoint.COLLECTION, "search_brass.xml"),
            (Endpoint.FAMILY, "thing_224517.xml"),
        ],
    )
    def test_items_document_of_another_endpoint(self, mapper, endpoint, fixture):
        with pytest.raises(BGGSchemaMismatchError, match=f"look like a {endpoint.value} response"):
            mapper.map(endpoint, load_fixture(fixture))

    def test_empty_items_document(self, mapper):
        assert mapper.map(Endpoint.HOT_LIST, '<items termsofuse="x"></items>').results == []

    @pytest.mark.parametrize("error_cls", [BGGMissingFieldError, BGGTypeMismatchError, BGGUnknownEnumValueError])
    def test_errors_are_documented(self, error_cls):
        assert error_cls.__doc__

    def test_not_xml(self, mapper):
        with pytest.raises(BGGSchemaMismatchError):
            mapper.map(Endpoint.HOT_LIST, "<html><body>Service Unavailable")

    def test_missing_required_field(self, mapper):
        with pytest.raises(BGGMissingFieldError) as exc_info:
            mapper.map(Endpoint.USER, '<user id="" name="" termsofuse="x" />')
        assert exc_info.value.kind == "MissingField"
        assert exc_info.value.field == "id"
        assert exc_info.value.element == "user"

    def test_type_mismatch(self, mapper):
        with pytest.raises(BGGTypeMismatchError) as exc_info:
            mapper.map(Endpoint.FORUM, '<forum id="abc" title="Reviews" />')
        assert exc_info.value.kind == "TypeMismatch"
        assert exc_info.value.field == "id"
        assert exc_info.value.value == "abc"

    def test_malformed_date(self, mapper):
        with pytest.raises(BGGTypeMismatchError):
            mapper.map(Endpoint.FORUM, '<forum id="1" title="Reviews" lastpostdate="yesterday" />')

    def test_zero_dates_are_absent(self, mapper):
        plays = mapper.map(
            Endpoint.PLAYS,
            '<plays username="x" total="1" page="1"><play id="1" date="0000-00-00" /></plays>',
        )
        assert plays.plays[0].date is None
