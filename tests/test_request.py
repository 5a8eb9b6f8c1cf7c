import dataclasses

import pytest

from bgg_client.exceptions import BGGNetworkError
from bgg_client.request import Pagination, PaginationMode, Request
from bgg_client.response import Response
from bgg_client.types import XML2_API_URL, Endpoint


@pytest.fixture
def forum_request():
    return Request(endpoint=Endpoint.FORUM, base_url=XML2_API_URL, path="forum", params=(("id", "3696791"),))


class TestRequest:
    def test_url(self, forum_request):
        assert forum_request.location == "https://boardgamegeek.com/xmlapi2/forum"
        assert forum_request.url == "https://boardgamegeek.com/xmlapi2/forum?id=3696791"

    def test_url_without_params(self):
        request = Request(endpoint=Endpoint.SITEMAP, base_url="https://boardgamegeek.com/sitemap_files_page_1")
        assert request.url == "https://boardgamegeek.com/sitemap_files_page_1"

    def test_page_defaults_to_one(self, forum_request):
        assert forum_request.page == 1
        assert forum_request.with_param("page", "0").page == 1

    def test_with_page_leaves_the_original_untouched(self, forum_request):
        second = forum_request.with_page(2)

        assert second.page == 2
        assert second.url == "https://boardgamegeek.com/xmlapi2/forum?id=3696791&page=2"
        assert forum_request.param("page") is None
        assert second.with_page(3).params == (("id", "3696791"), ("page", "3"))

    def test_with_pagination(self, forum_request):
        paginated = forum_request.with_pagination(Pagination(PaginationMode.FIXED, 4))

        assert paginated.pagination.to_page == 4
        assert forum_request.pagination.mode is PaginationMode.NONE
        assert paginated.url == forum_request.url

    def test_frozen(self, forum_request):
        with pytest.raises(dataclasses.FrozenInstanceError):
            forum_request.path = "thread"


class TestResponse:
    def test_success(self):
        response = Response.success(["data"])
        assert response.is_success()
        assert not response.is_error()
        assert response.raw is None

    def test_failure(self):
        error = BGGNetworkError("timed out", raw="<partial")
        response = Response.failure(error)
        assert response.is_error()
        assert response.data is None
        assert response.raw == "<partial"

    def test_holds_exactly_one_of_data_and_error(self):
        with pytest.raises(ValueError):
            Response()
        with pytest.raises(ValueError):
            Response(data=["data"], error=BGGNetworkError("timed out"))
