from unittest.mock import MagicMock

import pytest
import requests

from booking_schemas import HotelDetails
from errors import ReferenceDataError
from providers.listings import ListingClient, ListingPager, listing_card


def business(idx):
    return {
        "id": f"biz-{idx}",
        "name": f"Hotel {idx}",
        "image_url": f"https://example.com/{idx}.jpg",
        "location": {"address1": f"{idx} Main St", "city": "Boston", "state": "MA", "zip_code": "02110"},
        "price": "$$",
        "rating": 4.0,
        "review_count": 10 + idx,
        "categories": [{"alias": "hotels", "title": "Hotels"}],
        "coordinates": {"latitude": 42.36, "longitude": -71.05},
    }


def hotel(idx):
    return HotelDetails.model_validate(business(idx))


def response(payload, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=resp)
    return resp


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def client(http):
    return ListingClient(api_key="test-key", base_url="https://api.test/v3", timeout=5, session=http)


def test_search_listings(client, http):
    http.get.return_value = response({"businesses": [business(1), business(2)]})

    results = client.search_listings("Boston", limit=2, offset=4)

    assert [h.id for h in results] == ["biz-1", "biz-2"]
    assert results[0].location.zip_code == "02110"
    http.get.assert_called_once_with(
        "https://api.test/v3/businesses/search",
        params={"term": "hotels", "location": "Boston", "limit": 2, "offset": 4},
        headers={"Authorization": "Bearer test-key"},
        timeout=5,
    )


def test_search_skips_malformed_records(client, http):
    http.get.return_value = response({"businesses": [business(1), {"id": "broken"}]})
    assert [h.id for h in client.search_listings("Boston")] == ["biz-1"]


def test_search_failure_yields_empty_page(client, http):
    http.get.side_effect = requests.ConnectionError("down")
    assert client.search_listings("Boston") == []

    http.get.side_effect = None
    http.get.return_value = response({}, status=500)
    assert client.search_listings("Boston") == []


def test_fetch_listing_details(client, http):
    http.get.return_value = response(business(7))
    hotel = client.fetch_listing_details("biz-7")
    assert hotel.name == "Hotel 7"
    assert http.get.call_args.args[0] == "https://api.test/v3/businesses/biz-7"


def test_fetch_listing_details_failure(client, http):
    http.get.return_value = response({"error": "not found"}, status=404)
    with pytest.raises(ReferenceDataError, match="Failed to load hotel details"):
        client.fetch_listing_details("missing")


def test_listing_card_estimates_rate_from_tier():
    card = listing_card(hotel(3))
    assert card["address"] == "3 Main St, Boston"
    assert card["nightly_rate"] == 50
    assert card["price_label"] == "$50.00/night"

    untiered = hotel(4).model_copy(update={"price": None})
    assert listing_card(untiered)["price_label"] == "$15.00/night"


def test_pager_advances_and_dedupes():
    source = MagicMock()
    source.search_listings.side_effect = [
        [hotel(i) for i in (1, 2)],
        [hotel(i) for i in (2, 3)],
        [hotel(4)],
    ]
    pager = ListingPager(source, "Boston", page_size=2)

    assert [h.id for h in pager.load_more()] == ["biz-1", "biz-2"]
    assert pager.offset == 2 and pager.has_more

    assert [h.id for h in pager.load_more()] == ["biz-3"]
    assert pager.offset == 4

    assert [h.id for h in pager.load_more()] == ["biz-4"]
    assert pager.offset == 5
    assert not pager.has_more
    assert pager.load_more() == []
    assert source.search_listings.call_count == 3
    assert [h.id for h in pager.items] == ["biz-1", "biz-2", "biz-3", "biz-4"]


def test_pager_reset():
    source = MagicMock()
    source.search_listings.return_value = []
    pager = ListingPager(source, "Boston", page_size=10)
    pager.load_more()
    assert not pager.has_more

    pager.reset("Denver")
    assert pager.location == "Denver"
    assert pager.has_more and pager.offset == 0 and pager.items == []
    pager.load_more()
    source.search_listings.assert_called_with("Denver", limit=10, offset=0)

