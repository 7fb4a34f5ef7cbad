from typing import List, Optional

import requests
from pydantic import ValidationError

import config
from booking_schemas import HotelDetails
from errors import ReferenceDataError
from logger_config import get_logger
from pricing import estimate_nightly_rate, format_currency

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10


class ListingClient:
    """
    Business-search API client (Yelp Fusion style) for hotel listings.
    """

    def __init__(self, api_key: str = None, base_url: str = None, timeout: float = None, session=None):
        self.api_key = api_key if api_key is not None else config.YELP_API_KEY
        self.base_url = (base_url or config.YELP_API_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.http = session or requests.Session()

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.api_key}"}

    def search_listings(self, location: str, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0,
                        term: str = "hotels") -> List[HotelDetails]:
        """
        One page of listings for a location. A failed request is logged and
        yields an empty page; malformed records are skipped.
        """
        url = f"{self.base_url}/businesses/search"
        params = {"term": term, "location": location, "limit": limit, "offset": offset}
        try:
            response = self.http.get(url, params=params, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Listing search failed", location=location, offset=offset, error=str(exc))
            return []

        records = []
        for raw in data.get("businesses") or []:
            try:
                records.append(HotelDetails.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Skipping malformed listing", listing_id=raw.get("id"), error=str(exc))
        logger.info("Listing search", location=location, offset=offset, returned=len(records))
        return records

    def fetch_listing_details(self, listing_id: str) -> HotelDetails:
        url = f"{self.base_url}/businesses/{listing_id}"
        try:
            response = self.http.get(url, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            return HotelDetails.model_validate(response.json())
        except (requests.RequestException, ValueError) as exc:
            # pydantic's ValidationError is a ValueError too
            logger.error("Hotel details lookup failed", listing_id=listing_id, error=str(exc))
            raise ReferenceDataError("Failed to load hotel details. Please try again.") from exc


def listing_card(hotel: HotelDetails) -> dict:
    """Display fields for one listing in the results grid."""
    # listings carry a price tier, not a nightly rate
    rate = estimate_nightly_rate(hotel.price)
    return {
        "id": hotel.id,
        "name": hotel.name,
        "image_url": hotel.image_url or "",
        "address": ", ".join(part for part in (hotel.location.address1, hotel.location.city) if part),
        "rating": hotel.rating,
        "review_count": hotel.review_count,
        "nightly_rate": rate,
        "price_label": f"{format_currency(rate)}/night",
    }


class ListingPager:
    """
    Offset pagination over search_listings for an infinite list.

    offset advances by the number of records the API returned; has_more
    stays true while full pages come back. Records already seen are dropped.
    """

    def __init__(self, client: ListingClient, location: str, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size
        self.reset(location)

    def reset(self, location: Optional[str] = None) -> None:
        if location is not None:
            self.location = location
        self.items: List[HotelDetails] = []
        self.offset = 0
        self.has_more = True

    def load_more(self) -> List[HotelDetails]:
        if not self.has_more:
            return []

        batch = self.client.search_listings(self.location, limit=self.page_size, offset=self.offset)
        seen = {item.id for item in self.items}
        fresh = []
        for item in batch:
            if item.id not in seen:
                seen.add(item.id)
                fresh.append(item)

        self.items.extend(fresh)
        self.offset += len(batch)
        self.has_more = len(batch) == self.page_size
        return fresh
