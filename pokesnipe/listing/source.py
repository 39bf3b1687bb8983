"""Where listings come from."""

from typing import Any, Iterable, List, Mapping, Optional, Protocol

from ..core.types import Listing

# Filter keys understood by StaticListingSource
FILTER_MIN_PRICE = "min_price"
FILTER_MAX_PRICE = "max_price"
FILTER_COUNTRY = "item_location_country"


class ListingSource(Protocol):
    async def search(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> List[Listing]:
        ...


class StaticListingSource:
    """Listings held in memory, e.g. loaded from a JSON export.

    A listing matches when every word of the query appears in its title.
    Prices are compared on price plus shipping.
    """

    def __init__(self, listings: Iterable[Listing]):
        self._listings = list(listings)
        self.searches = 0

    async def search(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> List[Listing]:
        self.searches += 1
        words = query.lower().split()
        filters = filters or {}
        min_price = filters.get(FILTER_MIN_PRICE)
        max_price = filters.get(FILTER_MAX_PRICE)
        country = filters.get(FILTER_COUNTRY)

        matches = []
        for listing in self._listings:
            title = listing.title.lower()
            if not all(word in title for word in words):
                continue
            total = listing.price + listing.shipping
            if min_price is not None and total < min_price:
                continue
            if max_price is not None and total > max_price:
                continue
            if country and (listing.country or "").upper() != country.upper():
                continue
            matches.append(listing)
        return matches
