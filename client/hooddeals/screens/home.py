# client/hooddeals/screens/home.py

from typing import List, Optional

from hooddeals.core.errors import HoodDealsError
from hooddeals.core.logger import get_logger
from hooddeals.models.listing_models import Listing
from hooddeals.screens.state import ScreenState
from hooddeals.services.listing_service import ListingService
from hooddeals.utils.listing_filters import ALL_CATEGORIES, ALL_PRICES, filter_listings

log = get_logger("home")


class HomeFeedViewModel(ScreenState):
    """All listings fetched once; filtering happens locally."""

    def __init__(self, listings: ListingService):
        super().__init__()
        self.service = listings
        self.items: List[Listing] = []

    def load(self) -> None:
        self._begin()
        try:
            items = self.service.list_listings()
        except HoodDealsError as e:
            log.error("Failed to load listings: %s", e)
            self._fail(e)
            return
        self.items = items
        self._succeed()

    def visible(
        self,
        category: Optional[str] = ALL_CATEGORIES,
        price_range: Optional[str] = ALL_PRICES,
        query: Optional[str] = None,
    ) -> List[Listing]:
        return filter_listings(self.items, category, price_range, query)
