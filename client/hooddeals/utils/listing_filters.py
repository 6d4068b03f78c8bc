# client/hooddeals/utils/listing_filters.py

from typing import Callable, Dict, Iterable, List, Optional

from hooddeals.models.listing_models import Listing


ALL_CATEGORIES = "All"
CATEGORY_OPTIONS = ["Cars", "Electronics", "Clothing", "Furniture", "Food", "Other"]

ALL_PRICES = "All Prices"

# Bounds are inclusive on both ends where a range has two.
PRICE_RANGES: Dict[str, Callable[[float], bool]] = {
    ALL_PRICES: lambda p: True,
    "Under $100": lambda p: p < 100,
    "$100 - $500": lambda p: 100 <= p <= 500,
    "$500 - $1000": lambda p: 500 <= p <= 1000,
    "Above $1000": lambda p: p > 1000,
}


def apply_price_filter(item: Listing, price_range: Optional[str]) -> bool:
    if not price_range or price_range == ALL_PRICES:
        return True
    predicate = PRICE_RANGES.get(price_range)
    if predicate is None:
        raise ValueError(f"Unknown price range: {price_range}")
    return predicate(float(item.price))


def apply_category_filter(item: Listing, category: Optional[str]) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return (item.category or "").strip().lower() == category.strip().lower()


def apply_search_filter(item: Listing, query: Optional[str]) -> bool:
    q = (query or "").strip().lower()
    if not q:
        return True
    haystack = " ".join(
        part for part in (item.title, item.description, item.location) if part
    ).lower()
    return q in haystack


def filter_listings(
    items: Iterable[Listing],
    category: Optional[str] = None,
    price_range: Optional[str] = None,
    query: Optional[str] = None,
) -> List[Listing]:
    return [
        item for item in items
        if apply_category_filter(item, category)
        and apply_price_filter(item, price_range)
        and apply_search_filter(item, query)
    ]
