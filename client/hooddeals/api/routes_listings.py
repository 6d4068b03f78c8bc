# client/hooddeals/api/routes_listings.py

from typing import Optional

from fastapi import APIRouter, HTTPException

from hooddeals.api import common
from hooddeals.core.errors import HoodDealsError
from hooddeals.models.listing_models import (
    HomeFeedOut,
    Listing,
    ListingFiltersOut,
    PostItemIn,
)
from hooddeals.screens.home import HomeFeedViewModel
from hooddeals.screens.post_item import PostItemForm
from hooddeals.screens.profile import ProfileViewModel
from hooddeals.utils.listing_filters import (
    ALL_CATEGORIES,
    ALL_PRICES,
    CATEGORY_OPTIONS,
    PRICE_RANGES,
)

router = APIRouter(prefix="/listings", tags=["listings"])


# --------------------------
# Filter options
# --------------------------
@router.get("/filters", response_model=ListingFiltersOut)
def filters():
    return {
        "categories": [ALL_CATEGORIES] + CATEGORY_OPTIONS,
        "price_ranges": list(PRICE_RANGES),
    }


# --------------------------
# Home feed
# --------------------------
@router.get("", response_model=HomeFeedOut)
def home_feed(
    category: str = ALL_CATEGORIES,
    price_range: str = ALL_PRICES,
    q: Optional[str] = None,
):
    if price_range not in PRICE_RANGES:
        raise HTTPException(400, f"Unknown price range: {price_range}")

    feed = HomeFeedViewModel(common.listing_service)
    feed.load()
    if feed.error:
        raise HTTPException(502, feed.error)

    items = feed.visible(category, price_range, q)
    return {
        "total": len(items),
        "category": category,
        "price_range": price_range,
        "query": q or "",
        "items": items,
    }


# --------------------------
# Post item
# --------------------------
@router.post("", response_model=Listing)
def post_item(data: PostItemIn):
    form = PostItemForm(common.new_resolver(), common.listing_service)
    try:
        return form.submit(data)
    except HoodDealsError as e:
        raise common.to_http_error(e)


# --------------------------
# Delete own listing
# --------------------------
@router.delete("/{listing_id}")
def delete_listing(listing_id: int):
    profile = ProfileViewModel(common.sessions, common.new_resolver(), common.listing_service)
    try:
        profile.delete_listing(listing_id)
    except HoodDealsError as e:
        raise common.to_http_error(e)
    return {"ok": True, "remaining": len(profile.listings)}
