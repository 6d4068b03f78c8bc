# client/hooddeals/screens/post_item.py

from typing import Optional

from hooddeals.core.errors import FormValidationError
from hooddeals.core.logger import get_logger
from hooddeals.models.listing_models import Listing, ListingCreate, PostItemIn
from hooddeals.screens.identity import IdentityResolver
from hooddeals.services.listing_service import ListingService
from hooddeals.utils.listing_filters import CATEGORY_OPTIONS
from hooddeals.utils.validators import parse_price, require

log = get_logger("post_item")


def _blank_to_none(value: str) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def validate_post(form: PostItemIn) -> dict:
    """Everything here runs before any request is made."""
    title = require(form.title, "Please enter a title.", "title")
    price = parse_price(form.price)
    image_url = require(form.image_url, "Please upload an image first.", "image_url")

    category = _blank_to_none(form.category)
    if category is not None:
        match = [c for c in CATEGORY_OPTIONS if c.lower() == category.lower()]
        if not match:
            raise FormValidationError(f"Unknown category: {category}", field="category")
        category = match[0]

    return {
        "title": title,
        "description": _blank_to_none(form.description),
        "price": price,
        "image_url": image_url,
        "category": category,
        "location": _blank_to_none(form.location),
    }


class PostItemForm:
    def __init__(self, resolver: IdentityResolver, listings: ListingService):
        self.resolver = resolver
        self.listings = listings

    def submit(self, form: PostItemIn) -> Listing:
        fields = validate_post(form)
        user_id = self.resolver.resolve()
        data = ListingCreate(**fields, user_id=user_id)
        listing = self.listings.create_listing(data)
        log.info("listing %s posted by user %s", listing.id, user_id)
        return listing
