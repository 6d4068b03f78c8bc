# client/hooddeals/services/listing_service.py

from typing import List, Optional

from pydantic import ValidationError

from hooddeals.core.cancellation import CancelToken
from hooddeals.core.errors import MalformedResponseError
from hooddeals.core.logger import get_logger
from hooddeals.models.listing_models import Listing, ListingCreate
from hooddeals.services.api_client import ApiClient

log = get_logger("listings")


class ListingService:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_listings(self, cancel_token: Optional[CancelToken] = None) -> List[Listing]:
        """
        Fetch every listing. The backend has no server-side filtering, so
        callers filter the full array locally.
        """
        raw = self.client.get("/api/listings", cancel_token=cancel_token)
        if raw is None:
            return []
        if isinstance(raw, dict):
            raw = raw.get("content", [])
        if not isinstance(raw, list):
            raise MalformedResponseError(f"Unexpected listings payload: {raw!r}")

        listings = []
        for item in raw:
            try:
                listings.append(Listing.model_validate(item))
            except ValidationError as e:
                log.warning("skipping malformed listing %r: %s", item, e)
        return listings

    def create_listing(self, data: ListingCreate) -> Listing:
        raw = self.client.post("/api/listings", json=data.model_dump(by_alias=True))
        try:
            return Listing.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected listing payload: {raw!r}") from e

    def delete_listing(self, listing_id: int) -> None:
        self.client.delete(f"/api/listings/{listing_id}")
        log.info("deleted listing %s", listing_id)
