# client/hooddeals/screens/profile.py

from typing import List, Optional

from hooddeals.core.errors import HoodDealsError
from hooddeals.core.logger import get_logger
from hooddeals.core.session import SessionManager
from hooddeals.models.listing_models import Listing, ProfileOut
from hooddeals.models.user_models import StoredUser
from hooddeals.screens.identity import IdentityResolver
from hooddeals.screens.state import ScreenState
from hooddeals.services.listing_service import ListingService

log = get_logger("profile")


class ProfileViewModel(ScreenState):
    def __init__(
        self,
        sessions: SessionManager,
        resolver: IdentityResolver,
        listings: ListingService,
    ):
        super().__init__()
        self.sessions = sessions
        self.resolver = resolver
        self.service = listings
        self.user: Optional[StoredUser] = None
        self.user_id: Optional[int] = None
        self.listings: List[Listing] = []

    def load(self) -> None:
        self._begin()
        self.resolver.reset()
        self.user = self.resolver.stored_user()
        try:
            self._fetch_own()
        except HoodDealsError as e:
            log.error("Failed to load profile: %s", e)
            self._fail(e)
            return
        self._succeed()

    def _fetch_own(self) -> None:
        self.user_id = self.resolver.resolve()
        items = self.service.list_listings()
        self.listings = [item for item in items if item.user_id == self.user_id]

    def delete_listing(self, listing_id: int) -> None:
        """Only the user's own listings can be deleted from here."""
        if self.user_id is None:
            self._fetch_own()
        if not any(item.id == listing_id for item in self.listings):
            raise HoodDealsError(f"Listing {listing_id} is not one of your listings")
        self.service.delete_listing(listing_id)
        self.load()

    def logout(self) -> None:
        self.sessions.clear()
        self.resolver.reset()
        self.user = None
        self.user_id = None
        self.listings = []
        log.info("signed out")

    def snapshot(self) -> ProfileOut:
        return ProfileOut(
            user=self.user,
            user_id=self.user_id,
            listings=self.listings,
            state=self.state.value,
            error=self.error,
        )
