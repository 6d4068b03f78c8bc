# client/hooddeals/api/routes_profile.py

from fastapi import APIRouter, HTTPException

from hooddeals.api import common
from hooddeals.models.listing_models import ProfileOut
from hooddeals.screens.profile import ProfileViewModel

router = APIRouter(prefix="/profile", tags=["profile"])


# --------------------------------------------------------
# GET /profile  -> stored user + own listings
# --------------------------------------------------------
@router.get("", response_model=ProfileOut)
def get_profile():
    profile = ProfileViewModel(common.sessions, common.new_resolver(), common.listing_service)
    profile.load()

    if profile.user is None:
        raise HTTPException(status_code=401, detail="Not signed in")

    return profile.snapshot()
