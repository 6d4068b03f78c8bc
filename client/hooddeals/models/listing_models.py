# client/hooddeals/models/listing_models.py

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from hooddeals.models.user_models import StoredUser


class Listing(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    user_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId")
    )
    title: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("imageUrl", "image_url")
    )
    category: Optional[str] = None
    location: Optional[str] = None
    user_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("userName", "user_name")
    )


class ListingCreate(BaseModel):
    """Body of POST /api/listings. Serialize with by_alias=True."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    price: float
    image_url: str = Field(serialization_alias="imageUrl")
    category: Optional[str] = None
    location: Optional[str] = None
    user_id: int


# --------------------------
# Screen inputs / outputs
# --------------------------
class PostItemIn(BaseModel):
    title: str = ""
    price: str = ""
    description: str = ""
    category: str = ""
    location: str = ""
    image_url: str = ""


class ListingFiltersOut(BaseModel):
    categories: List[str]
    price_ranges: List[str]


class HomeFeedOut(BaseModel):
    total: int
    category: str
    price_range: str
    query: str
    items: List[Listing]


class ProfileOut(BaseModel):
    user: Optional[StoredUser] = None
    user_id: Optional[int] = None
    listings: List[Listing] = []
    state: str
    error: Optional[str] = None
