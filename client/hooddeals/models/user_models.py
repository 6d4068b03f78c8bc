# client/hooddeals/models/user_models.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


# -------------------------
# Backend user
# -------------------------
class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


# -------------------------
# Profile blob kept on the device
# -------------------------
class StoredUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.email or self.name or self.picture)


# -------------------------
# Auth inputs
# -------------------------
class LoginIn(BaseModel):
    email: str = ""
    password: str = ""


class SignUpIn(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""


class GoogleProfileIn(BaseModel):
    """Profile returned by the Google userinfo endpoint after OAuth."""
    id: str
    email: EmailStr
    name: Optional[str] = None
    picture: Optional[str] = None


class GithubCodeIn(BaseModel):
    code: str
    platform: str = "web"    # web | mobile


# -------------------------
# Auth response
# -------------------------
class AuthResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str
    user: StoredUser


class SessionOut(BaseModel):
    signed_in: bool
    user: Optional[StoredUser] = None
    token_expired: bool = False
