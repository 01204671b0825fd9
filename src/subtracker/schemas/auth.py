"""Pydantic schemas for registration and login.

Learn: Request schemas only check SHAPE (strings, no unknown keys).
Business rules — trimming, lowercasing, password length — live in
AuthService so they apply no matter who calls it.
"""

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""

    model_config = {"extra": "forbid"}


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""

    model_config = {"extra": "forbid"}


class UserRead(BaseModel):
    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    user: UserRead

    model_config = {"from_attributes": True}
