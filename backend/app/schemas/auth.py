from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from app.core import constants


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=constants.User.USER_NAME_MAX_LENGTH)
    password: str = Field(
        min_length=constants.User.PASSWORD_MIN_LENGTH, max_length=constants.User.PASSWORD_MAX_LENGTH
    )
    email: EmailStr
    fullName: str = Field(min_length=1, max_length=constants.User.FULL_NAME_MAX_LENGTH)


class UserMe(BaseModel):
    id: str
    username: str | None
    email: str | None
    fullName: str
