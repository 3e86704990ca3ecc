# eventa/models/user.py
from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from eventa.models.base import ApiModel


class Token(ApiModel):
    token: str


class TokenData(ApiModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[float] = None


class SessionUser(ApiModel):
    token: str
    email: Optional[str] = None
    role: str


class LoginRequest(ApiModel):
    email: str
    password: str


class RegisterRequest(ApiModel):
    email: str
    code: str
    full_name: str
    password: str = Field(min_length=6)
    confirm_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("Password confirmation does not match")
        return self


class ResetPasswordRequest(ApiModel):
    email: str
    code: str
    new_password: str = Field(min_length=6)
    confirm_new_password: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_new_password:
            raise ValueError("Password confirmation does not match")
        return self


class UserProfile(ApiModel):
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    avatar_url: Optional[str] = None


class ProfileUpdate(ApiModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
