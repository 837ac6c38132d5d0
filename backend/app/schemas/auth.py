# app/schemas/auth.py
"""
Pydantic schemas for account endpoints.
Request bodies are nested under "user"; responses are wrapped by the renderer.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class RegistrationIn(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class RegistrationRequest(BaseModel):
    user: RegistrationIn


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(max_length=PASSWORD_MAX_LENGTH)


class LoginRequest(BaseModel):
    user: LoginIn


class AccountUpdateIn(BaseModel):
    """
    All fields optional: an absent field keeps the stored value.
    bio and image belong to the Profile, the rest to the Account.
    """
    username: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    bio: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=1024)


class AccountUpdateRequest(BaseModel):
    user: AccountUpdateIn = Field(default_factory=AccountUpdateIn)

