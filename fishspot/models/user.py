"""
user.py — Pydantic schemas for the identity endpoints.

UserCreate — what the client sends to register
UserOut    — what the API returns (never includes hashed_password)
Token      — JWT response from /auth/login and /auth/register

UserCreate fields are plain strings: display name, email and password are
checked by services/content_validator so the 422 carries the same message
the signup form shows.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

Role = Literal["user", "moderator", "admin"]


class UserCreate(BaseModel):
    """Payload for POST /auth/register."""
    email: str = ""
    password: str = ""
    display_name: str = ""


class UserOut(BaseModel):
    """Safe user representation — no secrets.

    `id` and `created_at` are what the moderation core consumes as the
    actor's identity and account age.
    """
    id: str
    email: str
    display_name: str
    role: Role = "user"
    is_banned: bool = False
    created_at: datetime


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut


class LoginRequest(BaseModel):
    email: str
    password: str
