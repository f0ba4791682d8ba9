"""User domain model. Users are referenced by id and not managed here."""

from typing import Optional

from pydantic import EmailStr

from .base import CamelModel
from .enums import UserRole


class User(CamelModel):
    id: str
    name: str
    email: EmailStr
    avatar: Optional[str] = None
    role: UserRole = UserRole.MEMBER
