"""
Session Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import Optional

from catalog_admin.schemas.user import User


class LoginRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    user: User


class SessionStatus(BaseModel):
    authenticated: bool
    phone: Optional[str] = None
