"""
User Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from catalog_admin.schemas.category import CatalogModel, RecordId


class User(CatalogModel):
    """A user account as delivered by the catalog API."""
    id: RecordId
    name: str
    phone: str
    created_at: Optional[str] = None


class UserCreate(BaseModel):
    """Schema for registering a user."""
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Schema for updating a user."""
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)


class UserList(BaseModel):
    items: List[User]
    total: int
