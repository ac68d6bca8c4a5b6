"""
User API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from catalog_admin.catalog.client import CatalogClient
from catalog_admin.dependencies import get_catalog_client
from catalog_admin.schemas.user import User, UserCreate, UserList, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserList)
def list_users(client: CatalogClient = Depends(get_catalog_client)):
    """List user accounts."""
    users = client.list_users()
    return UserList(items=users, total=len(users))


@router.post("", response_model=User, status_code=201)
def create_user(
    user: UserCreate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Register a new user account."""
    created = client.register_user(name=user.name, phone=user.phone, password=user.password)
    if created is None:
        raise HTTPException(status_code=502, detail="Catalog API did not return the new user")
    return created


@router.put("/{user_id}", response_model=User)
def update_user(
    user_id: str,
    user: UserUpdate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Update a user's name and phone."""
    updated = client.update_user(user_id, name=user.name, phone=user.phone)
    if updated is None:
        return User(id=user_id, name=user.name, phone=user.phone)
    return updated


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: str,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Delete a user account."""
    client.delete_user(user_id)
    return None
