"""
Subcategory API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from catalog_admin.catalog.client import CatalogClient
from catalog_admin.dependencies import get_catalog_client
from catalog_admin.schemas.category import (
    Category,
    ParentOption,
    SubcategoryCreate,
    SubcategoryList,
    SubcategoryResponse,
)
from catalog_admin.services.category_hierarchy import find_category, name_lookup, split_levels

router = APIRouter(prefix="/subcategories", tags=["subcategories"])


def _parent_for(categories: List[Category], parent_id) -> Category:
    parent = find_category(categories, parent_id)
    if not parent:
        raise HTTPException(status_code=404, detail="Parent category not found")
    if not parent.is_root:
        raise HTTPException(status_code=422, detail="Parent must be a top-level category")
    return parent


def _to_response(subcategory: Category, parent_id, parent_name: str) -> SubcategoryResponse:
    return SubcategoryResponse(
        id=subcategory.id,
        name=subcategory.name,
        parent_id=parent_id,
        parent_name=parent_name,
        comment=subcategory.comment,
    )


@router.get("", response_model=SubcategoryList)
def list_subcategories(client: CatalogClient = Depends(get_catalog_client)):
    """List every subcategory with its parent's name."""
    categories = client.list_categories()
    _, subcategories = split_levels(categories)
    names = name_lookup(categories)

    return SubcategoryList(
        items=[
            _to_response(sub, sub.parent_id, names.get(sub.parent_id, "Unknown"))
            for sub in subcategories
        ],
        total=len(subcategories)
    )


@router.get("/parent-options", response_model=List[ParentOption])
def list_parent_options(client: CatalogClient = Depends(get_catalog_client)):
    """Root categories a subcategory can be attached to."""
    roots, _ = split_levels(client.list_categories())
    return [ParentOption(value=root.id, label=root.name) for root in roots]


@router.post("", response_model=SubcategoryResponse, status_code=201)
def create_subcategory(
    subcategory: SubcategoryCreate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Create a subcategory under an existing root category."""
    categories = client.list_categories()
    parent = _parent_for(categories, subcategory.parent_id)

    created = client.create_category(
        name=subcategory.name,
        parent_id=parent.id,
        comment=subcategory.comment,
    )
    return _to_response(created, parent.id, parent.name)


@router.put("/{subcategory_id}", response_model=SubcategoryResponse)
def update_subcategory(
    subcategory_id: str,
    subcategory: SubcategoryCreate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Update a subcategory, possibly moving it to another root."""
    categories = client.list_categories()
    existing = find_category(categories, subcategory_id)
    if not existing or existing.is_root:
        raise HTTPException(status_code=404, detail="Subcategory not found")
    parent = _parent_for(categories, subcategory.parent_id)

    updated = client.update_category(
        existing.id,
        name=subcategory.name,
        parent_id=parent.id,
        comment=subcategory.comment,
    )
    return _to_response(updated, parent.id, parent.name)


@router.delete("/{subcategory_id}", status_code=204)
def delete_subcategory(
    subcategory_id: str,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Delete a subcategory."""
    existing = find_category(client.list_categories(), subcategory_id)
    if not existing or existing.is_root:
        raise HTTPException(status_code=404, detail="Subcategory not found")

    client.delete_category(existing.id)
    return None
