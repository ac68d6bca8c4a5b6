"""
Category API endpoints (root categories).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from catalog_admin.catalog.client import CatalogClient
from catalog_admin.dependencies import get_catalog_client
from catalog_admin.schemas.category import (
    CategoryCreate,
    CategoryList,
    CategoryNode,
    CategoryResponse,
    CategoryTreeItem,
    SelectionToggleRequest,
    SelectionToggleResponse,
)
from catalog_admin.services.category_hierarchy import (
    count_children,
    find_category,
    index_children,
    resolve_names,
    split_levels,
    toggle_selection,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def serialize_tree(tree: List[CategoryNode]) -> List[CategoryTreeItem]:
    return [
        CategoryTreeItem(
            **node.category.model_dump(),
            children=serialize_tree(list(node.children)),
        )
        for node in tree
    ]


@router.get("", response_model=CategoryList)
def list_categories(client: CatalogClient = Depends(get_catalog_client)):
    """List root categories with their subcategory counts."""
    categories = client.list_categories()
    roots, _ = split_levels(categories)
    counts = index_children(categories)

    items = [
        CategoryResponse(
            id=root.id,
            name=root.name,
            comment=root.comment,
            image_url=root.image_url,
            subcategory_count=counts.get(root.id, 0),
        )
        for root in roots
    ]
    return CategoryList(items=items, total=len(items))


@router.get("/tree", response_model=List[CategoryTreeItem])
def get_category_tree(
    sort: Optional[str] = Query(None, pattern="^name$"),
    client: CatalogClient = Depends(get_catalog_client)
):
    """Two-level category tree."""
    tree = client.get_category_tree(sort_by_name=sort == "name")
    return serialize_tree(tree)


@router.post("/selection/toggle", response_model=SelectionToggleResponse)
def toggle_category_selection(
    request: SelectionToggleRequest,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Toggle one category in a product form's selection and resolve the names."""
    selected = toggle_selection(request.selected, request.category_id)
    names = resolve_names(client.get_category_tree(), selected)

    # caller order, newly added id last
    ordered = [cid for cid in dict.fromkeys(request.selected) if cid in selected]
    if request.category_id in selected and request.category_id not in ordered:
        ordered.append(request.category_id)

    return SelectionToggleResponse(
        selected=ordered,
        parent_names=names.parent_names,
        sub_names=names.sub_names,
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Create a new root category."""
    created = client.create_category(
        name=category.name,
        parent_id=None,
        comment=category.comment,
    )
    logger.info(f"Created category {created.id}")
    return CategoryResponse(**created.model_dump())


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category: CategoryCreate,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Update a root category."""
    categories = client.list_categories()
    existing = find_category(categories, category_id)
    if not existing or not existing.is_root:
        raise HTTPException(status_code=404, detail="Category not found")

    updated = client.update_category(
        existing.id,
        name=category.name,
        parent_id=None,
        comment=category.comment,
    )
    return CategoryResponse(
        **updated.model_dump(),
        subcategory_count=count_children(categories, existing.id),
    )


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    cascade: bool = Query(False, description="Also delete the subcategories"),
    client: CatalogClient = Depends(get_catalog_client)
):
    """
    Delete a root category.

    A category that still has subcategories is only deleted together with
    them, and only when cascade is set; otherwise nothing is deleted.
    """
    categories = client.list_categories()
    category = find_category(categories, category_id)
    if not category or not category.is_root:
        raise HTTPException(status_code=404, detail="Category not found")

    child_count = count_children(categories, category.id)
    if child_count and not cascade:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "This category has subcategories. Confirm deleting all of them as well.",
                "subcategory_count": child_count,
            },
        )

    client.delete_category(category.id, delete_children=child_count > 0)
    logger.info(f"Deleted category {category.id} ({child_count} subcategories)")
    return None
