"""
Dashboard API endpoints.
"""

import logging

from fastapi import APIRouter, Depends

from catalog_admin.catalog.client import CatalogAPIError, CatalogAuthError, CatalogClient
from catalog_admin.dependencies import get_catalog_client
from catalog_admin.schemas.dashboard import DashboardStats
from catalog_admin.services.category_hierarchy import split_levels

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _listing_or_empty(fetch, label: str) -> list:
    """A failed listing counts as empty so one outage does not blank the dashboard."""
    try:
        return fetch()
    except CatalogAuthError:
        raise
    except CatalogAPIError as e:
        logger.warning(f"Dashboard could not load {label}: {e.message}")
        return []


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(client: CatalogClient = Depends(get_catalog_client)):
    """Counts of root categories, subcategories, products and users."""
    categories = _listing_or_empty(client.list_categories, "categories")
    products = _listing_or_empty(client.list_products, "products")
    users = _listing_or_empty(client.list_users, "users")

    roots, subcategories = split_levels(categories)
    return DashboardStats(
        categories=len(roots),
        subcategories=len(subcategories),
        products=len(products),
        users=len(users),
    )
