"""
Main API router.
"""

from fastapi import APIRouter
from catalog_admin.api import auth, categories, dashboard, products, subcategories, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(subcategories.router)
api_router.include_router(products.router)
api_router.include_router(users.router)
api_router.include_router(dashboard.router)
