"""
Dashboard schemas.
"""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    categories: int
    subcategories: int
    products: int
    users: int
