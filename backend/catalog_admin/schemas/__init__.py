"""
Pydantic schemas package.
"""

from catalog_admin.schemas.category import (
    Category,
    CategoryNode,
    ResolvedNames,
    CategoryCreate,
    SubcategoryCreate,
    CategoryResponse,
    CategoryList,
    CategoryTreeItem,
    SubcategoryResponse,
    SubcategoryList,
    ParentOption,
    SelectionToggleRequest,
    SelectionToggleResponse,
)
from catalog_admin.schemas.product import (
    ProductStatus,
    StockStatus,
    Product,
    ProductListItem,
    ProductList,
    ProductDetail,
    ProductStatusResponse,
    ProductForm,
    ProductFormOptions,
)
from catalog_admin.schemas.user import (
    User,
    UserCreate,
    UserUpdate,
    UserList,
)
from catalog_admin.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SessionStatus,
)
from catalog_admin.schemas.dashboard import DashboardStats

__all__ = [
    "Category",
    "CategoryNode",
    "ResolvedNames",
    "CategoryCreate",
    "SubcategoryCreate",
    "CategoryResponse",
    "CategoryList",
    "CategoryTreeItem",
    "SubcategoryResponse",
    "SubcategoryList",
    "ParentOption",
    "SelectionToggleRequest",
    "SelectionToggleResponse",
    "ProductStatus",
    "StockStatus",
    "Product",
    "ProductListItem",
    "ProductList",
    "ProductDetail",
    "ProductStatusResponse",
    "ProductForm",
    "ProductFormOptions",
    "User",
    "UserCreate",
    "UserUpdate",
    "UserList",
    "LoginRequest",
    "LoginResponse",
    "SessionStatus",
    "DashboardStats",
]
