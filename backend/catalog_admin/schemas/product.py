"""
Product Pydantic schemas.
"""

from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional

from catalog_admin.schemas.category import CatalogModel, RecordId


class ProductStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class StockStatus(str, Enum):
    in_stock = "In Stock"
    low_stock = "Low Stock"
    out_of_stock = "Out of Stock"


class Product(CatalogModel):
    """A product record as delivered by the catalog API."""
    id: RecordId
    name: str
    brand: Optional[str] = None
    original_price: Optional[Decimal] = None
    discounted_price: Optional[Decimal] = None
    discount_percentage: Optional[Decimal] = None
    stock_status: Optional[str] = None
    status: str = ProductStatus.active.value
    note: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    seater_count: Optional[str] = None
    warranty_period: Optional[str] = None
    delivery: Optional[str] = None
    installation: Optional[str] = None
    product_care_instructions: Optional[str] = None
    return_and_cancellation_policy: Optional[str] = None
    price_includes_tax: bool = False
    price_excludes_tax: bool = False
    shipping_included: bool = False
    shipping_charges_apply: bool = False
    installation_included: bool = False
    installation_charges_apply: bool = False
    assembly_required: bool = False
    no_assembly_required: bool = False
    warranty_included: bool = False
    warranty_not_included: bool = False
    cash_on_delivery: bool = False
    no_cash_on_delivery: bool = False
    is_modifiable: bool = False
    category_ids: List[RecordId] = []
    image_urls: List[str] = []
    created_at: Optional[str] = None


class ProductListItem(Product):
    """Product row with resolved category names."""
    parent_categories: List[str] = []
    sub_categories: List[str] = []


class ProductList(BaseModel):
    items: List[ProductListItem]
    total: int


class ProductDetail(Product):
    """Single product with the names of all its categories."""
    category_names: List[str] = []


class ProductStatusResponse(BaseModel):
    id: RecordId
    status: ProductStatus


class Option(BaseModel):
    value: str
    label: str


class ProductFormOptions(BaseModel):
    """Choice lists offered by the product form."""
    stock_statuses: List[Option]
    statuses: List[Option]
    brands: List[Option]
    installations: List[Option]
    warranty_periods: List[Option]
    care_instructions: List[str]
    default_brand: str
    max_images: int = Field(..., ge=1)


class ProductForm(BaseModel):
    """Fields of the add/edit product form (everything except categories and images)."""
    name: str = Field(..., min_length=1, max_length=200)
    brand: str = Field(..., min_length=1)
    custom_brand: Optional[str] = None
    original_price: Decimal = Field(..., ge=0)
    discount_percentage: Optional[Decimal] = Field(None, ge=0)
    discounted_price: Optional[Decimal] = Field(None, ge=0)
    stock_status: StockStatus = StockStatus.in_stock
    status: ProductStatus = ProductStatus.active
    note: Optional[str] = None
    material: Optional[str] = None
    color: Optional[str] = None
    seater_count: Optional[str] = None
    warranty_period: Optional[str] = None
    delivery: Optional[str] = None
    installation: Optional[str] = None
    product_care_instructions: Optional[str] = None
    return_and_cancellation_policy: Optional[str] = None
    price_includes_tax: bool = False
    price_excludes_tax: bool = False
    shipping_included: bool = False
    shipping_charges_apply: bool = False
    installation_included: bool = False
    installation_charges_apply: bool = False
    assembly_required: bool = False
    no_assembly_required: bool = False
    warranty_included: bool = False
    warranty_not_included: bool = False
    cash_on_delivery: bool = False
    no_cash_on_delivery: bool = False
    is_modifiable: bool = False
