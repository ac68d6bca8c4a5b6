"""
Category Pydantic schemas.

The catalog API speaks camelCase (``parentId``, ``imageUrl``); the
record schemas accept either spelling and serialize with snake_case names.
"""

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Union

RecordId = Union[int, str]


class CatalogModel(BaseModel):
    """Base for models that mirror catalog API records."""
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
    )


class Category(CatalogModel):
    """A category record as delivered by the catalog API."""
    model_config = ConfigDict(frozen=True)

    id: RecordId
    name: str
    parent_id: Optional[RecordId] = None
    comment: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class CategoryNode(BaseModel):
    """Materialized two-level view: a category and its direct children."""
    model_config = ConfigDict(frozen=True)

    category: Category
    children: tuple["CategoryNode", ...] = ()


CategoryNode.model_rebuild()


class ResolvedNames(BaseModel):
    """Display names resolved from a set of category ids."""
    parent_names: List[str] = []
    sub_names: List[str] = []


class CategoryCreate(BaseModel):
    """Schema for creating or updating a root category."""
    name: str = Field(..., min_length=1, max_length=100)
    comment: Optional[str] = None


class SubcategoryCreate(CategoryCreate):
    """Schema for creating or updating a subcategory."""
    parent_id: RecordId


class CategoryResponse(CatalogModel):
    """Root category row on the categories page."""
    id: RecordId
    name: str
    comment: Optional[str] = None
    image_url: Optional[str] = None
    subcategory_count: int = 0


class CategoryList(BaseModel):
    """Schema for listing root categories."""
    items: List[CategoryResponse]
    total: int


class CategoryTreeItem(BaseModel):
    """Serialized tree node."""
    id: RecordId
    name: str
    parent_id: Optional[RecordId] = None
    comment: Optional[str] = None
    image_url: Optional[str] = None
    children: List["CategoryTreeItem"] = []


CategoryTreeItem.model_rebuild()


class SubcategoryResponse(BaseModel):
    """Subcategory row with its parent's display name."""
    id: RecordId
    name: str
    parent_id: RecordId
    parent_name: str
    comment: Optional[str] = None


class SubcategoryList(BaseModel):
    items: List[SubcategoryResponse]
    total: int


class ParentOption(BaseModel):
    value: RecordId
    label: str


class SelectionToggleRequest(BaseModel):
    """Current selection of a product form plus the id that was clicked."""
    selected: List[RecordId] = []
    category_id: RecordId


class SelectionToggleResponse(BaseModel):
    selected: List[RecordId]
    parent_names: List[str]
    sub_names: List[str]
