"""
Product API endpoints.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from typing import List, Optional

from catalog_admin.catalog.client import CatalogClient, UploadFiles
from catalog_admin.config import settings
from catalog_admin.dependencies import get_catalog_client
from catalog_admin.schemas.product import (
    Product,
    ProductDetail,
    ProductForm,
    ProductFormOptions,
    ProductList,
    ProductStatusResponse,
)
from catalog_admin.services.category_hierarchy import category_names
from catalog_admin.services.product_service import (
    build_form_fields,
    filter_by_status,
    get_form_options,
    toggled_status,
    validate_submission,
    with_category_names,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def product_form(
    name: str = Form(...),
    brand: str = Form(settings.default_brand),
    custom_brand: Optional[str] = Form(None),
    original_price: str = Form(...),
    discount_percentage: Optional[str] = Form(None),
    discounted_price: Optional[str] = Form(None),
    stock_status: str = Form("In Stock"),
    status: str = Form("active"),
    note: Optional[str] = Form(None),
    material: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    seater_count: Optional[str] = Form(None),
    warranty_period: Optional[str] = Form(None),
    delivery: Optional[str] = Form(None),
    installation: Optional[str] = Form(None),
    product_care_instructions: Optional[str] = Form(None),
    return_and_cancellation_policy: Optional[str] = Form(None),
    price_includes_tax: bool = Form(False),
    price_excludes_tax: bool = Form(False),
    shipping_included: bool = Form(False),
    shipping_charges_apply: bool = Form(False),
    installation_included: bool = Form(False),
    installation_charges_apply: bool = Form(False),
    assembly_required: bool = Form(False),
    no_assembly_required: bool = Form(False),
    warranty_included: bool = Form(False),
    warranty_not_included: bool = Form(False),
    cash_on_delivery: bool = Form(False),
    no_cash_on_delivery: bool = Form(False),
    is_modifiable: bool = Form(False),
) -> ProductForm:
    """Collect the multipart product form into a validated ProductForm."""
    values = dict(locals())
    for key in ("original_price", "discount_percentage", "discounted_price", "custom_brand"):
        values[key] = _blank_to_none(values[key])
    try:
        return ProductForm(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


async def _read_uploads(images: Optional[List[UploadFile]]) -> UploadFiles:
    files = []
    for image in images or []:
        if not image.filename:
            continue
        content = await image.read()
        files.append(("images", (image.filename, content, image.content_type or "application/octet-stream")))
    return files


@router.get("", response_model=ProductList)
def list_products(
    status: Optional[str] = Query(None, pattern="^(all|active|inactive)$"),
    client: CatalogClient = Depends(get_catalog_client)
):
    """List products with their category and subcategory names."""
    products = filter_by_status(client.list_products(), status)
    tree = client.get_category_tree()
    items = with_category_names(products, tree)
    return ProductList(items=items, total=len(items))


@router.get("/form-options", response_model=ProductFormOptions)
def product_form_options():
    """Choice lists for the add/edit product form."""
    return get_form_options()


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(
    product_id: str,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Get a single product with the names of its categories."""
    product = client.get_product(product_id)
    tree = client.get_category_tree()
    return ProductDetail(
        **product.model_dump(),
        category_names=category_names(tree, product.category_ids),
    )


@router.post("", response_model=Product, status_code=201)
async def create_product(
    form: ProductForm = Depends(product_form),
    category_ids: Optional[List[str]] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    client: CatalogClient = Depends(get_catalog_client)
):
    """Create a product from the multipart product form."""
    files = await _read_uploads(images)
    category_ids = category_ids or []
    try:
        validate_submission(category_ids, len(files))
        fields = build_form_fields(form, category_ids)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    product = await run_in_threadpool(client.create_product, fields, files)
    logger.info(f"Created product {product.id} with {len(files)} images")
    return product


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    form: ProductForm = Depends(product_form),
    category_ids: Optional[List[str]] = Form(None),
    existing_image_urls: Optional[List[str]] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
    client: CatalogClient = Depends(get_catalog_client)
):
    """Update a product; kept images are listed in existing_image_urls."""
    files = await _read_uploads(images)
    category_ids = category_ids or []
    existing_image_urls = [url for url in existing_image_urls or [] if url]
    try:
        validate_submission(category_ids, len(files), len(existing_image_urls))
        fields = build_form_fields(form, category_ids, existing_image_urls)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return await run_in_threadpool(client.update_product, product_id, fields, files)


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Delete a product."""
    client.delete_product(product_id)
    return None


@router.post("/{product_id}/status/toggle", response_model=ProductStatusResponse)
def toggle_product_status(
    product_id: str,
    client: CatalogClient = Depends(get_catalog_client)
):
    """Flip a product between active and inactive."""
    product = client.get_product(product_id)
    new_status = toggled_status(product.status)
    client.set_product_status(product.id, new_status.value)
    logger.info(f"Product {product.id} marked as {new_status.value}")
    return ProductStatusResponse(id=product.id, status=new_status)
