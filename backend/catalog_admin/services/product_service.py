"""
Product form handling: option lists, submission checks and the field
encoding the catalog API expects.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from catalog_admin.config import settings
from catalog_admin.schemas.category import CategoryNode
from catalog_admin.schemas.product import (
    Option,
    Product,
    ProductForm,
    ProductFormOptions,
    ProductListItem,
    ProductStatus,
    StockStatus,
)
from catalog_admin.services.category_hierarchy import resolve_names
from catalog_admin.services.pricing_service import calculate_discounted_price

CUSTOM_BRAND = "custom"

INSTALLATION_OPTIONS = [
    "Free installation included",
    "Paid installation available",
    "Installation not available",
]

WARRANTY_PERIODS = ["1 year"] + [f"{years} years" for years in range(2, 11)]

CARE_INSTRUCTIONS = [
    "Wipe with a clean and dry cloth regularly",
    "Avoid direct sunlight and heat exposure",
    "Avoid harsh chemicals and abrasive cleaners",
    "Use furniture protectors under heavy objects",
    "Avoid dragging furniture across floors",
    "Clean with manufacturer-recommended products only",
    "Professional cleaning recommended annually",
]

# Form field name -> catalog API field name for boolean flags
FLAG_FIELDS = {
    "price_includes_tax": "priceIncludesTax",
    "price_excludes_tax": "priceExcludesTax",
    "shipping_included": "shippingIncluded",
    "shipping_charges_apply": "shippingChargesApply",
    "installation_included": "installationIncluded",
    "installation_charges_apply": "installationChargesApply",
    "assembly_required": "assemblyRequired",
    "no_assembly_required": "noAssemblyRequired",
    "warranty_included": "warrantyIncluded",
    "warranty_not_included": "warrantyNotIncluded",
    "cash_on_delivery": "cashOnDelivery",
    "no_cash_on_delivery": "noCashOnDelivery",
    "is_modifiable": "isModifiable",
}

TEXT_FIELDS = {
    "note": "note",
    "material": "material",
    "color": "color",
    "seater_count": "seaterCount",
    "warranty_period": "warrantyPeriod",
    "delivery": "delivery",
    "installation": "installation",
    "product_care_instructions": "productCareInstructions",
    "return_and_cancellation_policy": "returnAndCancellationPolicy",
}


def _options(values: Sequence[str]) -> List[Option]:
    return [Option(value=v, label=v) for v in values]


def get_form_options() -> ProductFormOptions:
    return ProductFormOptions(
        stock_statuses=_options([s.value for s in StockStatus]),
        statuses=[
            Option(value=ProductStatus.active.value, label="Active"),
            Option(value=ProductStatus.inactive.value, label="Inactive"),
        ],
        brands=[
            Option(value=settings.default_brand, label=settings.default_brand),
            Option(value=CUSTOM_BRAND, label="Add custom Brand"),
        ],
        installations=_options(INSTALLATION_OPTIONS),
        warranty_periods=_options(WARRANTY_PERIODS),
        care_instructions=CARE_INSTRUCTIONS,
        default_brand=settings.default_brand,
        max_images=settings.max_product_images,
    )


def validate_submission(
    category_ids: Sequence[Any],
    new_image_count: int,
    existing_image_count: int = 0
) -> None:
    """Raise ValueError when the product form cannot be submitted."""
    if not category_ids:
        raise ValueError("Please select at least one category")

    total = new_image_count + existing_image_count
    if total == 0:
        raise ValueError("Please upload at least one image")
    if total > settings.max_product_images:
        raise ValueError(f"Maximum {settings.max_product_images} images allowed in total")


def resolve_brand(form: ProductForm) -> str:
    if form.brand == CUSTOM_BRAND:
        if not form.custom_brand or not form.custom_brand.strip():
            raise ValueError("Custom brand name is required")
        return form.custom_brand.strip()
    return form.brand


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_form_fields(
    form: ProductForm,
    category_ids: Sequence[Any],
    existing_image_urls: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """
    Encode a submitted product form as catalog API multipart fields.

    The discounted price is recalculated here rather than trusted from the
    form. Repeated values (categoryIds) stay lists.
    """
    discounted = calculate_discounted_price(form.original_price, form.discount_percentage)
    if discounted is None:
        discounted = form.discounted_price or 0

    fields: Dict[str, Any] = {
        "name": form.name,
        "brand": resolve_brand(form),
        "originalPrice": form.original_price,
        "discountedPrice": discounted,
        "discountPercentage": form.discount_percentage or 0,
        "stockStatus": form.stock_status.value,
        "status": form.status.value,
    }
    for field_name, api_name in TEXT_FIELDS.items():
        fields[api_name] = getattr(form, field_name) or ""
    for field_name, api_name in FLAG_FIELDS.items():
        fields[api_name] = _flag(getattr(form, field_name))

    fields["categoryIds"] = [str(cid) for cid in category_ids]
    if existing_image_urls is not None:
        fields["existingImageUrls"] = json.dumps(list(existing_image_urls))
    return fields


def filter_by_status(products: Sequence[Product], status: Optional[str]) -> List[Product]:
    """Products for a status tab; "all" or None keeps everything."""
    if status in (ProductStatus.active.value, ProductStatus.inactive.value):
        return [p for p in products if p.status == status]
    return list(products)


def toggled_status(status: str) -> ProductStatus:
    if status == ProductStatus.active.value:
        return ProductStatus.inactive
    return ProductStatus.active


def with_category_names(products: Sequence[Product], tree: Sequence[CategoryNode]) -> List[ProductListItem]:
    items = []
    for product in products:
        names = resolve_names(tree, product.category_ids)
        items.append(ProductListItem(
            **product.model_dump(),
            parent_categories=names.parent_names,
            sub_categories=names.sub_names,
        ))
    return items
