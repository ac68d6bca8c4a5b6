"""Tests for products API endpoints."""

import json

import pytest


def product_form(**overrides):
    data = {
        "name": "Velvet Sofa",
        "brand": "Wood Villa Furniture Factory",
        "original_price": "20000",
        "discount_percentage": "10",
        "discounted_price": "",
        "stock_status": "In Stock",
        "status": "active",
        "material": "Teak",
        "shipping_included": "true",
        "category_ids": ["1", "3"],
    }
    data.update(overrides)
    return data


def image(name="sofa.jpg"):
    return ("images", (name, b"\xff\xd8\xff fake jpeg", "image/jpeg"))


def multipart_fields(request):
    """Plain (non-file) fields of a multipart request sent to the fake API."""
    body = request.content.decode("latin-1")
    boundary = request.headers["Content-Type"].split("boundary=")[1]
    fields = {}
    for part in body.split(f"--{boundary}"):
        if 'name="' not in part or "filename=" in part:
            continue
        header, _, value = part.partition("\r\n\r\n")
        name = header.split('name="')[1].split('"')[0]
        fields.setdefault(name, []).append(value.rstrip("\r\n"))
    return fields


class TestProductsAPI:
    """Test product listing, detail and status endpoints."""

    def test_list_products_with_category_names(self, auth_client):
        response = auth_client.get("/api/v1/products")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2

        lazy_boy, chesterfield = data["items"]
        assert lazy_boy["parent_categories"] == ["Chairs"]
        assert lazy_boy["sub_categories"] == ["Recliners"]
        assert lazy_boy["original_price"] == "20000.00"
        # unknown category 999 is ignored
        assert chesterfield["parent_categories"] == ["Sofas"]
        assert chesterfield["sub_categories"] == []

    @pytest.mark.parametrize("status,expected", [
        ("active", ["Lazy Boy"]),
        ("inactive", ["Chesterfield"]),
        ("all", ["Lazy Boy", "Chesterfield"]),
    ])
    def test_filter_by_status(self, auth_client, status, expected):
        response = auth_client.get("/api/v1/products", params={"status": status})
        assert [p["name"] for p in response.json()["items"]] == expected

    def test_invalid_status_filter(self, auth_client):
        response = auth_client.get("/api/v1/products", params={"status": "archived"})
        assert response.status_code == 422

    def test_get_product_detail(self, auth_client):
        response = auth_client.get("/api/v1/products/10")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Lazy Boy"
        assert data["category_names"] == ["Recliners"]
        assert data["image_urls"] == ["/img/lazy-boy.jpg"]

    def test_get_missing_product(self, auth_client):
        response = auth_client.get("/api/v1/products/404")
        assert response.status_code == 404

    def test_toggle_status(self, auth_client, catalog_api):
        response = auth_client.post("/api/v1/products/10/status/toggle")
        assert response.status_code == 200
        assert response.json() == {"id": 10, "status": "inactive"}
        assert catalog_api.products[0]["status"] == "inactive"

        response = auth_client.post("/api/v1/products/10/status/toggle")
        assert response.json()["status"] == "active"

    def test_delete_product(self, auth_client, catalog_api):
        response = auth_client.delete("/api/v1/products/11")
        assert response.status_code == 204
        assert [p["id"] for p in catalog_api.products] == [10]

    def test_form_options(self, auth_client):
        response = auth_client.get("/api/v1/products/form-options")
        assert response.status_code == 200
        data = response.json()
        assert data["max_images"] == 5
        assert [o["value"] for o in data["stock_statuses"]] == ["In Stock", "Low Stock", "Out of Stock"]
        assert data["brands"][-1]["value"] == "custom"
        assert len(data["warranty_periods"]) == 10


class TestProductForms:
    """Test multipart product create and update."""

    def test_create_product(self, auth_client, catalog_api):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(),
            files=[image("a.jpg"), image("b.jpg")],
        )
        assert response.status_code == 201

        sent = catalog_api.calls("POST", "products")[0]
        fields = multipart_fields(sent)
        assert fields["categoryIds"] == ["1", "3"]
        assert fields["discountedPrice"] == ["18000.00"]
        assert fields["shippingIncluded"] == ["true"]
        assert fields["cashOnDelivery"] == ["false"]
        assert fields["material"] == ["Teak"]
        assert sent.content.count(b'name="images"') == 2

    def test_create_with_custom_brand(self, auth_client, catalog_api):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(brand="custom", custom_brand="Nilkamal"),
            files=[image()],
        )
        assert response.status_code == 201
        fields = multipart_fields(catalog_api.calls("POST", "products")[0])
        assert fields["brand"] == ["Nilkamal"]

    def test_custom_brand_needs_a_name(self, auth_client, catalog_api):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(brand="custom"),
            files=[image()],
        )
        assert response.status_code == 422
        assert catalog_api.calls("POST", "products") == []

    def test_create_requires_category(self, auth_client, catalog_api):
        data = product_form()
        del data["category_ids"]
        response = auth_client.post("/api/v1/products", data=data, files=[image()])
        assert response.status_code == 422
        assert response.json()["detail"] == "Please select at least one category"
        assert catalog_api.calls("POST", "products") == []

    def test_create_requires_image(self, auth_client):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(),
            files=[("unused", ("x.txt", b"", "text/plain"))],
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Please upload at least one image"

    def test_create_rejects_too_many_images(self, auth_client):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(),
            files=[image(f"{i}.jpg") for i in range(6)],
        )
        assert response.status_code == 422
        assert "Maximum 5 images" in response.json()["detail"]

    def test_create_rejects_bad_price(self, auth_client):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(original_price="-5"),
            files=[image()],
        )
        assert response.status_code == 422

    def test_out_of_range_discount_keeps_submitted_price(self, auth_client, catalog_api):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(discount_percentage="120", discounted_price="900"),
            files=[image()],
        )
        assert response.status_code == 201

        fields = multipart_fields(catalog_api.calls("POST", "products")[0])
        assert fields["discountedPrice"] == ["900"]
        assert fields["discountPercentage"] == ["120"]

    def test_create_rejects_negative_discount(self, auth_client):
        response = auth_client.post(
            "/api/v1/products",
            data=product_form(discount_percentage="-1"),
            files=[image()],
        )
        assert response.status_code == 422

    def test_update_keeps_existing_images(self, auth_client, catalog_api):
        response = auth_client.put(
            "/api/v1/products/10",
            data=product_form(
                discount_percentage="",
                existing_image_urls=["/img/lazy-boy.jpg"],
            ),
        )
        assert response.status_code == 200

        fields = multipart_fields(catalog_api.calls("PUT", "products/10")[0])
        assert json.loads(fields["existingImageUrls"][0]) == ["/img/lazy-boy.jpg"]
        assert fields["discountedPrice"] == ["20000.00"]

    def test_update_image_total_is_capped(self, auth_client):
        response = auth_client.put(
            "/api/v1/products/10",
            data=product_form(existing_image_urls=[f"/img/{i}.jpg" for i in range(4)]),
            files=[image("a.jpg"), image("b.jpg")],
        )
        assert response.status_code == 422
