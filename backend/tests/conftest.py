"""Shared test fixtures."""

import json

import pytest
import httpx
from fastapi.testclient import TestClient

from catalog_admin.catalog.client import encode_basic_token
from catalog_admin.config import settings
from catalog_admin.dependencies import get_catalog_transport
from catalog_admin.main import app

ADMIN_PHONE = "9876543210"
ADMIN_PASSWORD = "secret"


class FakeCatalogAPI:
    """In-memory stand-in for the catalog REST API, served through httpx.MockTransport."""

    def __init__(self):
        self.token = encode_basic_token(ADMIN_PHONE, ADMIN_PASSWORD)
        self.categories = [
            {"id": 1, "name": "Sofas", "parentId": None, "comment": "Living room", "imageUrl": "/img/sofas.jpg"},
            {"id": 2, "name": "Chairs", "parentId": None, "comment": None, "imageUrl": None},
            {"id": 3, "name": "Recliners", "parentId": 2, "comment": None},
            {"id": 4, "name": "Dining Chairs", "parentId": 2, "comment": "Wooden"},
        ]
        self.products = [
            {
                "id": 10,
                "name": "Lazy Boy",
                "brand": "Wood Villa Furniture Factory",
                "originalPrice": "20000.00",
                "discountedPrice": "18000.00",
                "discountPercentage": "10",
                "stockStatus": "In Stock",
                "status": "active",
                "categoryIds": [3],
                "imageUrls": ["/img/lazy-boy.jpg"],
            },
            {
                "id": 11,
                "name": "Chesterfield",
                "brand": "Wood Villa Furniture Factory",
                "originalPrice": "55000.00",
                "discountedPrice": "55000.00",
                "discountPercentage": "0",
                "stockStatus": "Low Stock",
                "status": "inactive",
                "categoryIds": [1, 999],
                "imageUrls": [],
            },
        ]
        self.users = [
            {"id": 100, "name": "Admin", "phone": ADMIN_PHONE, "createdAt": "2024-01-15T10:00:00Z"},
        ]
        self.failures = {}
        self.requests = []
        self._next_id = 1000

    def fail(self, method: str, path: str, status_code: int = 500, error: str = "Internal error"):
        self.failures[(method, path)] = (status_code, error)

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    @staticmethod
    def _find(records, record_id):
        for record in records:
            if str(record["id"]) == str(record_id):
                return record
        return None

    def _hierarchy(self):
        roots = [c for c in self.categories if c.get("parentId") is None]
        return [
            {**root, "children": [c for c in self.categories if c.get("parentId") == root["id"]]}
            for root in roots
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.method
        path = request.url.path.removeprefix("/api/")
        parts = path.split("/")

        if (method, path) in self.failures:
            status_code, error = self.failures[(method, path)]
            return httpx.Response(status_code, json={"error": error})

        if request.headers.get("Authorization") != f"Basic {self.token}":
            return httpx.Response(401, json={"error": "Invalid phone or password"})

        if parts[0] == "categories":
            return self._categories(method, parts, request)
        if parts[0] == "products":
            return self._products(method, parts, request)
        if parts[0] == "users":
            return self._users(method, parts, request)
        return httpx.Response(404, json={"error": "Not found"})

    def _categories(self, method, parts, request):
        if parts == ["categories", "tree", "hierarchy"] and method == "GET":
            return httpx.Response(200, json=self._hierarchy())
        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=self.categories)
            if method == "POST":
                record = {"id": self._new_id(), **json.loads(request.content)}
                self.categories.append(record)
                return httpx.Response(201, json=record)

        record = self._find(self.categories, parts[1])
        if record is None:
            return httpx.Response(404, json={"error": "Category not found"})
        if method == "PUT":
            record.update(json.loads(request.content))
            return httpx.Response(200, json=record)
        if method == "DELETE":
            self.categories.remove(record)
            if request.url.params.get("deleteChildren") == "true":
                self.categories = [c for c in self.categories if c.get("parentId") != record["id"]]
            return httpx.Response(204)
        return httpx.Response(405)

    def _products(self, method, parts, request):
        if len(parts) == 1:
            if method == "GET":
                return httpx.Response(200, json=self.products)
            if method == "POST":
                record = {"id": self._new_id(), "name": "created", "status": "active"}
                self.products.append(record)
                return httpx.Response(201, json={"message": "Product created", "product": record})

        record = self._find(self.products, parts[1])
        if record is None:
            return httpx.Response(404, json={"error": "Product not found"})
        if len(parts) == 3 and parts[2] == "status" and method == "PATCH":
            record["status"] = json.loads(request.content)["status"]
            return httpx.Response(200, json=record)
        if method == "GET":
            return httpx.Response(200, json=record)
        if method == "PUT":
            return httpx.Response(200, json=record)
        if method == "DELETE":
            self.products.remove(record)
            return httpx.Response(204)
        return httpx.Response(405)

    def _users(self, method, parts, request):
        if parts == ["users", "login"] and method == "POST":
            user = next(u for u in self.users if u["phone"] == ADMIN_PHONE)
            return httpx.Response(200, json={"message": "Login successful", "user": user})
        if parts == ["users", "register"] and method == "POST":
            payload = json.loads(request.content)
            record = {"id": self._new_id(), "name": payload["name"], "phone": payload["phone"]}
            self.users.append(record)
            return httpx.Response(201, json={"user": record})
        if len(parts) == 1 and method == "GET":
            return httpx.Response(200, json=self.users)

        record = self._find(self.users, parts[1])
        if record is None:
            return httpx.Response(404, json={"error": "User not found"})
        if method == "PUT":
            record.update(json.loads(request.content))
            return httpx.Response(200, json=record)
        if method == "DELETE":
            self.users.remove(record)
            return httpx.Response(204)
        return httpx.Response(405)

    def calls(self, method: str, path: str):
        """Requests made to one endpoint."""
        return [
            r for r in self.requests
            if r.method == method and r.url.path.removeprefix("/api/") == path
        ]


@pytest.fixture(autouse=True)
def catalog_settings(monkeypatch):
    """Point the client at the fake API host, with no retry waits."""
    monkeypatch.setattr(settings, "catalog_api_base_url", "http://catalog.test/api")
    monkeypatch.setattr(settings, "catalog_api_max_attempts", 1)
    monkeypatch.setattr(settings, "category_tree_source", "client")


@pytest.fixture
def catalog_api():
    """Fresh fake catalog API for each test."""
    return FakeCatalogAPI()


@pytest.fixture
def client(catalog_api):
    """Test client whose outbound catalog calls hit the fake API."""
    app.dependency_overrides[get_catalog_transport] = lambda: httpx.MockTransport(catalog_api)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_client(client, catalog_api):
    """Test client sending the admin's Basic credentials."""
    client.headers["Authorization"] = f"Basic {catalog_api.token}"
    return client
