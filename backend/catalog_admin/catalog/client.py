import base64
import binascii
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from catalog_admin.config import settings
from catalog_admin.schemas.category import Category, CategoryNode
from catalog_admin.schemas.product import Product
from catalog_admin.schemas.user import User
from catalog_admin.services.category_hierarchy import (
    build_tree,
    parse_categories,
    sort_tree,
    tree_from_payload,
)

logger = logging.getLogger(__name__)

# (field name, (filename, content, content type))
UploadFiles = List[Tuple[str, Tuple[str, bytes, str]]]
FormFields = Dict[str, Any]


class CatalogAPIError(Exception):
    """Non-2xx answer or transport failure from the catalog API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class CatalogAuthError(CatalogAPIError):
    """The catalog API rejected the credentials."""


def encode_basic_token(phone: str, password: str) -> str:
    return base64.b64encode(f"{phone}:{password}".encode()).decode()


def decode_basic_token(token: str) -> Optional[Tuple[str, str]]:
    """Return (phone, password) for a well-formed token, else None."""
    try:
        decoded = base64.b64decode(token, validate=True).decode()
    except (binascii.Error, UnicodeDecodeError):
        return None
    phone, sep, password = decoded.partition(":")
    if not sep or not phone:
        return None
    return phone, password


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, (httpx.ConnectError, httpx.TimeoutException))


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason_phrase


class CatalogClient:
    """Synchronous client for the catalog REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        max_attempts: Optional[int] = None,
        retry_wait=None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Basic {token}"

        self.base_url = (base_url or settings.catalog_api_base_url).rstrip("/") + "/"
        self.max_attempts = max_attempts or settings.catalog_api_max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=0.5, min=0.5, max=5)
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=settings.catalog_api_timeout,
            transport=transport,
        )

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = self._http.request(method, path, **kwargs)
        response.raise_for_status()
        return response

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            if method == "GET":
                retrying = Retrying(
                    stop=stop_after_attempt(self.max_attempts),
                    wait=self.retry_wait,
                    retry=retry_if_exception(_is_retryable),
                    before_sleep=before_sleep_log(logger, logging.WARNING),
                    reraise=True,
                )
                response = retrying(self._send, method, path, **kwargs)
            else:
                response = self._send(method, path, **kwargs)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            logger.error(f"Catalog API {method} {path} failed with {status}: {message}")
            if status == 401:
                raise CatalogAuthError(status, message) from e
            raise CatalogAPIError(status, message) from e
        except httpx.HTTPError as e:
            logger.error(f"Catalog API {method} {path} unreachable: {e}")
            raise CatalogAPIError(502, f"Catalog API unreachable: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # Categories

    def list_categories(self) -> List[Category]:
        return parse_categories(self._request("GET", "categories") or [])

    def get_category_hierarchy(self) -> List[Dict[str, Any]]:
        return self._request("GET", "categories/tree/hierarchy") or []

    def get_category_tree(self, source: Optional[str] = None, sort_by_name: bool = False) -> List[CategoryNode]:
        """
        Two-level category tree, built locally from the flat list or taken
        from the server-side hierarchy endpoint.
        """
        source = source or settings.category_tree_source
        if source == "server":
            tree = tree_from_payload(self.get_category_hierarchy())
            return sort_tree(tree) if sort_by_name else tree
        return build_tree(self.list_categories(), sort_by_name=sort_by_name)

    def create_category(self, name: str, parent_id=None, comment: Optional[str] = None) -> Category:
        payload = {"name": name, "comment": comment or None, "parentId": parent_id}
        data = self._request("POST", "categories", json=payload)
        return Category.model_validate(_record(data, "category"))

    def update_category(self, category_id, name: str, parent_id=None, comment: Optional[str] = None) -> Category:
        payload = {"name": name, "comment": comment or None, "parentId": parent_id}
        data = self._request("PUT", f"categories/{category_id}", json=payload)
        return Category.model_validate(_record(data, "category"))

    def delete_category(self, category_id, delete_children: bool = False) -> None:
        params = {"deleteChildren": "true"} if delete_children else None
        self._request("DELETE", f"categories/{category_id}", params=params)

    # Products

    def list_products(self) -> List[Product]:
        return _parse_records(Product, self._request("GET", "products"))

    def get_product(self, product_id) -> Product:
        return Product.model_validate(_record(self._request("GET", f"products/{product_id}"), "product"))

    def create_product(self, fields: FormFields, files: UploadFiles) -> Product:
        data = self._request("POST", "products", files=_multipart(fields, files))
        return Product.model_validate(_record(data, "product"))

    def update_product(self, product_id, fields: FormFields, files: UploadFiles) -> Product:
        data = self._request("PUT", f"products/{product_id}", files=_multipart(fields, files))
        return Product.model_validate(_record(data, "product"))

    def delete_product(self, product_id) -> None:
        self._request("DELETE", f"products/{product_id}")

    def set_product_status(self, product_id, status: str) -> None:
        self._request("PATCH", f"products/{product_id}/status", json={"status": status})

    # Users

    def list_users(self) -> List[User]:
        return _parse_records(User, self._request("GET", "users"))

    def register_user(self, name: str, phone: str, password: str) -> Optional[User]:
        data = self._request("POST", "users/register", json={
            "name": name,
            "phone": phone,
            "password": password,
        })
        return _user_from(data)

    def update_user(self, user_id, name: str, phone: str) -> Optional[User]:
        data = self._request("PUT", f"users/{user_id}", json={"name": name, "phone": phone})
        return _user_from(data)

    def delete_user(self, user_id) -> None:
        self._request("DELETE", f"users/{user_id}")

    def login(self) -> User:
        """Check the client's Basic credentials against users/login."""
        data = self._request("POST", "users/login", json={})
        user = _user_from(data)
        if user is None:
            raise CatalogAuthError(401, "Invalid phone or password")
        return user


def _user_from(data: Any) -> Optional[User]:
    """Users come back either bare or wrapped as {"user": {...}}."""
    if isinstance(data, dict) and isinstance(data.get("user"), dict):
        data = data["user"]
    if not isinstance(data, dict) or "id" not in data:
        return None
    return User.model_validate(data)


def _record(data: Any, key: str) -> Dict[str, Any]:
    """Unwrap {"<key>": {...}} responses; anything without an id is a protocol error."""
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        data = data[key]
    if not isinstance(data, dict) or "id" not in data:
        raise CatalogAPIError(502, f"Unexpected {key} response from catalog API")
    return data


def _multipart(fields: FormFields, files: UploadFiles) -> list:
    """
    Encode form fields and uploads as one multipart body.

    Plain fields go in as (None, value) parts so the body is multipart even
    when no new files are attached. List values become repeated fields.
    """
    parts = []
    for name, value in fields.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            parts.append((name, (None, str(item))))
    parts.extend(files)
    return parts


def _parse_records(model, payload: Any) -> list:
    if not isinstance(payload, list):
        return []
    records = []
    for item in payload:
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed {model.__name__} record: {e.error_count()} errors")
    return records
