"""
FastAPI dependencies.
"""

from typing import Generator, Optional

import httpx
from fastapi import Depends, HTTPException, Request

from catalog_admin.catalog.client import CatalogClient
from catalog_admin.services.session_service import token_from_request


def get_catalog_transport() -> Optional[httpx.BaseTransport]:
    """
    Transport for outbound catalog API calls; None means real network I/O.
    """
    return None


def get_session_token(request: Request) -> str:
    """Basic token of the signed-in admin."""
    token = token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return token


def get_catalog_client(
    token: str = Depends(get_session_token),
    transport: Optional[httpx.BaseTransport] = Depends(get_catalog_transport),
) -> Generator[CatalogClient, None, None]:
    """
    Dependency for getting a catalog API client that acts as the signed-in admin.
    """
    client = CatalogClient(token=token, transport=transport)
    try:
        yield client
    finally:
        client.close()
