"""
Session endpoints: sign in against the catalog API with Basic credentials.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from typing import Optional

import httpx

from catalog_admin.catalog.client import CatalogAuthError, CatalogClient, encode_basic_token
from catalog_admin.dependencies import get_catalog_transport
from catalog_admin.schemas.auth import LoginRequest, LoginResponse, SessionStatus
from catalog_admin.services.session_service import (
    PHONE_COOKIE,
    clear_session_cookies,
    set_session_cookies,
    token_from_request,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    transport: Optional[httpx.BaseTransport] = Depends(get_catalog_transport)
):
    """Check phone/password with the catalog API and start a cookie session."""
    token = encode_basic_token(credentials.phone, credentials.password)
    try:
        with CatalogClient(token=token, transport=transport) as client:
            user = client.login()
    except CatalogAuthError as e:
        logger.warning(f"Login rejected for {credentials.phone}")
        failed = JSONResponse(
            status_code=401,
            content={"detail": e.message or "Invalid phone or password"},
        )
        clear_session_cookies(failed)
        return failed

    set_session_cookies(response, token, credentials.phone)
    return LoginResponse(user=user)


@router.post("/logout", status_code=204)
def logout(response: Response):
    """End the cookie session."""
    clear_session_cookies(response)
    return None


@router.get("/session", response_model=SessionStatus)
def session_status(request: Request):
    """Whether the caller carries session credentials."""
    authenticated = token_from_request(request) is not None
    return SessionStatus(
        authenticated=authenticated,
        phone=request.cookies.get(PHONE_COOKIE) if authenticated else None,
    )
