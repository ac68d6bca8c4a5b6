"""Basic-Auth session cookies shared between the dashboard and this service."""

from typing import Optional

from fastapi import Request, Response

from catalog_admin.config import settings

SESSION_COOKIE = "basicAuth"
PHONE_COOKIE = "phone"


def token_from_request(request: Request) -> Optional[str]:
    """
    Basic token for the current request.

    An explicit Authorization header wins over the session cookie.
    """
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "basic" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(SESSION_COOKIE) or None


def set_session_cookies(response: Response, token: str, phone: str) -> None:
    for name, value in ((SESSION_COOKIE, token), (PHONE_COOKIE, phone)):
        response.set_cookie(
            name,
            value,
            max_age=settings.session_max_age,
            path="/",
            samesite="lax",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, path="/")
    response.delete_cookie(PHONE_COOKIE, path="/")
