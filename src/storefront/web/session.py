"""Session cookie handling and the authenticated-customer dependency."""

from fastapi import Request, Response

from storefront import config
from storefront.errors import NotAuthenticated
from storefront.identity.authentication import resolve_session
from storefront.identity.session.session import CustomerSession

SESSION_COOKIE = "session"


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


def user_agent(request: Request) -> str:
    return request.headers.get("user-agent", "unknown")


def set_session_cookie(response: Response, session: CustomerSession) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.token,
        max_age=int(config.session_ttl().total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.is_production(),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.is_production(),
    )


async def current_customer_id(request: Request) -> str:
    """Dependency: the signed-in customer's id, or 401."""
    customer_id = resolve_session(request.cookies.get(SESSION_COOKIE))
    if customer_id is None:
        raise NotAuthenticated()
    return customer_id
