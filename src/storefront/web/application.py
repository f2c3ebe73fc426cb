"""FastAPI application factory.

Every request runs inside the storefront domain context, so routes can use
`current_domain` directly, and is logged once with its status and duration.
"""

import time
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import config
from storefront.catalogue.api import product_router, store_router
from storefront.domain import storefront
from storefront.identity.api import router as auth_router
from storefront.ordering.api import cart_router, order_router
from storefront.utils.logging import bind_request, clear_request
from storefront.web.errors import register_exception_handlers
from storefront.wishlist.api import router as wishlist_router

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app() -> FastAPI:
    app = FastAPI(
        title="IVMA Storefront API",
        description="Customer-facing store pages, accounts, carts, wishlists and orders",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and the request log context."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:16]
        bind_request(request_id, request.method, request.url.path)
        started = time.perf_counter()
        try:
            with storefront.domain_context():
                response = await call_next(request)
            logger.info(
                "Request handled",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request()

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(store_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(wishlist_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": storefront.name,
                "environment": config.environment(),
            }
        )

    return app
