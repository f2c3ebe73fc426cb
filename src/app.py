"""IVMA Storefront FastAPI application.

The domain is initialized at module level so uvicorn workers share it.
PROTEAN_ENV selects the config overlay from storefront/domain.toml.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from storefront.domain import storefront
from storefront.web.application import create_app

storefront.init()

app = create_app()
