"""Client facade and REST API for the tutoring marketplace."""

from .client import MarketplaceClient, build_client, build_store
from .routes import create_app

__all__ = ["create_app", "MarketplaceClient", "build_client", "build_store"]
