"""API layer package for FastAPI application and route composition."""

from .application import LIVENESS_BANNER, create_api_application

__all__ = ["LIVENESS_BANNER", "create_api_application"]
