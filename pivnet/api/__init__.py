"""
Pivotal Network API.

Async HTTP client and response models for the /api/v2 endpoints.
"""

from pivnet.api.client import PivnetClient
from pivnet.api.models import Product, Release

__all__ = ["PivnetClient", "Product", "Release"]
