"""
CLI Commands.

Organized by resource. Each module exposes plain callback functions that
are registered directly on the root app in pivnet.cli.app.
"""

from pivnet.cli.commands import auth, products, releases

__all__ = [
    "auth",
    "products",
    "releases",
]
