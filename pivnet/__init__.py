"""
pivnet CLI.

Command-line client for the Pivotal Network API.

Architecture:
- CLI is a thin presentation layer (Typer + Rich)
- API client talks to /api/v2 over HTTP (httpx)
- Credentials live in profiles inside the rc file (~/.pivnetrc)
"""

from pivnet.version import VERSION

__version__ = VERSION
__all__ = ["VERSION", "__version__"]
