"""
CLI Module.

Command-line interface built with Typer for the Pivotal Network API.

Architecture:
- CLI is a thin presentation layer
- All HTTP traffic goes through pivnet.api.client (httpx)
- stdout carries command output only; logs and errors go to stderr

Usage:
    pivnet --help
    pivnet login --api-token=<token>
    pivnet --format=json product --product-slug=p-mysql
"""
