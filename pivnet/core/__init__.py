"""
Core Infrastructure.

Configuration, logging, exceptions and resilience helpers shared by the
API client and the CLI.
"""
