"""
Authentication module for the Viessmann API.

Provides the OAuth2 refresh-token exchange.
"""

from .auth import refresh_token

__all__: list[str] = ["refresh_token"]
