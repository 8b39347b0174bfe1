"""Roblox adapter package."""

from relay.adapters.roblox.client import (
    RobloxAPIError,
    RobloxAuthError,
    RobloxClient,
    RobloxError,
)

__all__ = [
    "RobloxAPIError",
    "RobloxAuthError",
    "RobloxClient",
    "RobloxError",
]
