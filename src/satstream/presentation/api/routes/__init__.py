"""
API routes.
"""

from satstream.presentation.api.routes import admin, health, posts, relay, wallet

__all__ = ["admin", "health", "posts", "relay", "wallet"]
