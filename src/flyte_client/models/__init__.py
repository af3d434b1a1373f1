"""Flyte client models - link documents and client configuration."""

from .config import ClientConfig, RetryPolicy
from .links import Link, LinkDocument

__all__ = [
    # Link models
    "Link",
    "LinkDocument",
    # Configuration
    "ClientConfig",
    "RetryPolicy",
]
