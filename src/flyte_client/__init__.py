"""Flyte client - HATEOAS client for the Flyte API.

The client discovers the links advertised by the API's root resource,
caches them, and resolves well-known relations (such as the health check)
to concrete URLs.

Installation extras:
  - cli: Command-line interface
  - test: Test dependencies
"""

from .client import (
    Bootstrapper,
    BootstrapState,
    ClientError,
    ErrorKind,
    FetchError,
    FlyteClient,
    InvocationError,
    LinkCache,
    LinkFetcher,
    NotFoundError,
    ResolutionError,
    new_client,
    resolve_link,
)
from .models import ClientConfig, Link, LinkDocument, RetryPolicy

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core data models
    "ClientConfig",
    "Link",
    "LinkDocument",
    "RetryPolicy",
    # Client
    "FlyteClient",
    "new_client",
    "resolve_link",
    "Bootstrapper",
    "BootstrapState",
    "LinkCache",
    "LinkFetcher",
    # Errors
    "ClientError",
    "ErrorKind",
    "FetchError",
    "InvocationError",
    "NotFoundError",
    "ResolutionError",
]

# Package metadata
__title__ = "flyte-client"
__description__ = "HATEOAS client for discovering and using Flyte API links"
__license__ = "Apache 2.0"
