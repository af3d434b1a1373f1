"""Client components for communicating with the Flyte API."""

from .bootstrap import Bootstrapper, BootstrapState, LinkCache
from .errors import (
    ClientError,
    ErrorKind,
    FetchError,
    InvocationError,
    NotFoundError,
    ResolutionError,
)
from .fetcher import LinkFetcher
from .flyte_client import HEALTH_CHECK_REL, FlyteClient, new_client
from .resolver import resolve_link

__all__ = [
    # Client
    "FlyteClient",
    "new_client",
    "HEALTH_CHECK_REL",
    # Link discovery
    "Bootstrapper",
    "BootstrapState",
    "LinkCache",
    "LinkFetcher",
    "resolve_link",
    # Errors
    "ClientError",
    "ErrorKind",
    "FetchError",
    "InvocationError",
    "NotFoundError",
    "ResolutionError",
]
