"""Utility functions and helpers for the Flyte client."""

from .logging import setup_logging
from .validation import deep_merge, merge_config

__all__ = ["setup_logging", "deep_merge", "merge_config"]
