"""Caller-facing API."""

from .fetch_client import FetchClient, Fetcher, fetch

__all__ = ["FetchClient", "Fetcher", "fetch"]
