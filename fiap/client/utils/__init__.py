"""Utility functions."""

from .http import HTTPClient, HTTPResponse
from .time import format_time, is_zero_time, parse_time

__all__ = ["HTTPClient", "HTTPResponse", "format_time", "is_zero_time", "parse_time"]
