"""Command line interface."""

from .commands import build_parser, main, parse_fetch_args, run_fetch

__all__ = ["build_parser", "main", "parse_fetch_args", "run_fetch"]
