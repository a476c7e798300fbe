"""Command line entry point: ``fiap-client fetch [flags] URL ID``."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import IO

from .. import __version__
from ..api.fetch_client import FetchClient, Fetcher
from ..core.config import ClientConfig
from ..core.enums import SelectType
from ..core.exceptions import FIAPError, FIAPServerError
from ..models.key import UserInputKeyNoID
from ..models.processed import FetchResult
from ..utils.time import parse_time

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, ClientConfig], Fetcher]


class ArgumentErrors(Exception):
    """All problems found in the fetch arguments."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("\n".join(errors))


@dataclass
class FetchArgs:
    connection_url: str
    id: str
    select: SelectType
    from_date: datetime | None
    until_date: datetime | None
    output: str | None
    debug: bool
    not_equal: datetime | None = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fiap-client",
        description="IEEE1888 (a.k.a. UGCCNet or FIAP) library",
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command")

    fetch = subparsers.add_parser(
        "fetch",
        usage="%(prog)s [flags] URL (POINT_ID | POINTSET_ID)",
        help="Run FIAP fetch method",
    )
    # Positional count is checked together with the flags
    fetch.add_argument("args", nargs="*", metavar="URL ID")
    fetch.add_argument(
        "-d", "--debug", action="store_true", help="set output log level to debug"
    )
    fetch.add_argument("-o", "--output", default="", help="specify output file path")
    fetch.add_argument(
        "-s", "--select", default="max", help="fiap select option <max|min|none>"
    )
    fetch.add_argument(
        "--from",
        dest="from_date",
        default="",
        help="filter query from datetime <RFC 3339>",
    )
    fetch.add_argument(
        "--until",
        dest="until_date",
        default="",
        help="filter query until datetime <RFC 3339>",
    )
    fetch.add_argument(
        "--ne",
        dest="not_equal",
        default="",
        help="filter query not equal datetime <RFC 3339>",
    )
    return parser


def parse_fetch_args(namespace: argparse.Namespace) -> FetchArgs:
    """Convert parsed flags into FetchArgs.

    Raises:
        ArgumentErrors: With every problem found, not just the first one
    """
    errors: list[str] = []

    select = SelectType.MAXIMUM
    try:
        select = SelectType.from_flag(namespace.select)
    except ValueError as e:
        errors.append(str(e))

    from_date = None
    if namespace.from_date:
        try:
            from_date = parse_time(namespace.from_date)
        except ValueError as e:
            errors.append(f"from allows only datetime in RFC3339 format: {e}")

    until_date = None
    if namespace.until_date:
        try:
            until_date = parse_time(namespace.until_date)
        except ValueError as e:
            errors.append(f"until allows only datetime in RFC3339 format: {e}")

    not_equal = None
    if namespace.not_equal:
        try:
            not_equal = parse_time(namespace.not_equal)
        except ValueError as e:
            errors.append(f"ne allows only datetime in RFC3339 format: {e}")

    if len(namespace.args) < 2:
        errors.append("too few arguments")
    elif len(namespace.args) > 2:
        errors.append("too many arguments")

    if errors:
        raise ArgumentErrors(errors)

    return FetchArgs(
        connection_url=namespace.args[0],
        id=namespace.args[1],
        select=select,
        from_date=from_date,
        until_date=until_date,
        output=namespace.output or None,
        debug=namespace.debug,
        not_equal=not_equal,
    )


async def run_fetch(args: FetchArgs, client: Fetcher) -> FetchResult:
    """Dispatch on the select flag and return the merged result.

    A not-equal filter has no convenience method, so it goes through
    fetch_by_ids_with_key with the same range and select.
    """
    try:
        if args.not_equal is not None:
            key = UserInputKeyNoID(
                gteq=args.from_date,
                lteq=args.until_date,
                neq=args.not_equal,
                select=args.select,
            )
            return await client.fetch_by_ids_with_key(key, args.id)
        if args.select is SelectType.MAXIMUM:
            return await client.fetch_latest(args.from_date, args.until_date, args.id)
        if args.select is SelectType.MINIMUM:
            return await client.fetch_oldest(args.from_date, args.until_date, args.id)
        return await client.fetch_date_range(args.from_date, args.until_date, args.id)
    finally:
        await client.close()


def format_result(result: FetchResult) -> str:
    try:
        return json.dumps(result.to_json_dict(), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise FIAPError(f"failed to format output to json: {e}") from e


def write_output(text: str, path: str | None, stdout: IO[str]) -> None:
    if path is None:
        print(text, file=stdout)
        return
    try:
        f = open(path, "w", encoding="utf-8")
    except OSError as e:
        raise FIAPError(f"cannot open file '{path}': {e}") from e
    with f:
        try:
            f.write(text)
        except OSError as e:
            raise FIAPError(f"failed to write file '{path}': {e}") from e


def _default_client_factory(connection_url: str, config: ClientConfig) -> Fetcher:
    return FetchClient(connection_url, config=config)


def _fetch_command(
    namespace: argparse.Namespace,
    client_factory: ClientFactory,
    stdout: IO[str],
) -> None:
    args = parse_fetch_args(namespace)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.debug:
        logger.debug(
            "fetch arguments",
            extra={
                "url": args.connection_url,
                "id": args.id,
                "output": args.output,
                "select": args.select.value,
                "from": args.from_date,
                "until": args.until_date,
                "ne": args.not_equal,
            },
        )
        print(f"url: {args.connection_url}", file=stdout)
        print(f"id: {args.id}", file=stdout)
        print(f"debug: {args.debug}", file=stdout)
        print(f"output: {args.output or ''}", file=stdout)
        print(f"select: {args.select.value or 'none'}", file=stdout)
        print(f"from: {args.from_date}", file=stdout)
        print(f"until: {args.until_date}", file=stdout)
        print(f"ne: {args.not_equal}", file=stdout)

    config = ClientConfig(debug=args.debug)
    client = client_factory(args.connection_url, config)
    try:
        result = asyncio.run(run_fetch(args, client))
    except FIAPServerError:
        raise
    except FIAPError as e:
        raise FIAPError(f"failed to fetch from {args.connection_url}: {e}") from e

    write_output(format_result(result), args.output, stdout)


def main(
    argv: Sequence[str] | None = None,
    *,
    client_factory: ClientFactory | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> int:
    """Run the command line and return the exit code."""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    parser = build_parser()
    namespace = parser.parse_args(argv)

    if namespace.command != "fetch":
        parser.print_help(stdout)
        return 0

    try:
        _fetch_command(namespace, client_factory or _default_client_factory, stdout)
    except ArgumentErrors as e:
        print(f"Error: {e}", file=stderr)
        return 1
    except FIAPError as e:
        print(f"Error: {e}", file=stderr)
        return 1
    return 0
