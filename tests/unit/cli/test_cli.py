"""Unit tests for the fiap-client command line."""

from __future__ import annotations

import io
import json
from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest

from fiap.client import __version__
from fiap.client.cli import build_parser, main, parse_fetch_args
from fiap.client.cli.commands import ArgumentErrors
from fiap.client.core import FIAPServerError, SelectType, TransportError
from fiap.client.models import FetchResult, ProcessedValue

URL = "http://example.org/axis2/services/FIAPStorage"
POINT = "http://example.org/building1/point1"


class FakeClient:
    """Fetcher that records which convenience method was used."""

    def __init__(self, result: FetchResult | None = None, error: Exception | None = None):
        self.result = result or FetchResult()
        self.error = error
        self.calls: list[tuple] = []
        self.closed = False

    async def _answer(self, name, from_date, until_date, *ids):
        self.calls.append((name, from_date, until_date, ids))
        if self.error is not None:
            raise self.error
        return self.result

    async def fetch_latest(self, from_date, until_date, *ids):
        return await self._answer("latest", from_date, until_date, *ids)

    async def fetch_oldest(self, from_date, until_date, *ids):
        return await self._answer("oldest", from_date, until_date, *ids)

    async def fetch_date_range(self, from_date, until_date, *ids):
        return await self._answer("date_range", from_date, until_date, *ids)

    async def fetch_by_ids_with_key(self, key, *ids):
        self.calls.append(("by_ids_with_key", key, ids))
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        self.closed = True


def _run(argv, client):
    stdout, stderr = io.StringIO(), io.StringIO()
    code = main(argv, client_factory=lambda url, config: client, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


class TestParseFetchArgs:
    """Test argument conversion and error aggregation."""

    def _parse(self, *argv):
        return parse_fetch_args(build_parser().parse_args(["fetch", *argv]))

    def test_defaults(self):
        args = self._parse(URL, POINT)
        assert args.connection_url == URL
        assert args.id == POINT
        assert args.select is SelectType.MAXIMUM
        assert args.from_date is None
        assert args.until_date is None
        assert args.output is None

    def test_dates_and_select(self):
        args = self._parse("-s", "none", "--from", "2012-02-01T00:00:00Z", "--until", "2012-02-02T00:00:00Z", URL, POINT)
        assert args.select is SelectType.NONE
        assert args.from_date == datetime(2012, 2, 1, tzinfo=UTC)
        assert args.until_date == datetime(2012, 2, 2, tzinfo=UTC)

    def test_errors_aggregated(self):
        with pytest.raises(ArgumentErrors) as exc_info:
            self._parse("-s", "maximum", "--from", "2012-02-01", URL)
        errors = exc_info.value.errors
        assert errors[0] == "select type allows only max, min, or none"
        assert errors[1].startswith("from allows only datetime in RFC3339 format: ")
        assert errors[2] == "too few arguments"

    def test_not_equal(self):
        args = self._parse("--ne", "2012-02-01T12:00:00+09:00", URL, POINT)
        assert args.not_equal == datetime(2012, 2, 1, 3, tzinfo=UTC)

    def test_bad_not_equal_aggregated(self):
        with pytest.raises(ArgumentErrors) as exc_info:
            self._parse("--ne", "2012-02-01", "--until", "never", URL, POINT)
        errors = exc_info.value.errors
        assert len(errors) == 2
        assert errors[0].startswith("until allows only datetime in RFC3339 format: ")
        assert errors[1].startswith("ne allows only datetime in RFC3339 format: ")

    def test_too_many_arguments(self):
        with pytest.raises(ArgumentErrors, match="too many arguments"):
            self._parse(URL, POINT, "extra")


class TestMain:
    """Test command execution and output."""

    def test_select_dispatch(self):
        for flag, name in [("max", "latest"), ("min", "oldest"), ("none", "date_range")]:
            client = FakeClient()
            code, _, _ = _run(["fetch", "-s", flag, URL, POINT], client)
            assert code == 0
            assert client.calls == [(name, None, None, (POINT,))]
            assert client.closed

    def test_not_equal_uses_shared_key(self):
        """Test --ne is sent with the range and select on one key."""
        client = FakeClient()
        code, _, _ = _run(
            ["fetch", "-s", "min", "--from", "2012-02-01T00:00:00Z", "--ne", "2012-02-01T06:00:00Z", URL, POINT],
            client,
        )
        assert code == 0
        ((name, key, ids),) = client.calls
        assert name == "by_ids_with_key"
        assert ids == (POINT,)
        assert key.neq == datetime(2012, 2, 1, 6, tzinfo=UTC)
        assert key.gteq == datetime(2012, 2, 1, tzinfo=UTC)
        assert key.lteq is None
        assert key.select is SelectType.MINIMUM
        assert client.closed

    def test_json_to_stdout(self):
        result = FetchResult(points={POINT: [ProcessedValue(time=datetime(2012, 2, 2, tzinfo=UTC), value="30")]})
        code, out, err = _run(["fetch", URL, POINT], FakeClient(result))
        assert code == 0
        assert err == ""
        assert json.loads(out) == {"points": {POINT: [{"time": "2012-02-02T00:00:00Z", "value": "30"}]}}

    def test_empty_result_prints_empty_object(self):
        code, out, _ = _run(["fetch", URL, POINT], FakeClient())
        assert code == 0
        assert json.loads(out) == {}

    def test_json_to_file(self, tmp_path):
        path = tmp_path / "out.json"
        result = FetchResult(points={POINT: []})
        code, out, _ = _run(["fetch", "-o", str(path), URL, POINT], FakeClient(result))
        assert code == 0
        assert out == ""
        assert json.loads(path.read_text()) == {"points": {POINT: []}}

    def test_unwritable_output(self, tmp_path):
        path = tmp_path / "missing" / "out.json"
        code, _, err = _run(["fetch", "-o", str(path), URL, POINT], FakeClient())
        assert code == 1
        assert err.startswith(f"Error: cannot open file '{path}'")

    def test_write_failure_reported_and_file_closed(self):
        handle = MagicMock()
        handle.write.side_effect = OSError("disk full")
        with patch("fiap.client.cli.commands.open", return_value=handle, create=True):
            code, _, err = _run(["fetch", "-o", "out.json", URL, POINT], FakeClient())
        assert code == 1
        assert err.startswith("Error: failed to write file 'out.json': disk full")
        handle.__exit__.assert_called_once()

    def test_argument_errors_reported(self):
        client = FakeClient()
        code, _, err = _run(["fetch", "-s", "bogus"], client)
        assert code == 1
        assert "select type allows only max, min, or none" in err
        assert "too few arguments" in err
        assert client.calls == []

    def test_server_error(self):
        client = FakeClient(error=FIAPServerError("POINT_NOT_FOUND", "no such point"))
        code, _, err = _run(["fetch", URL, POINT], client)
        assert code == 1
        assert err.strip() == "Error: fiap error: type POINT_NOT_FOUND, value no such point"

    def test_fetch_error(self):
        client = FakeClient(error=TransportError("connection refused"))
        code, _, err = _run(["fetch", URL, POINT], client)
        assert code == 1
        assert err.strip() == f"Error: failed to fetch from {URL}: connection refused"

    def test_debug_echoes_arguments(self):
        code, out, _ = _run(["fetch", "-d", URL, POINT], FakeClient())
        assert code == 0
        assert f"url: {URL}" in out
        assert f"id: {POINT}" in out
        assert "select: maximum" in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_no_command_prints_help(self):
        stdout = io.StringIO()
        assert main([], stdout=stdout) == 0
        assert "IEEE1888 (a.k.a. UGCCNet or FIAP) library" in stdout.getvalue()
