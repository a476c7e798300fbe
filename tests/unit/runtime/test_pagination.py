"""Unit tests for the pagination driver."""

from __future__ import annotations

import logging

import pytest

from fiap.client.core import (
    QUERY_OPERATION,
    DecodeError,
    FIAPServerError,
    PaginationLimitError,
    TransportError,
)
from fiap.client.models import UserInputKey
from fiap.client.runtime import PaginationDriver

URL = "http://example.org/axis2/services/FIAPStorage"
CURSOR_1 = "11111111-1111-4111-8111-111111111111"
CURSOR_2 = "22222222-2222-4222-8222-222222222222"

POINT_A_1 = '<body><point id="A"><value time="2012-02-02T16:34:05+09:00">1</value></point></body>'
POINT_A_2 = '<body><point id="A"><value time="2012-02-02T16:35:05+09:00">2</value></point></body>'


class TestPaginationDriver:
    """Test the page loop and merge."""

    @pytest.mark.asyncio
    async def test_single_page(self, fake_caller, response):
        caller = fake_caller([response(POINT_A_1)])
        driver = PaginationDriver(caller)

        result = await driver.run(URL, [UserInputKey(id="A")])

        assert [v.value for v in result.points["A"]] == ["1"]
        assert result.point_sets is None
        assert len(caller.requests) == 1
        endpoint, operation, request = caller.requests[0]
        assert endpoint == URL
        assert operation == QUERY_OPERATION
        assert request.transport.header.query.cursor is None
        assert request.transport.header.query.acceptable_size == 1000

    @pytest.mark.asyncio
    async def test_follows_cursor_until_empty(self, fake_caller, response):
        """Test each page sends the previous cursor and values are appended in order."""
        caller = fake_caller(
            [
                response(POINT_A_1, cursor=CURSOR_1),
                response(POINT_A_2, cursor=CURSOR_2),
                response("<body/>"),
            ]
        )
        driver = PaginationDriver(caller)

        result = await driver.run(URL, [UserInputKey(id="A")], acceptable_size=1)

        assert [v.value for v in result.points["A"]] == ["1", "2"]
        sent = [str(rq.transport.header.query.cursor) for _, _, rq in caller.requests]
        assert sent == ["None", CURSOR_1, CURSOR_2]
        assert all(rq.transport.header.query.acceptable_size == 1 for _, _, rq in caller.requests)

    @pytest.mark.asyncio
    async def test_point_set_split_across_pages(self, fake_caller, response):
        """Test a point-set described on two pages keeps both pages' children."""
        caller = fake_caller(
            [
                response(
                    '<body><pointSet id="B"><point id="B1"/><pointSet id="B2"/></pointSet></body>',
                    cursor=CURSOR_1,
                ),
                response('<body><pointSet id="B"><pointSet id="B3"/></pointSet></body>'),
            ]
        )
        result = await PaginationDriver(caller).run(URL, [UserInputKey(id="B")])

        assert result.point_sets["B"].point_ids == ["B1"]
        assert result.point_sets["B"].point_set_ids == ["B2", "B3"]
        assert set(result.point_sets) == {"B", "B2", "B3"}
        assert result.points is None

    @pytest.mark.asyncio
    async def test_error_on_later_page_discards_results(self, fake_caller, response):
        caller = fake_caller(
            [
                response(POINT_A_1, cursor=CURSOR_1),
                response(error=("QUERY_ERROR", "cursor expired")),
            ]
        )
        with pytest.raises(FIAPServerError):
            await PaginationDriver(caller).run(URL, [UserInputKey(id="A")])

    @pytest.mark.asyncio
    async def test_caller_exception_wrapped(self, fake_caller):
        caller = fake_caller([ConnectionResetError("reset by peer")])
        with pytest.raises(TransportError, match="remote call to .* failed: reset by peer") as exc_info:
            await PaginationDriver(caller).run(URL, [UserInputKey(id="A")])
        assert exc_info.value.url == URL

    @pytest.mark.asyncio
    async def test_library_errors_pass_through(self, fake_caller):
        caller = fake_caller([DecodeError("queryRS is nil")])
        with pytest.raises(DecodeError, match="queryRS is nil"):
            await PaginationDriver(caller).run(URL, [UserInputKey(id="A")])

    @pytest.mark.asyncio
    async def test_max_pages(self, fake_caller, response):
        caller = fake_caller(
            [response(POINT_A_1, cursor=CURSOR_1), response(POINT_A_2, cursor=CURSOR_2)]
        )
        with pytest.raises(PaginationLimitError) as exc_info:
            await PaginationDriver(caller, max_pages=2).run(URL, [UserInputKey(id="A")])
        assert exc_info.value.cursor == CURSOR_2
        assert len(caller.requests) == 2

    @pytest.mark.asyncio
    async def test_fetch_page_returns_cursor(self, fake_caller, response):
        caller = fake_caller([response(POINT_A_1, cursor=CURSOR_1)])
        page = await PaginationDriver(caller).fetch_page(
            URL, [UserInputKey(id="A")], acceptable_size=1, cursor=CURSOR_2
        )
        assert page.cursor == CURSOR_1
        assert str(caller.requests[0][2].transport.header.query.cursor) == CURSOR_2

    @pytest.mark.asyncio
    async def test_logs_page_error(self, fake_caller, response, caplog):
        caller = fake_caller([response(error=("QUERY_ERROR", "bad"))])
        with caplog.at_level(logging.ERROR, logger="fiap.client.runtime.telemetry"):
            with pytest.raises(FIAPServerError):
                await PaginationDriver(caller).run(URL, [UserInputKey(id="A")])
        record = next(r for r in caplog.records if r.getMessage() == "page_error")
        assert record.page_index == 0
        assert record.error_type == "FIAPServerError"
