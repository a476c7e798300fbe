"""Shared fixtures for unit tests: canned SOAP responses and a fake caller."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from fiap.client.codec import decode_query_rs
from fiap.client.models import QueryRQ, QueryRS

RESPONSE_TEMPLATE = """<?xml version='1.0' encoding='utf-8'?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
  <soapenv:Header/>
  <soapenv:Body>
    <ns2:queryRS xmlns:ns2="http://soap.fiap.org/">
      <transport xmlns="http://gutp.jp/fiap/2009/11/">
        <header>
          {status}
          <query id="e3264a29-b4a6-41dd-a6bb-cbf57b76e571" type="storage" acceptableSize="1000"{cursor}>
            <key id="http://example.org/building1/" attrName="time" select="maximum"/>
          </query>
        </header>
        {body}
      </transport>
    </ns2:queryRS>
  </soapenv:Body>
</soapenv:Envelope>"""


def make_envelope(body: str = "<body/>", cursor: str = "", error: tuple[str, str] | None = None) -> str:
    """Render a queryRS envelope around body content."""
    if error is not None:
        status = f'<error type="{error[0]}">{error[1]}</error>'
    else:
        status = "<OK/>"
    cursor_attr = f' cursor="{cursor}"' if cursor else ""
    return RESPONSE_TEMPLATE.format(status=status, cursor=cursor_attr, body=body)


class FakeCaller:
    """RemoteCaller that replays canned responses and records requests."""

    def __init__(self, responses: list[QueryRS | Exception]):
        self.responses = list(responses)
        self.requests: list[tuple[str, str, QueryRQ]] = []
        self.closed = False

    async def call(self, endpoint_url: str, operation: str, request: QueryRQ) -> QueryRS:
        self.requests.append((endpoint_url, operation, request))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def envelope() -> Callable[..., str]:
    return make_envelope


@pytest.fixture
def response() -> Callable[..., QueryRS]:
    """Build a decoded QueryRS from body content."""

    def _response(body: str = "<body/>", cursor: str = "", error=None, status_code=200) -> QueryRS:
        return decode_query_rs(make_envelope(body, cursor, error).encode(), status_code)

    return _response


@pytest.fixture
def fake_caller() -> Callable[[list], FakeCaller]:
    return FakeCaller
