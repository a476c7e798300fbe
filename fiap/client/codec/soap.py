"""SOAP 1.1 envelope codec for the FIAP query operation.

Requests are written with the namespaces fixed by IEEE1888:

    soapenv:Envelope / soapenv:Body
        queryRQ                       (http://soap.fiap.org/)
            transport                 (http://gutp.jp/fiap/2009/11/)
                header / query / key

Responses are read by local element name so servers that qualify the
transport children differently still decode. Unset model fields are never
written, so an absent filter is an absent attribute rather than an empty one.
"""

from __future__ import annotations

import uuid
import xml.etree.ElementTree as ET
from datetime import datetime
from enum import Enum
from typing import TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..core.enums import AttrName, QueryType, SelectType
from ..core.exceptions import DecodeError, TransportError
from ..models.wire import (
    Body,
    ErrorInfo,
    Header,
    Key,
    Point,
    PointSet,
    Query,
    QueryRQ,
    QueryRS,
    Transport,
    Value,
)

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
FIAP_SOAP_NS = "http://soap.fiap.org/"
FIAP_NS = "http://gutp.jp/fiap/2009/11/"

ET.register_namespace("soapenv", SOAP_ENV_NS)
ET.register_namespace("fiapsoap", FIAP_SOAP_NS)
ET.register_namespace("fiap", FIAP_NS)

E = TypeVar("E", bound=Enum)

# wire Key field -> XML attribute, in schema order
_KEY_ATTRS = (
    ("id", "id"),
    ("attr_name", "attrName"),
    ("eq", "eq"),
    ("neq", "neq"),
    ("lt", "lt"),
    ("gt", "gt"),
    ("lteq", "lteq"),
    ("gteq", "gteq"),
    ("select", "select"),
)


def _q(ns: str, tag: str) -> str:
    return f"{{{ns}}}{tag}"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local(child.tag) == name]


def _child(elem: ET.Element, name: str) -> ET.Element | None:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _attr_text(value: object) -> str:
    # str-Enums must serialize as their value, not "SelectType.MAXIMUM"
    return str(getattr(value, "value", value))


# --- Encoding -----------------------------------------------------------


def _encode_key(parent: ET.Element, key: Key) -> None:
    elem = ET.SubElement(parent, _q(FIAP_NS, "key"))
    for field, attr in _KEY_ATTRS:
        value = getattr(key, field)
        if value is None or value == "":
            continue
        elem.set(attr, _attr_text(value))


def _encode_query(parent: ET.Element, query: Query) -> None:
    elem = ET.SubElement(parent, _q(FIAP_NS, "query"))
    if query.id is not None:
        elem.set("id", str(query.id))
    if query.type is not None:
        elem.set("type", _attr_text(query.type))
    if query.cursor is not None:
        elem.set("cursor", str(query.cursor))
    if query.acceptable_size is not None:
        elem.set("acceptableSize", str(query.acceptable_size))
    for key in query.keys:
        _encode_key(elem, key)


def encode_query_rq(request: QueryRQ) -> bytes:
    """Serialize a QueryRQ into a complete SOAP envelope (UTF-8 bytes)."""
    envelope = ET.Element(_q(SOAP_ENV_NS, "Envelope"))
    soap_body = ET.SubElement(envelope, _q(SOAP_ENV_NS, "Body"))
    query_rq = ET.SubElement(soap_body, _q(FIAP_SOAP_NS, "queryRQ"))

    transport = request.transport
    if transport is not None:
        transport_elem = ET.SubElement(query_rq, _q(FIAP_NS, "transport"))
        if transport.header is not None:
            header_elem = ET.SubElement(transport_elem, _q(FIAP_NS, "header"))
            if transport.header.query is not None:
                _encode_query(header_elem, transport.header.query)

    return ET.tostring(envelope, encoding="utf-8", xml_declaration=True)


# --- Decoding -----------------------------------------------------------


def _decode_value(elem: ET.Element) -> Value:
    raw_time = elem.get("time")
    time = datetime.fromisoformat(raw_time) if raw_time else None
    return Value(time=time, value=elem.text or "")


def _decode_point(elem: ET.Element) -> Point:
    return Point(
        id=elem.get("id", ""),
        values=[_decode_value(v) for v in _children(elem, "value")],
    )


def _decode_point_set(elem: ET.Element) -> PointSet:
    return PointSet(
        id=elem.get("id", ""),
        point_sets=[_decode_point_set(ps) for ps in _children(elem, "pointSet")],
        points=[_decode_point(p) for p in _children(elem, "point")],
    )


# Echoed query attributes other than the cursor are informational; values
# that do not fit the schema decode as None instead of failing the page.


def _lenient_enum(enum_cls: type[E], raw: str | None) -> E | None:
    try:
        return enum_cls(raw) if raw else None
    except ValueError:
        return None


def _lenient_uuid(raw: str | None) -> uuid.UUID | None:
    try:
        return uuid.UUID(raw) if raw else None
    except ValueError:
        return None


def _lenient_size(raw: str | None) -> int | None:
    try:
        size = int(raw) if raw else None
    except ValueError:
        return None
    return size if size is not None and size >= 1 else None


def _decode_query(elem: ET.Element) -> Query:
    return Query(
        id=_lenient_uuid(elem.get("id")),
        type=_lenient_enum(QueryType, elem.get("type")),
        cursor=elem.get("cursor") or None,
        acceptable_size=_lenient_size(elem.get("acceptableSize")),
        keys=[
            Key(
                id=key.get("id", ""),
                attr_name=_lenient_enum(AttrName, key.get("attrName")),
                eq=key.get("eq"),
                neq=key.get("neq"),
                lt=key.get("lt"),
                gt=key.get("gt"),
                lteq=key.get("lteq"),
                gteq=key.get("gteq"),
                select=_lenient_enum(SelectType, key.get("select")),
            )
            for key in _children(elem, "key")
        ],
    )


def _decode_header(elem: ET.Element) -> Header:
    error_elem = _child(elem, "error")
    query_elem = _child(elem, "query")
    return Header(
        ok=_child(elem, "OK") is not None,
        error=(
            ErrorInfo(type=error_elem.get("type", ""), value=(error_elem.text or "").strip())
            if error_elem is not None
            else None
        ),
        query=_decode_query(query_elem) if query_elem is not None else None,
    )


def _decode_body(elem: ET.Element) -> Body:
    return Body(
        point_sets=[_decode_point_set(ps) for ps in _children(elem, "pointSet")],
        points=[_decode_point(p) for p in _children(elem, "point")],
    )


def _decode_transport(elem: ET.Element) -> Transport:
    header_elem = _child(elem, "header")
    body_elem = _child(elem, "body")
    return Transport(
        header=_decode_header(header_elem) if header_elem is not None else None,
        body=_decode_body(body_elem) if body_elem is not None else None,
    )


def _raise_for_fault(soap_body: ET.Element, status_code: int | None) -> None:
    fault = _child(soap_body, "Fault")
    if fault is None:
        return
    code = _child(fault, "faultcode")
    reason = _child(fault, "faultstring")
    raise TransportError(
        "soap fault: "
        f"{(code.text or '').strip() if code is not None else 'unknown'}: "
        f"{(reason.text or '').strip() if reason is not None else ''}",
        status_code=status_code,
    )


def decode_query_rs(data: bytes | str, status_code: int | None = None) -> QueryRS:
    """Parse a SOAP response envelope into a QueryRS.

    A well-formed envelope that lacks ``queryRS`` or ``transport`` decodes to
    a QueryRS with ``transport=None``; judging that is the decoder's job.

    Raises:
        DecodeError: If the payload is not XML or not a SOAP envelope
        TransportError: If the envelope carries a SOAP Fault
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DecodeError(f"response is not valid XML: {exc}", status_code) from exc

    if _local(root.tag) != "Envelope":
        raise DecodeError(f"unexpected root element '{_local(root.tag)}'", status_code)
    soap_body = _child(root, "Body")
    if soap_body is None:
        raise DecodeError("soap envelope has no Body", status_code)

    _raise_for_fault(soap_body, status_code)

    query_rs = _child(soap_body, "queryRS")
    transport_elem = _child(query_rs, "transport") if query_rs is not None else None
    try:
        transport = _decode_transport(transport_elem) if transport_elem is not None else None
    except (PydanticValidationError, ValueError) as exc:
        raise DecodeError(f"malformed transport element: {exc}", status_code) from exc

    return QueryRS(transport=transport, status_code=status_code)


__all__ = [
    "FIAP_NS",
    "FIAP_SOAP_NS",
    "SOAP_ENV_NS",
    "decode_query_rs",
    "encode_query_rq",
]
