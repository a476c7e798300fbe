"""Wire codec for FIAP SOAP envelopes."""

from .soap import FIAP_NS, FIAP_SOAP_NS, SOAP_ENV_NS, decode_query_rs, encode_query_rq

__all__ = [
    "FIAP_NS",
    "FIAP_SOAP_NS",
    "SOAP_ENV_NS",
    "decode_query_rs",
    "encode_query_rq",
]
