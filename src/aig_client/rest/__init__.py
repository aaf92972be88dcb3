"""Generic REST call executor."""

from .client import MIME_JSON, MIME_JSON_LD, RestClient, RestResponse, build_url, encode_query

__all__ = ["MIME_JSON", "MIME_JSON_LD", "RestClient", "RestResponse", "build_url", "encode_query"]
