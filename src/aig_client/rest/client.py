"""Generic REST call executor built on aiohttp."""

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import aiohttp

from ..config import ClientConfig
from ..errors import GuardError, NotFoundError, RestClientError
from .parameters import bool_to_string

logger = logging.getLogger(__name__)

MIME_JSON = "application/json"
MIME_JSON_LD = "application/ld+json"

_PATH_PARAM = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


@dataclass
class RestResponse:
    """Status, headers and decoded JSON body of a response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        value = self.headers.get(name)
        if value is not None:
            return value
        lowered = name.lower()
        for key, candidate in self.headers.items():
            if key.lower() == lowered:
                return candidate
        return None


def build_url(
    endpoint: str,
    prefix: str,
    route: str,
    path_params: Mapping[str, str] | None = None,
) -> str:
    """Join endpoint, path prefix and route, filling :name placeholders.

    Raises:
        GuardError: If a placeholder has no value in path_params
    """
    params = path_params or {}

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        value = params.get(name)
        if not isinstance(value, str) or value == "":
            raise GuardError("RestClient", name, value)
        return quote(value, safe="")

    resolved = _PATH_PARAM.sub(_substitute, route)
    if not resolved.startswith("/"):
        resolved = f"/{resolved}"

    base = endpoint.rstrip("/")
    prefix = prefix.strip("/")
    if prefix:
        base = f"{base}/{prefix}"
    return f"{base}{resolved}"


def encode_query(query: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop unset values and stringify the rest for the query string."""
    if not query:
        return {}
    encoded: dict[str, str] = {}
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = bool_to_string(value)
        elif hasattr(value, "value"):
            encoded[key] = str(value.value)
        else:
            encoded[key] = str(value)
    return encoded


class RestClient:
    """Issues single JSON requests against one resource base path."""

    def __init__(self, config: ClientConfig, base_path: str):
        """Initialize REST client.

        Args:
            config: Endpoint, headers and timeout settings
            base_path: Resource path used when the config has no path prefix
        """
        self.config = config
        self.base_path = base_path

    @property
    def prefix(self) -> str:
        return self.config.path_prefix if self.config.path_prefix is not None else self.base_path

    def _parse_error_message(self, error_text: str) -> str:
        """Parse a service error body into a readable message.

        Args:
            error_text: Raw error response text

        Returns:
            Human-readable error message
        """
        try:
            error_data = json.loads(error_text)
        except json.JSONDecodeError:
            return f"Request failed: {error_text[:200]}"

        if isinstance(error_data, dict):
            error_obj = error_data.get("error")
            if isinstance(error_obj, dict) and "message" in error_obj:
                return f"Request failed: {error_obj['message']}"

            if "message" in error_data:
                name = error_data.get("name")
                if name:
                    return f"Request failed ({name}): {error_data['message']}"
                return f"Request failed: {error_data['message']}"

        return f"Request failed: {error_text[:200]}"

    def _timeout(self) -> aiohttp.ClientTimeout | None:
        if self.config.timeout is None:
            return None
        return aiohttp.ClientTimeout(total=self.config.timeout)

    async def fetch(
        self,
        route: str,
        method: str,
        *,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, Any] | None = None,
        path_params: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> RestResponse:
        """Make a request to the service.

        Args:
            route: Route below the base path, may contain :name placeholders
            method: HTTP method
            headers: Extra request headers
            query: Query parameters, None values are dropped
            path_params: Values for the route placeholders
            body: JSON request body

        Returns:
            The response

        Raises:
            NotFoundError: If the service answers 404
            RestClientError: If the service answers with any other error status
            aiohttp.ClientError: On network failure
        """
        url = build_url(self.config.endpoint, self.prefix, route, path_params)
        params = encode_query(query)

        request_headers = {"Accept": MIME_JSON}
        if body is not None:
            request_headers["Content-Type"] = MIME_JSON
        request_headers.update(self.config.headers)
        if headers:
            request_headers.update(headers)

        logger.debug(f"{method} {url} params={params}")

        async with aiohttp.ClientSession(timeout=self._timeout()) as session:
            async with session.request(
                method,
                url,
                json=body,
                params=params or None,
                headers=request_headers,
            ) as response:
                text = await response.text()

                if response.status >= 400:
                    message = self._parse_error_message(text)
                    logger.debug(f"{method} {url} failed with {response.status}: {message}")
                    error_type = NotFoundError if response.status == 404 else RestClientError
                    raise error_type(
                        "RestClient",
                        message,
                        status_code=response.status,
                        details=text,
                    )

                return RestResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    body=json.loads(text) if text else None,
                )
