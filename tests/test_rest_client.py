"""Tests for the REST call executor."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from aig_client import ClientConfig, GuardError, NotFoundError, RestClientError, VerifyDepth
from aig_client.rest import RestClient, RestResponse, build_url, encode_query
from aig_client.rest.parameters import (
    array_from_string,
    array_to_string,
    object_from_string,
    object_to_string,
)


def _response(status=200, text="", headers=None):
    response = MagicMock(status=status, headers=headers or {})
    response.text = AsyncMock(return_value=text)
    return response


class TestBuildUrl:
    def test_collection_route(self):
        assert (
            build_url("http://localhost:8080/", "auditable-item-graph", "/")
            == "http://localhost:8080/auditable-item-graph/"
        )

    def test_path_param_quoted(self):
        url = build_url("http://localhost:8080", "aig", "/:id", {"id": "urn:x/y z"})
        assert url == "http://localhost:8080/aig/urn%3Ax%2Fy%20z"

    def test_empty_prefix(self):
        assert build_url("http://localhost:8080", "", "/:id", {"id": "abc"}) == (
            "http://localhost:8080/abc"
        )

    def test_missing_path_param(self):
        with pytest.raises(GuardError):
            build_url("http://localhost:8080", "aig", "/:id", {})


class TestEncodeQuery:
    def test_drops_none_and_stringifies(self):
        assert encode_query(
            {
                "includeDeleted": True,
                "includeChangesets": False,
                "verifySignatureDepth": VerifyDepth.CURRENT,
                "pageSize": 20,
                "cursor": None,
            }
        ) == {
            "includeDeleted": "true",
            "includeChangesets": "false",
            "verifySignatureDepth": "current",
            "pageSize": "20",
        }

    def test_empty(self):
        assert encode_query(None) == {}
        assert encode_query({}) == {}


class TestParameters:
    def test_array_round_trip(self):
        assert array_from_string(array_to_string(["id", "aliases"])) == ["id", "aliases"]
        assert array_to_string(None) is None
        assert array_from_string("") == []

    def test_object_round_trip(self):
        value = {"conditions": [{"property": "id", "value": "a,b"}], "logicalOperator": "or"}
        encoded = object_to_string(value)
        assert " " not in encoded
        assert object_from_string(encoded) == value
        assert object_from_string(None) is None


class TestRestResponse:
    def test_header_lookup_case_insensitive(self):
        response = RestResponse(status=201, headers={"location": "aig:1"})
        assert response.header("Location") == "aig:1"
        assert response.header("Content-Type") is None


class TestFetch:
    def setup_method(self):
        self.config = ClientConfig(
            endpoint="http://localhost:8080",
            headers={"X-Tenant": "t1"},
        )
        self.client = RestClient(self.config, "auditable-item-graph")

    @pytest.mark.asyncio
    async def test_success(self):
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(
                text=json.dumps({"id": "aig:1"}), headers={"Content-Type": "application/json"}
            )

            response = await self.client.fetch(
                "/:id",
                "GET",
                headers={"Accept": "application/ld+json"},
                query={"includeDeleted": True},
                path_params={"id": "aig:1"},
            )

        assert response.status == 200
        assert response.body == {"id": "aig:1"}
        assert response.header("content-type") == "application/json"

        args, kwargs = session.request.call_args
        assert args == ("GET", "http://localhost:8080/auditable-item-graph/aig%3A1")
        assert kwargs["params"] == {"includeDeleted": "true"}
        assert kwargs["headers"] == {"Accept": "application/ld+json", "X-Tenant": "t1"}

    @pytest.mark.asyncio
    async def test_body_sets_content_type(self):
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(
                status=201, headers={"Location": "aig:2"}
            )

            response = await self.client.fetch("/", "POST", body={"annotationObject": {}})

        assert response.body is None
        assert response.header("Location") == "aig:2"
        _, kwargs = session.request.call_args
        assert kwargs["json"] == {"annotationObject": {}}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_path_prefix_override(self):
        self.config.path_prefix = "graph"
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(status=204)

            await self.client.fetch("/:id", "PUT", path_params={"id": "a"}, body={})

        args, _ = session.request.call_args
        assert args == ("PUT", "http://localhost:8080/graph/a")

    @pytest.mark.asyncio
    async def test_not_found(self):
        error_body = json.dumps({"name": "NotFoundError", "message": "vertexNotFound"})
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(
                status=404, text=error_body
            )

            with pytest.raises(NotFoundError) as exc_info:
                await self.client.fetch("/:id", "GET", path_params={"id": "missing"})

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == error_body
        assert "vertexNotFound" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error(self):
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(
                status=500, text="upstream exploded"
            )

            with pytest.raises(RestClientError) as exc_info:
                await self.client.fetch("/", "GET")

        assert not isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "Request failed: upstream exploded"

    @pytest.mark.asyncio
    async def test_network_error_propagates(self):
        error = aiohttp.ClientConnectionError("Connection refused")
        with patch("aiohttp.ClientSession") as mock_session:
            mock_session.return_value.__aenter__.side_effect = error

            with pytest.raises(aiohttp.ClientConnectionError) as exc_info:
                await self.client.fetch("/", "GET")

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_timeout_configured(self):
        self.config.timeout = 2.5
        with patch("aiohttp.ClientSession") as mock_session:
            session = MagicMock()
            mock_session.return_value.__aenter__.return_value = session
            session.request.return_value.__aenter__.return_value = _response(text="{}")

            await self.client.fetch("/", "GET")

        _, kwargs = mock_session.call_args
        assert kwargs["timeout"].total == 2.5


class TestParseErrorMessage:
    def setup_method(self):
        self.client = RestClient(ClientConfig(endpoint="http://localhost:8080"), "aig")

    def test_nested_error(self):
        text = json.dumps({"error": {"message": "bad request"}})
        assert self.client._parse_error_message(text) == "Request failed: bad request"

    def test_named_error(self):
        text = json.dumps({"name": "GuardError", "message": "id missing"})
        assert self.client._parse_error_message(text) == "Request failed (GuardError): id missing"

    def test_plain_text(self):
        assert self.client._parse_error_message("x" * 300) == "Request failed: " + "x" * 200
