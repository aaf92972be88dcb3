"""Shared test fixtures."""

import copy
from typing import Any

import pytest

from aig_client import AuditableItemGraphClient, ClientConfig
from aig_client.rest import RestResponse


class RecordingExecutor:
    """Stands in for RestClient, recording every fetch call."""

    def __init__(self, *responses: RestResponse):
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def queue(self, response: RestResponse) -> None:
        self.responses.append(response)

    async def fetch(
        self,
        route: str,
        method: str,
        *,
        headers=None,
        query=None,
        path_params=None,
        body=None,
    ) -> RestResponse:
        self.calls.append(
            {
                "route": route,
                "method": method,
                "headers": headers,
                "query": query,
                "path_params": path_params,
                "body": body,
            }
        )
        if self.responses:
            return self.responses.pop(0)
        return RestResponse(status=200, body={})


# --- Sample payloads ---

NOTE = {
    "@context": "https://schema.org",
    "@type": "Note",
    "content": "This is a simple note",
}

ANNOTATION_VERTEX = {
    "@context": [
        "https://schema.twindev.org/aig/",
        "https://schema.twindev.org/common/",
        "https://schema.org",
    ],
    "type": "AuditableItemGraphVertex",
    "id": "aig:1234567890",
    "dateCreated": "2024-08-22T11:55:16.271Z",
    "dateModified": "2024-08-22T11:56:16.271Z",
    "annotationObject": NOTE,
    "aliases": [
        {
            "type": "AuditableItemGraphAlias",
            "id": "tst:1234567890",
            "aliasFormat": "tst",
            "dateCreated": "2024-08-22T11:55:16.271Z",
        }
    ],
    "resources": [
        {
            "type": "AuditableItemGraphResource",
            "id": "resource1",
            "resourceObject": NOTE,
            "dateCreated": "2024-08-22T11:55:16.271Z",
        }
    ],
    "edges": [
        {
            "type": "AuditableItemGraphEdge",
            "id": "aig:0987654321",
            "edgeRelationship": "frenemy",
            "dateCreated": "2024-08-22T11:55:16.271Z",
            "dateDeleted": "2024-08-23T09:00:00.000Z",
        }
    ],
}


@pytest.fixture
def config():
    return ClientConfig(endpoint="http://localhost:8080")


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def client(config, executor):
    return AuditableItemGraphClient(config, executor=executor)


@pytest.fixture
def note():
    return copy.deepcopy(NOTE)


@pytest.fixture
def annotation_vertex():
    return copy.deepcopy(ANNOTATION_VERTEX)
