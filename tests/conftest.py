"""Shared fixtures for the Flyte client tests."""

from typing import Any

import pytest

# Body served by a misbehaving API: not valid JSON
ERROR_RESPONSE_BODY = '{\n\t"error!" \n}'


def sample_links_payload() -> dict[str, Any]:
    """Links document as served by the Flyte API root resource."""
    return {
        "links": [
            {"href": "http://example.com/v1", "rel": "self"},
            {"href": "http://example.com/", "rel": "up"},
            {"href": "http://example.com/swagger#!/info/v1", "rel": "help"},
            {
                "href": "http://example.com/v1/health",
                "rel": "http://example.com/swagger#!/info/health",
            },
            {
                "href": "http://example.com/v1/packs",
                "rel": "http://example.com/swagger#!/pack/listPacks",
            },
            {
                "href": "http://example.com/v1/flows",
                "rel": "http://example.com/swagger#!/flow/listFlows",
            },
            {
                "href": "http://example.com/v1/datastore",
                "rel": "http://example.com/swagger#!/datastore/listDataItems",
            },
            {
                "href": "http://example.com/v1/audit/flows",
                "rel": "http://example.com/swagger#!/audit/findFlows",
            },
            {"href": "http://example.com/v1/swagger", "rel": "http://example.com/swagger"},
        ]
    }


@pytest.fixture
def links_payload() -> dict[str, Any]:
    return sample_links_payload()


@pytest.fixture
def no_links_payload() -> dict[str, Any]:
    return {"links": []}


@pytest.fixture
def error_response_body() -> str:
    return ERROR_RESPONSE_BODY
