"""Pytest configuration and fixtures."""

import httpx
import pytest
from fastapi.testclient import TestClient

from fake_server import app
from loklak import Loklak

BASE_URL = "http://loklak.test"


@pytest.fixture
def http():
    """In-process HTTP client wired to the fake loklak server."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def lk(http):
    """Client pointed at the fake server."""
    return Loklak(BASE_URL, http=http)


@pytest.fixture
def unreachable():
    """httpx client whose every request fails to connect."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client
