"""
Shared pytest fixtures for the tron-node test suite.
"""

from __future__ import annotations

import os
from typing import Any

import pytest

from core.domain.errors import UpstreamApiError
from core.domain.models import Credentials, OperationRequest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """No TRON_NODE_* variables or project .env leak into tests."""
    for key in list(os.environ):
        if key.startswith("TRON_NODE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def credentials():
    return Credentials(base_url="https://api.trongrid.io", api_key="test-api-key")


class RecordingTransport:
    """Fake transport: records requests, replays responses or raises per call."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        self.requests: list[OperationRequest] = []
        self._responses = list(responses or [])

    async def send(self, request: OperationRequest) -> Any:
        self.requests.append(request)
        outcome = self._responses.pop(0) if self._responses else {"ok": True}
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def upstream_error():
    return UpstreamApiError("API Error", status_code=500)
