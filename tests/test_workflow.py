"""Tests for the GitHub workflow dispatcher."""

import json

import httpx
import pytest

from app.config import Settings
from app.services.workflow import (
    MissingCredentialsError,
    WorkflowDispatchError,
    WorkflowDispatcher,
)


def _settings(**overrides: str) -> Settings:
    values = {
        "github_token": "secret",
        "github_owner": "someone",
        "github_repo": "lunch-menus",
    }
    values.update(overrides)
    return Settings(**values)


async def test_dispatch_posts_workflow_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        await WorkflowDispatcher(_settings(), client=client).dispatch()

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == (
        "https://api.github.com/repos/someone/lunch-menus"
        "/actions/workflows/manual-scrape.yml/dispatches"
    )
    assert request.headers["authorization"] == "Bearer secret"
    assert json.loads(request.content) == {"ref": "master", "inputs": {"restaurant": ""}}


async def test_dispatch_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "Unexpected inputs"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(WorkflowDispatchError) as exc_info:
            await WorkflowDispatcher(_settings(), client=client).dispatch()
    assert exc_info.value.status_code == 422


async def test_dispatch_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(WorkflowDispatchError):
            await WorkflowDispatcher(_settings(), client=client).dispatch()


async def test_dispatch_without_token() -> None:
    with pytest.raises(MissingCredentialsError):
        await WorkflowDispatcher(_settings(github_token="")).dispatch()
