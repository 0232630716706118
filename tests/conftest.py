"""Shared pytest fixtures — async test client, bearer tokens, Redis and upstream fakes."""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from agriwise.auth.jwt import create_access_token
from agriwise.main import app


class FakeRedis:
	def __init__(self) -> None:
		self._counter: dict[str, int] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)
		self.aclose = AsyncMock()

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	def reset_counters(self) -> None:
		self._counter.clear()


def _sse_body(*fragments: str, done: bool = True) -> bytes:
	lines = [
		"data: " + json.dumps({"choices": [{"delta": {"content": fragment}}]})
		for fragment in fragments
	]
	if done:
		lines.append("data: [DONE]")
	return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def sse_body() -> Callable[..., bytes]:
	"""Builder for gateway-style SSE payloads carrying the given delta contents."""
	return _sse_body


@pytest.fixture
def fake_redis() -> FakeRedis:
	"""Reusable fake Redis client with async atomic counters."""
	return FakeRedis()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and no Redis attached."""
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan
	app.state.redis = None

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.state.redis = None


@pytest.fixture
def access_token() -> str:
	return create_access_token("farmer-demo", expires_minutes=30)


@pytest.fixture
def auth_headers(access_token: str) -> dict[str, str]:
	return {"Authorization": f"Bearer {access_token}"}

