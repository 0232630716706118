"""Redis-backed rate limiting middleware for the upstream proxies."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from agriwise.auth.dependencies import extract_client_identity
from agriwise.config import get_settings

LIMITED_PREFIXES = ("/api/v1/chat", "/api/v1/weather")


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Per-client, per-minute quota on routes that spend third-party capacity."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		if not self._is_limited_path(request.url.path):
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		settings = get_settings()
		quota = settings.rate_limit_proxy_per_minute
		identity = extract_client_identity(request)
		minute_bucket = datetime.now(UTC).strftime("%Y%m%d%H%M")
		key = f"ratelimit:proxy:{identity}:{minute_bucket}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, 65)

		if current > quota:
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": "Rate limit exceeded. Please try again in a moment.",
						"quota": quota,
					}
				},
			)

		return await call_next(request)

	@staticmethod
	def _is_limited_path(path: str) -> bool:
		return path.startswith(LIMITED_PREFIXES)
