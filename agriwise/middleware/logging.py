"""Structured logging setup and per-request access logs."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from agriwise.config import LogFormat, get_settings

REQUEST_ID_HEADER = "x-request-id"
QUIET_PATHS = frozenset({"/health"})

_configured = False


def configure_structured_logging(*, force: bool = False) -> None:
	"""Configure stdlib + structlog once per process (``force`` re-applies settings)."""
	global _configured
	if _configured and not force:
		return

	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
		structlog.processors.format_exc_info,
	]
	if settings.log_format == LogFormat.json:
		processors.append(structlog.processors.JSONRenderer())
		logging.basicConfig(level=log_level, format="%(message)s", force=force)
	else:
		processors.append(structlog.dev.ConsoleRenderer())
		logging.basicConfig(level=log_level, force=force)

	structlog.configure(
		processors=processors,
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=not force,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind a request id to every log line and emit one access log per request."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			method=request.method,
			path=request.url.path,
		)
		logger = structlog.get_logger("agriwise.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				duration_ms=_elapsed_ms(start),
				error=str(exc),
			)
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		if request.url.path not in QUIET_PATHS:
			log = logger.warning if response.status_code >= 500 else logger.info
			log(
				"http_request",
				status_code=response.status_code,
				duration_ms=_elapsed_ms(start),
			)
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)
