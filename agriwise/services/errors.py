"""Failure classes raised by the upstream proxies and mapped to HTTP at the edge."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class UpstreamError(Exception):
	"""Generic upstream or internal failure (HTTP 500)."""

	detail: str
	code: str = "upstream_failure"
	status_code: int = 500


@dataclass(slots=True)
class UpstreamRateLimited(UpstreamError):
	detail: str = "Rate limit exceeded. Please try again in a moment."
	code: str = "rate_limited"
	status_code: int = 429


@dataclass(slots=True)
class UpstreamQuotaExceeded(UpstreamError):
	detail: str = "AI service quota exceeded. Please try again later."
	code: str = "quota_exceeded"
	status_code: int = 402
