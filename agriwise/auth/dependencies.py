"""Authentication dependencies for the chat and weather proxies."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from fastapi import HTTPException, Request
from fastapi.security import HTTPBearer

from agriwise.auth.jwt import AuthError, decode_token

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(slots=True)
class AuthPrincipal:
	subject: str


def _raise_auth(exc: AuthError) -> HTTPException:
	return HTTPException(
		status_code=exc.status_code,
		detail={"error": exc.code, "message": exc.detail},
	)


def extract_client_identity(request: Request) -> str:
	"""Stable rate-limit identity: a digest of the bearer token, else the client address."""
	auth_header = request.headers.get("authorization", "")
	if auth_header.lower().startswith("bearer "):
		token = auth_header[len("bearer "):].strip()
		return "token:" + hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
	host = request.client.host if request.client is not None else "unknown"
	return f"ip:{host}"


async def require_bearer(request: Request) -> AuthPrincipal:
	credentials = await bearer_scheme(request)
	if credentials is None or credentials.scheme.lower() != "bearer":
		raise _raise_auth(AuthError(code="auth_required", detail="Bearer token is required"))
	try:
		payload = decode_token(credentials.credentials)
	except AuthError as exc:
		raise _raise_auth(exc) from exc
	return AuthPrincipal(subject=str(payload["sub"]))
