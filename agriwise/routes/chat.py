"""AI chat proxy route."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from agriwise.auth.dependencies import AuthPrincipal, require_bearer
from agriwise.schemas.chat import ChatCompletion, ChatRequest
from agriwise.services.chat_service import ChatService
from agriwise.services.errors import UpstreamError

router = APIRouter(prefix="/chat", tags=["chat"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, UpstreamError):
		return HTTPException(status_code=exc.status_code, detail={"error": exc.code, "message": exc.detail})
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": "invalid_request", "message": str(exc)})
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail={"error": "internal", "message": "Unknown error occurred"},
	)


@router.post(
	"",
	response_model=ChatCompletion,
	responses={200: {"content": {"text/event-stream": {}}}},
)
async def chat(
	payload: ChatRequest,
	stream: bool = Query(default=True),
	_principal: AuthPrincipal = Depends(require_bearer),
):
	service = ChatService()
	try:
		if not stream:
			return await service.complete(payload.messages)
		body = await service.open_stream(payload.messages)
	except Exception as exc:
		raise _map_error(exc) from exc
	return StreamingResponse(body, media_type="text/event-stream")
