"""AI chat proxy — forwards the conversation to an OpenAI-compatible gateway.

The gateway answers with server-sent events::

    data: {"choices": [{"delta": {"content": "Rot"}}]}
    data: {"choices": [{"delta": {"content": "ate crops"}}]}
    data: [DONE]

``open_stream`` hands those bytes back (content-decoded) so the browser can render
tokens as they arrive; ``complete`` drains the same stream server-side and
returns the concatenated text for clients that cannot consume SSE.
"""

from __future__ import annotations

import codecs
import json
from collections.abc import AsyncIterator, Iterable
from typing import Any

import httpx
import structlog

from agriwise.config import get_settings
from agriwise.schemas.chat import ChatCompletion, ChatMessage
from agriwise.services.errors import UpstreamError, UpstreamQuotaExceeded, UpstreamRateLimited

logger = structlog.get_logger("agriwise.chat")

SYSTEM_PROMPT = """You are AgriWise, a friendly and knowledgeable AI agricultural assistant. Your role is to help farmers and agricultural enthusiasts with:

1. **Crop Selection**: Recommend suitable crops based on soil type, climate, and water availability
2. **Soil Management**: Provide guidance on soil health, fertilization, and amendments
3. **Water Management**: Advise on irrigation techniques, water conservation, and drought-resistant practices
4. **Pest Control**: Help identify and manage common pests using integrated pest management (IPM)
5. **Sustainable Practices**: Promote eco-friendly farming methods aligned with SDG 2 (Zero Hunger)
6. **Crop Rotation**: Explain benefits and suggest rotation schedules
7. **Seasonal Planning**: Guide on planting and harvesting timing

Guidelines for your responses:
- Keep answers clear, practical, and easy to understand
- Use bullet points and formatting for readability
- Provide actionable advice farmers can implement
- When discussing specific crops, mention: soil requirements, water needs, growing season, and sustainability tips
- Always be encouraging and supportive
- If asked about topics outside agriculture, politely redirect to farming-related topics
- Never make guarantees about yields or income - emphasize that outcomes depend on many factors
- Recommend consulting local agricultural extension services for region-specific advice

Remember: You are advisory, not prescriptive. Farmers make the final decisions."""

STREAM_DONE = "[DONE]"


def iter_delta_content(lines: Iterable[str]) -> Iterable[str]:
	"""Yield ``choices[0].delta.content`` fragments from SSE lines, stopping at ``[DONE]``.

	Comment lines, blank keep-alives and chunks that fail to parse are skipped.
	"""
	for raw in lines:
		line = raw.rstrip("\r")
		if not line.startswith("data: "):
			continue
		data = line[len("data: "):].strip()
		if data == STREAM_DONE:
			return
		try:
			chunk = json.loads(data)
		except json.JSONDecodeError:
			continue
		content = _delta_content(chunk)
		if content:
			yield content


def _delta_content(chunk: Any) -> str | None:
	if not isinstance(chunk, dict):
		return None
	choices = chunk.get("choices")
	if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
		return None
	delta = choices[0].get("delta")
	if not isinstance(delta, dict):
		return None
	content = delta.get("content")
	return content if isinstance(content, str) else None


class ChatService:
	def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
		self.settings = get_settings()
		self.transport = transport

	def build_payload(self, messages: list[ChatMessage]) -> dict[str, Any]:
		if len(messages) > self.settings.chat_max_messages:
			raise ValueError(f"at most {self.settings.chat_max_messages} messages are allowed")
		for message in messages:
			if len(message.content) > self.settings.chat_max_content_chars:
				raise ValueError(
					f"message content exceeds {self.settings.chat_max_content_chars} characters"
				)

		return {
			"model": self.settings.chat_model,
			"messages": [
				{"role": "system", "content": SYSTEM_PROMPT},
				*({"role": m.role.value, "content": m.content} for m in messages),
			],
			"stream": True,
		}

	async def open_stream(self, messages: list[ChatMessage]) -> AsyncIterator[bytes]:
		"""Start the upstream completion and return an iterator over its raw SSE bytes.

		Upstream status is checked before anything is returned, so failures still
		surface as regular HTTP errors rather than a broken stream.
		"""
		payload = self.build_payload(messages)
		if not self.settings.chat_gateway_api_key:
			raise UpstreamError("chat gateway API key is not configured")

		client = httpx.AsyncClient(timeout=self.settings.chat_timeout_seconds, transport=self.transport)
		headers = {
			"Authorization": f"Bearer {self.settings.chat_gateway_api_key}",
			"Content-Type": "application/json",
		}
		try:
			request = client.build_request("POST", self.settings.chat_gateway_url, headers=headers, json=payload)
			response = await client.send(request, stream=True)
		except httpx.HTTPError as exc:
			await client.aclose()
			logger.error("chat_upstream_unreachable", error=str(exc))
			raise UpstreamError("Failed to get AI response. Please try again.") from exc

		if response.status_code != 200:
			body = await response.aread()
			await response.aclose()
			await client.aclose()
			raise self._map_status(response.status_code, body)

		async def relay() -> AsyncIterator[bytes]:
			try:
				async for chunk in response.aiter_bytes():
					yield chunk
			finally:
				await response.aclose()
				await client.aclose()

		return relay()

	async def complete(self, messages: list[ChatMessage]) -> ChatCompletion:
		stream = await self.open_stream(messages)
		decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
		buffer = ""
		fragments: list[str] = []
		async for chunk in stream:
			buffer += decoder.decode(chunk)
			*lines, buffer = buffer.split("\n")
			fragments.extend(iter_delta_content(lines))
		buffer += decoder.decode(b"", final=True)
		if buffer:
			fragments.extend(iter_delta_content([buffer]))
		return ChatCompletion(content="".join(fragments))

	@staticmethod
	def _map_status(status_code: int, body: bytes) -> UpstreamError:
		if status_code == 429:
			return UpstreamRateLimited()
		if status_code == 402:
			return UpstreamQuotaExceeded()
		logger.error(
			"chat_upstream_error",
			status_code=status_code,
			body=body.decode("utf-8", errors="replace")[:500],
		)
		return UpstreamError("Failed to get AI response. Please try again.")
