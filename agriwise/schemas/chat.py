"""Pydantic schemas for the AI chat proxy."""

from __future__ import annotations

from pydantic import BaseModel, Field

from agriwise.models.enums import ChatRole

# Mirrors the chat_max_* settings defaults; the service re-checks against settings.
MAX_CONTENT_CHARS = 4000
MAX_MESSAGES = 50


class ChatMessage(BaseModel):
	role: ChatRole
	content: str = Field(min_length=1, max_length=MAX_CONTENT_CHARS)


class ChatRequest(BaseModel):
	messages: list[ChatMessage] = Field(min_length=1, max_length=MAX_MESSAGES)


class ChatCompletion(BaseModel):
	content: str
