"""Shared dependencies for API routes."""

from fastapi import Request

from services.providers.base import AIProvider
from services.speech import ElevenLabsClient


def get_ai_provider(request: Request) -> AIProvider:
    return request.app.state.ai_provider


def get_speech_client(request: Request) -> ElevenLabsClient:
    return request.app.state.speech_client
