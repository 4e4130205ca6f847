from __future__ import annotations

from .base import GenerationClient
from .gemini_developer import GeminiDeveloperClient
from .mock import MockGenerationClient


def create_client(provider: str) -> GenerationClient:
    if provider == "mock":
        return MockGenerationClient()
    if provider == "real":
        return GeminiDeveloperClient()

    raise ValueError(f"Unknown provider mode: {provider}")
