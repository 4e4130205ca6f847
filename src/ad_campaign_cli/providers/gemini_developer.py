from __future__ import annotations

import os

from ad_campaign_cli.exceptions import ConfigurationError, ProviderGenerationError, TransientServiceError
from ad_campaign_cli.models.parts import GenerationRequest, InlineImagePart

from .base import GenerationClient, ModelOutput
from .extractor import extract_model_output


class GeminiDeveloperClient(GenerationClient):
    name = "gemini"

    def __init__(self, api_key_env: str = "GEMINI_API_KEY"):
        self.api_key = os.getenv(api_key_env)
        if not self.api_key:
            raise ConfigurationError(f"Missing API key environment variable: {api_key_env}")

        try:
            from google import genai  # type: ignore
            from google.genai import errors, types  # type: ignore
        except ImportError as exc:
            raise RuntimeError("Real provider mode requires dependency: google-genai") from exc

        self._errors = errors
        self._types = types
        self._client = genai.Client(api_key=self.api_key)

    def _to_sdk_parts(self, request: GenerationRequest) -> list:
        sdk_parts = []
        for part in request.parts:
            if isinstance(part, InlineImagePart):
                sdk_parts.append(self._types.Part.from_bytes(data=part.data, mime_type=part.mime_type))
            else:
                sdk_parts.append(self._types.Part.from_text(text=part.text))
        return sdk_parts

    def _build_config(self, request: GenerationRequest, web_search: bool):
        if web_search:
            return self._types.GenerateContentConfig(
                tools=[self._types.Tool(google_search=self._types.GoogleSearch())],
            )
        if request.image_parts:
            return self._types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"])
        return None

    async def generate_content(
        self,
        model: str,
        request: GenerationRequest,
        *,
        web_search: bool = False,
    ) -> ModelOutput:
        try:
            response = await self._client.aio.models.generate_content(
                model=model,
                contents=self._to_sdk_parts(request),
                config=self._build_config(request, web_search),
            )
        except self._errors.ServerError as exc:
            raise TransientServiceError(f"Gemini API server error for model '{model}': {exc}") from exc
        except Exception as exc:
            raise ProviderGenerationError(
                f"Gemini API call failed for model '{model}': {exc}. "
                "Check your GEMINI_API_KEY, network connectivity, and that the model name is correct."
            ) from exc

        return extract_model_output(response)
