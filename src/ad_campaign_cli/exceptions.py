"""
Domain-specific exceptions for the ad campaign generator.

Catching these at the CLI entry point allows clean exit codes and targeted error
messages.  All exceptions inherit from ``AdCampaignError`` so callers can also
use a single broad catch when needed.
"""

from __future__ import annotations


class AdCampaignError(Exception):
    """Base exception for all generation errors."""


class InvalidImageFormatError(AdCampaignError):
    """Raised when an image is not a ``data:image/<subtype>;base64,<payload>`` URL."""


class UnknownStyleError(AdCampaignError):
    """Raised when a style name has no entry in the prompt catalog."""


class NoImageReturnedError(AdCampaignError):
    """Raised when the model answered with text instead of an image.

    Attributes
    ----------
    text:
        Whatever text the model returned (may be empty).
    """

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class TransientServiceError(AdCampaignError):
    """Raised for server-side failures that are worth retrying."""


class ProviderGenerationError(AdCampaignError):
    """Raised when a GenAI backend call fails for a non-transient reason."""


class ResearchFailedError(AdCampaignError):
    """Raised when the research phase cannot produce creative prompts."""


class InsufficientConceptsError(ResearchFailedError):
    """Raised when the research reply contains fewer prompts than requested."""

    def __init__(self, message: str, found: int = 0) -> None:
        super().__init__(message)
        self.found = found


class GenerationFailedError(AdCampaignError):
    """Raised when image generation ends without an image.

    Attributes
    ----------
    causes:
        Upstream failures in the order they happened (the fallback failure, if
        any, comes last).
    """

    def __init__(self, message: str, causes: list[BaseException] | None = None) -> None:
        super().__init__(message)
        self.causes: list[BaseException] = causes or []


class CampaignStateError(AdCampaignError):
    """Raised when a campaign item is moved out of a terminal state."""


class ConfigurationError(AdCampaignError):
    """Raised when required configuration (env vars, brief files) is missing."""
