"""
Retry wrapper for a single generation call.

Only server-side failures are retried: a ``TransientServiceError`` or any error
whose message carries the internal-error signature (``500`` / ``INTERNAL``).
Waits grow as ``base_delay * 2 ** (attempt - 1)``, i.e. 1s then 2s with the
defaults.  Everything else is re-raised untouched on the first attempt.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Awaitable, Callable

from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_exponential

from ad_campaign_cli.exceptions import TransientServiceError
from ad_campaign_cli.models.parts import GenerationRequest
from ad_campaign_cli.providers.base import GenerationClient, ModelOutput

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3
BASE_DELAY_SECONDS = 1.0

_INTERNAL_ERROR_RE = re.compile(r"\b500\b|\binternal\b", re.IGNORECASE)

Sleep = Callable[[float], Awaitable[None]]


def is_transient_error(exc: BaseException) -> bool:
    if isinstance(exc, TransientServiceError):
        return True
    return bool(_INTERNAL_ERROR_RE.search(str(exc)))


def _log_attempt(model: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def before(retry_state: RetryCallState) -> None:
        logger.debug("Calling model %s (attempt %d/%d)", model, retry_state.attempt_number, max_attempts)

    return before


def _log_retry(model: str, max_attempts: int) -> Callable[[RetryCallState], None]:
    def before_sleep(retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Transient error from %s (attempt %d/%d), retrying in %.1fs: %s",
            model,
            retry_state.attempt_number,
            max_attempts,
            delay,
            exc,
        )

    return before_sleep


async def invoke_with_retry(
    client: GenerationClient,
    model: str,
    request: GenerationRequest,
    *,
    web_search: bool = False,
    max_attempts: int = MAX_ATTEMPTS,
    base_delay: float = BASE_DELAY_SECONDS,
    sleep: Sleep = asyncio.sleep,
) -> ModelOutput:
    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        retry=retry_if_exception(is_transient_error),
        before=_log_attempt(model, max_attempts),
        before_sleep=_log_retry(model, max_attempts),
        sleep=sleep,
        reraise=True,
    )
    return await retrying(client.generate_content, model, request, web_search=web_search)
