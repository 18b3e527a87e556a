"""Dealer commentary generated by any LLM via litellm."""

import asyncio
import time
from typing import Any, Protocol

import litellm

from teen_patti.agents.prompts import (
    DEALER_SYSTEM_PROMPT,
    EMPTY_RESPONSE_FALLBACK,
    ERROR_FALLBACK,
    build_commentary_prompt,
)
from teen_patti.config import settings
from teen_patti.engine.game_state import GameStage, Seat
from teen_patti.observability import get_logger

logger = get_logger(__name__)


class CommentaryService(Protocol):
    """Anything that can produce a line of table talk."""

    async def generate_commentary(
        self,
        stage: GameStage,
        pot_total: int,
        seat: Seat,
        last_action: str | None = None,
    ) -> str:
        ...


class DealerCommentator:
    """Table host backed by an LLM. Never raises; falls back to canned lines."""

    def __init__(
        self,
        model: str | None = None,
        system_prompt: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
    ):
        """
        Initialize the commentator.

        Args:
            model: LiteLLM model string (e.g., "gemini/gemini-1.5-flash")
            system_prompt: Custom persona prompt (uses default if not provided)
            temperature: LLM temperature (default from settings)
            timeout: Request timeout in seconds (default from settings)
            max_retries: Max retries on transient failures (default from settings)
        """
        self.model = model or settings.commentary_model
        self.system_prompt = system_prompt or DEALER_SYSTEM_PROMPT
        self.temperature = temperature if temperature is not None else settings.llm_temperature
        self.timeout = timeout or settings.llm_timeout
        self.max_retries = max_retries if max_retries is not None else settings.llm_retries

        # Cumulative stats
        self.total_calls = 0
        self.failures = 0
        self.total_latency_ms = 0

    async def generate_commentary(
        self,
        stage: GameStage,
        pot_total: int,
        seat: Seat,
        last_action: str | None = None,
    ) -> str:
        """
        Ask the LLM for a one or two sentence remark about the table.

        Args:
            stage: Current game stage
            pot_total: Coins in the pot after the action
            seat: The seat that just acted
            last_action: Description of the action, e.g. "played blind"

        Returns:
            Commentary text, or a fixed fallback line on any failure
        """
        start_time = time.time()
        self.total_calls += 1

        messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": build_commentary_prompt(
                stage=GameStage(stage).value,
                pot_total=pot_total,
                seat_name=seat.name,
                seat_coins=seat.coins,
                is_seen=seat.is_seen,
                last_action=last_action,
            )},
        ]

        try:
            response = await asyncio.wait_for(
                self._call_llm(messages),
                timeout=self.timeout,
            )
            text = self._extract_text(response)
        except Exception as e:
            self.failures += 1
            logger.warning(
                "Commentary call failed",
                extra={"extra_fields": {"model": self.model, "error": repr(e)}},
            )
            return ERROR_FALLBACK
        finally:
            self.total_latency_ms += int((time.time() - start_time) * 1000)

        return text or EMPTY_RESPONSE_FALLBACK

    async def _call_llm(self, messages: list[dict]) -> Any:
        """Make an LLM completion call."""
        return await litellm.acompletion(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            timeout=self.timeout,
            num_retries=self.max_retries,
        )

    def _extract_text(self, response: Any) -> str:
        """Pull the message text out of a completion response."""
        if not getattr(response, "choices", None):
            return ""
        content = response.choices[0].message.content or ""
        return content.strip()

    def get_stats(self) -> dict:
        """Get cumulative statistics for this commentator."""
        return {
            "model": self.model,
            "total_calls": self.total_calls,
            "failures": self.failures,
            "avg_latency_ms": (
                self.total_latency_ms // self.total_calls
                if self.total_calls > 0 else 0
            ),
        }
