"""Gemini text generation provider."""
import logging

import httpx

from stock_portfolio.providers.ai.gemini.models import (GeminiRequest,
                                                        GeminiResponse)
from stock_portfolio.providers.core import ProviderError, ProviderNotConfigured

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Sends a single prompt to Gemini's generateContent and returns the text.

    The API key goes in the ``key`` query parameter. Prompt wording and reply
    post-processing belong to the insights service, not here.
    """

    name = "gemini"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: str | None,
        model: str = "gemini-2.0-flash",
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = httpx.AsyncClient(base_url=self.BASE_URL, timeout=timeout)

    async def generate(self, prompt: str) -> str:
        """Return the model's reply text (stripped); '' if it produced none."""
        if not self._api_key:
            raise ProviderNotConfigured("Gemini API")
        response = await self._client.post(
            f"/models/{self._model}:generateContent",
            params={"key": self._api_key},
            json=GeminiRequest.from_prompt(prompt).model_dump(),
        )
        response.raise_for_status()
        try:
            reply = GeminiResponse.model_validate(response.json())
        except ValueError as exc:
            raise ProviderError("Invalid response from Gemini API", status_code=502) from exc
        text = reply.first_text().strip()
        logger.debug("Gemini replied with %d characters", len(text))
        return text

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
