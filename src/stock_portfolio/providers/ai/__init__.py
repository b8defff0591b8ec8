"""Generative-language providers."""
from stock_portfolio.providers.ai.gemini import GeminiProvider

__all__ = ["GeminiProvider"]
