"""Gemini provider (text generation)."""
from stock_portfolio.providers.ai.gemini.gemini_provider import GeminiProvider

__all__ = ["GeminiProvider"]
