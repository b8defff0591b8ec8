"""Models for the Gemini generateContent API."""
from pydantic import BaseModel, Field


class GeminiPart(BaseModel):
    text: str = ""


class GeminiContent(BaseModel):
    parts: list[GeminiPart] = Field(default_factory=list)


class GeminiRequest(BaseModel):
    """Body for :generateContent with a single user prompt."""

    contents: list[GeminiContent]

    @classmethod
    def from_prompt(cls, prompt: str) -> "GeminiRequest":
        return cls(contents=[GeminiContent(parts=[GeminiPart(text=prompt)])])


class GeminiCandidate(BaseModel):
    content: GeminiContent | None = None


class GeminiResponse(BaseModel):
    candidates: list[GeminiCandidate] = Field(default_factory=list)

    def first_text(self) -> str:
        """Text of the first part of the first candidate, or ''."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        parts = self.candidates[0].content.parts
        return parts[0].text if parts else ""
