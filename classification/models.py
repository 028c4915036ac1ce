"""Pydantic models for LLM classification responses."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ClassificationResult(BaseModel):
    """Decision whether a page title is a human name."""
    model_config = ConfigDict(populate_by_name=True)

    is_human: bool = Field(alias="isHuman")
    english_name: Optional[str] = Field(default=None, alias="englishName")


class ScoreResult(BaseModel):
    """Raw quote score returned by the model."""
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0, le=100)
    clean_quote: Optional[str] = Field(default=None, alias="cleanQuote")


class ParsedQuote(BaseModel):
    """Scored and cleaned quote candidate.

    ``clean_quote`` is meaningful only when the score passes the threshold.
    """
    score: int = 0
    clean_quote: Optional[str] = None
