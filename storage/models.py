"""Pydantic models for stored domain records."""
from pydantic import BaseModel, Field
from typing import Optional


class Language(BaseModel):
    """Natural language of a wiki dump (e.g. "cs" for Czech)."""
    abbreviation: str = Field(min_length=2, max_length=2)
    english_name: str
    native_name: str


class Author(BaseModel):
    """Author of quotes, identified by the canonical English name."""
    id: int
    english_full_name: str


class TranslatedAuthorName(BaseModel):
    """Author's name as written in one language's wiki."""
    author_id: int
    language_abbreviation: str = Field(min_length=2, max_length=2)
    full_name: str


class Quote(BaseModel):
    """Accepted quote, immutable once stored."""
    id: Optional[int] = None
    text: str = Field(min_length=1, max_length=1000)
    source: str  # URL of the wiki page the quote was taken from (license)
    score: int = Field(ge=0, le=100)
    author_id: int
    language_abbreviation: str = Field(min_length=2, max_length=2)
