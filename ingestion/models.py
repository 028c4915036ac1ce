"""Pydantic models for the dump ingestion module."""
from pydantic import BaseModel, Field
from typing import List


class Page(BaseModel):
    """A single page of a wiki dump (only the parts the pipeline needs)."""
    title: str
    is_redirect: bool = False
    raw_content: str = ""  # Original MediaWiki markup


class Dump(BaseModel):
    """Decoded wiki dump, pages kept in document order."""
    language_code: str = Field(min_length=2, max_length=2)
    site_name: str
    pages: List[Page] = Field(default_factory=list)
