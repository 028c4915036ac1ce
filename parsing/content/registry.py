"""Mapping from dump language codes to content extractors."""
from typing import Dict, Type

from classification.quote_scorer import QuoteScorer
from parsing.content.content_extractor import ContentExtractor
from parsing.content.czech import CzechExtractor
from parsing.content.english import EnglishExtractor


class UnsupportedLanguageError(Exception):
    """Raised when a dump language has no extractor or no language record."""
    pass


CONTENT_EXTRACTORS: Dict[str, Type[ContentExtractor]] = {
    CzechExtractor.language_code: CzechExtractor,
    EnglishExtractor.language_code: EnglishExtractor,
}


def get_content_extractor(language_code: str, quote_scorer: QuoteScorer) -> ContentExtractor:
    """Create the extractor for a dump language.

    Args:
        language_code: Two-letter language code of the dump
        quote_scorer: Scorer the extractor uses for candidates

    Returns:
        Content extractor instance

    Raises:
        UnsupportedLanguageError: If there is no extractor for the language
    """
    try:
        extractor_class = CONTENT_EXTRACTORS[language_code]
    except KeyError:
        supported = ", ".join(sorted(CONTENT_EXTRACTORS))
        raise UnsupportedLanguageError(
            f"No content extractor for language '{language_code}' (supported: {supported})"
        ) from None

    return extractor_class(quote_scorer)
