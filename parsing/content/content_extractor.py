"""Base class for per-language wiki page content extractors."""
import abc
from typing import List, Tuple

from utils.logger import setup_logger
from classification.quote_scorer import QuoteScorer
from parsing.content import wikitext
from storage.models import Author, Language, Quote
import config

logger = setup_logger(__name__)


class ContentExtractor(abc.ABC):
    """Finds quote candidates on a wiki page and keeps the ones that score well."""

    language_code: str = ""

    def __init__(
        self,
        quote_scorer: QuoteScorer,
        score_threshold: int = config.QUOTE_SCORE_THRESHOLD,
        max_quote_length: int = config.MAX_QUOTE_LENGTH,
        max_candidate_length: int = config.MAX_CANDIDATE_LENGTH
    ):
        self.quote_scorer = quote_scorer
        self.score_threshold = score_threshold
        self.max_quote_length = max_quote_length
        self.max_candidate_length = max_candidate_length

    @property
    @abc.abstractmethod
    def forbidden_prefixes(self) -> Tuple[str, ...]:
        """Namespace/administrative title prefixes of pages without quotes"""
        pass

    @property
    @abc.abstractmethod
    def quote_section_titles(self) -> Tuple[str, ...]:
        """Headings of sections that hold quotations"""
        pass

    def is_forbidden_page_name(self, title: str) -> bool:
        """Check whether the page belongs to a namespace that is never parsed.

        Args:
            title: Page title

        Returns:
            True if the title starts with a forbidden prefix
        """
        folded = title.strip().casefold()
        return any(folded.startswith(prefix.casefold()) for prefix in self.forbidden_prefixes)

    def find_candidates(self, raw_content: str) -> List[str]:
        """Extract plaintext quote candidates from the quotation section(s).

        Args:
            raw_content: Page content in MediaWiki format

        Returns:
            Non-empty candidates in page order (empty if there is no such section)
        """
        candidates = []
        for body in wikitext.section_bodies(raw_content, self.quote_section_titles):
            for item in wikitext.top_level_list_items(body):
                candidate = self.clean_candidate(item)
                if candidate:
                    candidates.append(candidate)
        return candidates

    def clean_candidate(self, item: str) -> str:
        """Turn one list item into a plaintext candidate.

        Args:
            item: List item markup without the list marker

        Returns:
            Candidate text (may be empty)
        """
        text = wikitext.to_plaintext(item)
        text = wikitext.strip_trailing_annotations(text)
        text = wikitext.strip_enclosing_quotes(text)
        return wikitext.strip_trailing_annotations(text)

    def extract(self, page_url: str, raw_content: str, author: Author, language: Language) -> List[Quote]:
        """Parse the page content and return the accepted quotes.

        Args:
            page_url: URL of the page (stored as the quote source)
            raw_content: Page content in MediaWiki format
            author: Author the page is about
            language: Language of the page

        Returns:
            Quotes that passed scoring

        Raises:
            ClassificationError: If scoring a candidate fails on every attempt
        """
        quotes = []

        for candidate in self.find_candidates(raw_content):
            if len(candidate) > self.max_candidate_length:
                logger.debug(f"Skipping candidate of {len(candidate)} characters by {author.english_full_name}")
                continue

            parsed = self.quote_scorer.score(author.english_full_name, candidate)

            if parsed.score <= self.score_threshold:
                continue
            if not parsed.clean_quote or len(parsed.clean_quote) > self.max_quote_length:
                continue

            quotes.append(Quote(
                text=parsed.clean_quote,
                source=page_url,
                score=parsed.score,
                author_id=author.id,
                language_abbreviation=language.abbreviation
            ))

        return quotes
