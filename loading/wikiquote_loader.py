"""Loads quotes from a Wikiquote dump into the database."""
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel

from utils.logger import setup_logger
from classification.author_classifier import AuthorClassifier
from classification.quote_scorer import QuoteScorer
from ingestion.dump_reader import DumpReader
from ingestion.models import Page
from loading.checkpoint import CheckpointError, CheckpointStore
from parsing.content.content_extractor import ContentExtractor
from parsing.content.registry import UnsupportedLanguageError, get_content_extractor
from storage.database import Database
from storage.models import Author, Language, Quote
import config

logger = setup_logger(__name__)


class PageSkipped(Exception):
    """Signals a page with nothing to load. Handled per page, never fatal."""
    pass


class LoadReport(BaseModel):
    """Summary of one loading run."""
    dump_path: str
    language: Optional[str] = None
    pages_total: int = 0
    pages_processed: int = 0
    pages_skipped: int = 0
    quotes_saved: int = 0
    resumed_from: Optional[str] = None
    skipped_as_done: bool = False


def build_page_url(language: Language, title: str) -> str:
    """URL of a wiki page, stored as the source of its quotes.

    Args:
        language: Language of the wiki
        title: Page title

    Returns:
        Page URL
    """
    safe_title = quote(title.replace(" ", "_"), safe="/:@")
    return config.WIKIQUOTE_URL_TEMPLATE.format(language=language.abbreviation, title=safe_title)


class WikiquoteLoader:
    """Drives the ingestion of one dump: resume, classify, extract, persist.

    A dump with a ``.done`` marker is never processed again. On failure the
    title of the page being processed is written to a ``.checkpoint``
    sidecar and the next run starts again *at* that page.
    """

    def __init__(
        self,
        database: Database,
        author_classifier: AuthorClassifier,
        quote_scorer: QuoteScorer,
        dump_reader: Optional[DumpReader] = None
    ):
        """Initialize loader.

        Args:
            database: Persistence gateway
            author_classifier: Decides whether page titles are human names
            quote_scorer: Scores quote candidates
            dump_reader: Dump decoder
        """
        self.database = database
        self.author_classifier = author_classifier
        self.quote_scorer = quote_scorer
        self.dump_reader = dump_reader or DumpReader()

    def load_quotes_from_dump(self, path) -> LoadReport:
        """Load quotes from a wiki dump file into the database.

        Args:
            path: Path to the wiki dump file

        Returns:
            LoadReport of the run

        Raises:
            DumpReadError: If the dump cannot be read
            DumpFormatError: If the dump misses required structure
            CheckpointError: If the checkpoint cannot be read or its page is missing
            StaleCheckpointError: If the dump changed since the checkpoint
            UnsupportedLanguageError: If the dump language is not supported
            ClassificationError: If the language model fails on every attempt
        """
        dump_path = Path(path).resolve()
        store = CheckpointStore(dump_path)
        report = LoadReport(dump_path=str(dump_path))

        if store.is_done():
            logger.warning(f"Wiki dump {dump_path} was already processed. Skipping...")
            report.skipped_as_done = True
            return report

        logger.info(f"Loading quotes from wiki dump {dump_path}... This may take a while")

        checkpoint = store.load()
        dump_checksum = None
        if checkpoint is not None:
            logger.info(f"📁 Wiki dump {dump_path.name} was partially processed, verifying checkpoint...")
            store.verify(checkpoint)
            dump_checksum = checkpoint.dump_checksum
            report.resumed_from = checkpoint.last_page_title

        dump = self.dump_reader.load(dump_path)
        language = self._resolve_language(dump.language_code)
        extractor = get_content_extractor(language.abbreviation, self.quote_scorer)

        logger.info(f"Detected language: {language.english_name}")
        report.language = language.abbreviation
        report.pages_total = len(dump.pages)

        skipping = checkpoint is not None
        for page in dump.pages:
            # Pages before the checkpointed one were completed by an earlier run
            if skipping:
                if page.title != checkpoint.last_page_title:
                    continue
                logger.info(f"Continuing from the last page {page.title}...")
                skipping = False

            try:
                quotes = self._process_page(page, language, extractor)
            except PageSkipped as skip:
                report.pages_skipped += 1
                logger.debug(f"Skipping page '{page.title}': {skip}")
                continue
            except BaseException:
                # KeyboardInterrupt too
                logger.error(f"Failed to process page '{page.title}' of {dump_path.name}. Saving checkpoint...")
                self._save_checkpoint(store, page.title, dump_checksum)
                raise

            report.pages_processed += 1
            report.quotes_saved += len(quotes)

        if skipping:
            raise CheckpointError(
                f"Page '{checkpoint.last_page_title}' from the checkpoint is not in {dump_path}"
            )

        logger.info(f"Successfully processed {report.quotes_saved} quotes")

        store.mark_done()
        if checkpoint is not None:
            store.delete()

        return report

    def _resolve_language(self, language_code: str) -> Language:
        language = self.database.find_language_by_abbreviation(language_code)
        if language is None:
            raise UnsupportedLanguageError(f"Language '{language_code}' is not in the database")
        return language

    def _save_checkpoint(self, store: CheckpointStore, page_title: str, dump_checksum: Optional[str]) -> None:
        """Write a checkpoint without masking the error that caused it."""
        try:
            store.save(store.create(page_title, dump_checksum))
        except Exception as e:
            logger.error(f"Failed to create checkpoint for {store.dump_path}: {e}")

    def _process_page(self, page: Page, language: Language, extractor: ContentExtractor) -> List[Quote]:
        """Parse quotes of one page and save them.

        Args:
            page: Page to process
            language: Language of the dump
            extractor: Content extractor of the language

        Returns:
            Saved quotes

        Raises:
            PageSkipped: If the page has nothing to load
        """
        # Redirects are just aliases of other pages
        if page.is_redirect:
            raise PageSkipped("redirect")

        if extractor.is_forbidden_page_name(page.title):
            raise PageSkipped("forbidden page name")

        author = self._resolve_author(page, language)
        page_url = build_page_url(language, page.title)

        logger.info(f"Processing quotes by {author.english_full_name}...")
        quotes = extractor.extract(page_url, page.raw_content, author, language)
        self.database.save_quotes(quotes)

        if quotes:
            logger.info(f"Loaded {len(quotes)} quotes by {author.english_full_name}")
        else:
            logger.warning(f"No relevant quotes found for page {page.title}")

        return quotes

    def _resolve_author(self, page: Page, language: Language) -> Author:
        """Get or create the author the page is about.

        Args:
            page: Page whose title may be a human name
            language: Language of the dump

        Returns:
            Stored author

        Raises:
            PageSkipped: If the title is not a human name
        """
        english_name = self.author_classifier.classify(page.title)
        if english_name is None:
            raise PageSkipped("title is not a human name")

        author = self.database.find_author_by_name(english_name)
        if author is None:
            author = self.database.create_author(english_name)

        # Original (local-language) name from the page title
        self.database.append_translated_name(author, language, page.title)

        return author
