"""SQLite persistence gateway for authors, translated names and quotes."""
import sqlite3
from pathlib import Path
from typing import Optional, List
from contextlib import contextmanager

from utils.logger import setup_logger
from storage.models import Author, Language, Quote, TranslatedAuthorName
import config

logger = setup_logger(__name__)


class Database:
    """Manages SQLite database operations."""

    def __init__(self, db_path: Path = config.DB_PATH):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path
        self._initialize_schema()

    def _initialize_schema(self):
        """Create tables and seed languages if they don't exist."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, 'r', encoding='utf-8') as f:
            schema_sql = f.read()

        with self._get_connection() as conn:
            conn.executescript(schema_sql)
            conn.commit()

        logger.debug(f"Database initialized at {self.db_path}")

    @contextmanager
    def _get_connection(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
        finally:
            conn.close()

    def find_language_by_abbreviation(self, abbreviation: str) -> Optional[Language]:
        """Find a language by its two-letter code.

        Args:
            abbreviation: Language abbreviation (e.g. "cs")

        Returns:
            Language or None
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM languages WHERE abbreviation = ?",
                (abbreviation,)
            ).fetchone()

            return Language(**dict(row)) if row else None

    def get_languages(self) -> List[Language]:
        """Get all known languages."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM languages ORDER BY abbreviation").fetchall()
            return [Language(**dict(row)) for row in rows]

    def find_author_by_name(self, english_full_name: str) -> Optional[Author]:
        """Find an author by the canonical English name.

        Args:
            english_full_name: Canonical name

        Returns:
            Author or None
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM authors WHERE english_full_name = ?",
                (english_full_name,)
            ).fetchone()

            return Author(**dict(row)) if row else None

    def create_author(self, english_full_name: str) -> Author:
        """Insert a new author.

        Args:
            english_full_name: Canonical name (unique)

        Returns:
            Created author
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "INSERT INTO authors (english_full_name) VALUES (?)",
                (english_full_name,)
            )
            conn.commit()
            author_id = cursor.lastrowid

        logger.info(f"Inserted author: {english_full_name} (ID: {author_id})")
        return Author(id=author_id, english_full_name=english_full_name)

    def append_translated_name(self, author: Author, language: Language, full_name: str) -> TranslatedAuthorName:
        """Add the author's name as written in the given language.

        Args:
            author: Stored author
            language: Language of the name
            full_name: Name in that language (the page title)

        Returns:
            Stored translated name
        """
        translated_name = TranslatedAuthorName(
            author_id=author.id,
            language_abbreviation=language.abbreviation,
            full_name=full_name
        )

        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO translated_author_names (author_id, language_abbreviation, full_name)
                VALUES (:author_id, :language_abbreviation, :full_name)
                """,
                translated_name.model_dump()
            )
            conn.commit()

        return translated_name

    def save_quotes(self, quotes: List[Quote]) -> None:
        """Bulk insert quotes.

        Args:
            quotes: Accepted quotes
        """
        if not quotes:
            return

        with self._get_connection() as conn:
            conn.executemany(
                """
                INSERT INTO quotes (text, source, score, author_id, language_abbreviation)
                VALUES (:text, :source, :score, :author_id, :language_abbreviation)
                """,
                [quote.model_dump(exclude={"id"}) for quote in quotes]
            )
            conn.commit()

        logger.debug(f"Inserted {len(quotes)} quotes")

    def count_quotes(self, language_abbreviation: Optional[str] = None) -> int:
        """Count stored quotes.

        Args:
            language_abbreviation: Count only quotes in this language

        Returns:
            Number of quotes
        """
        with self._get_connection() as conn:
            if language_abbreviation is None:
                row = conn.execute("SELECT COUNT(*) FROM quotes").fetchone()
            else:
                row = conn.execute(
                    "SELECT COUNT(*) FROM quotes WHERE language_abbreviation = ?",
                    (language_abbreviation,)
                ).fetchone()
            return row[0]
