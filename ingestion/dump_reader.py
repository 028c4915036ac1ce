"""MediaWiki XML dump reader."""
from pathlib import Path
from typing import Optional

from lxml import etree

from utils.logger import setup_logger
from ingestion.models import Dump, Page

logger = setup_logger(__name__)


class DumpReadError(IOError):
    """Raised when the dump file cannot be read."""
    pass


class DumpFormatError(Exception):
    """Raised when the dump lacks the structure the pipeline relies on."""
    pass


def _local_name(element) -> str:
    """Tag name without the export namespace (``{http://...}page`` -> ``page``)."""
    return etree.QName(element).localname


def _child(element, name: str):
    """First direct child with the given local name, or None."""
    for child in element:
        if isinstance(child.tag, str) and _local_name(child) == name:
            return child
    return None


def _child_text(element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None:
        return None
    return child.text or ""


class DumpReader:
    """Decodes a wiki dump into Page records."""

    def load(self, path) -> Dump:
        """Load and decode a dump file.

        Args:
            path: Path to the MediaWiki XML export

        Returns:
            Dump with the language code and pages in document order

        Raises:
            DumpReadError: If the file is missing or unreadable
            DumpFormatError: If the XML is malformed or the site identifier
                or page list is absent
        """
        path = Path(path)

        if not path.is_file():
            raise DumpReadError(f"Dump file not found: {path}")

        logger.info(f"Decoding wiki dump {path.name}")

        try:
            parser = etree.XMLParser(huge_tree=True, resolve_entities=False)
            tree = etree.parse(str(path), parser)
        except etree.XMLSyntaxError as e:
            raise DumpFormatError(f"Dump {path} is not well-formed XML: {e}") from e
        except OSError as e:
            raise DumpReadError(f"Failed to read dump {path}: {e}") from e

        root = tree.getroot()

        siteinfo = _child(root, "siteinfo")
        site_name = _child_text(siteinfo, "dbname") if siteinfo is not None else None
        if not site_name or len(site_name.strip()) < 2:
            raise DumpFormatError(f"Dump {path} has no site identifier (siteinfo/dbname)")
        site_name = site_name.strip()

        page_elements = [
            element for element in root
            if isinstance(element.tag, str) and _local_name(element) == "page"
        ]
        if not page_elements:
            raise DumpFormatError(f"Dump {path} contains no pages")

        pages = [self._parse_page(element) for element in page_elements]

        logger.info(f"Decoded {len(pages)} pages from {site_name}")

        return Dump(
            language_code=site_name[:2],
            site_name=site_name,
            pages=pages
        )

    def _parse_page(self, element) -> Page:
        """Convert a <page> element into a Page.

        Args:
            element: lxml element of the page

        Returns:
            Page record
        """
        title = _child_text(element, "title")
        if title is None:
            raise DumpFormatError("Page without a title in dump")

        revision = _child(element, "revision")
        raw_content = ""
        if revision is not None:
            raw_content = _child_text(revision, "text") or ""

        return Page(
            title=title,
            is_redirect=_child(element, "redirect") is not None,
            raw_content=raw_content
        )
