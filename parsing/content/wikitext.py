"""MediaWiki markup helpers: sections, list items and plaintext conversion."""
import html
import re
from typing import Iterable, List

SECTION_PATTERN = re.compile(r"^(={1,6})\s*(.+?)\s*\1\s*$")
LIST_ITEM_PATTERN = re.compile(r"^([*#:;]+)\s*(.*)$")

COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
REF_PATTERN = re.compile(r"<ref[^>]*/\s*>|<ref[^>]*>.*?</ref\s*>", re.DOTALL | re.IGNORECASE)
INNER_TEMPLATE_PATTERN = re.compile(r"\{\{[^{}]*\}\}")
MEDIA_LINK_PATTERN = re.compile(
    r"\[\[\s*(?:File|Image|Category|Soubor|Obrázek|Kategorie)\s*:[^\[\]]*\]\]",
    re.IGNORECASE
)
LINK_PATTERN = re.compile(r"\[\[([^|\[\]]+)(?:\|([^\[\]]*))?\]\]")
EXTERNAL_LINK_PATTERN = re.compile(r"\[(?:https?:)?//[^\s\]]+(?:\s+([^\]]*))?\]")
BOLD_ITALIC_PATTERN = re.compile(r"'{2,}")
BR_TAG_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
HTML_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Annotations are only stripped after a finished sentence or closing quote.
# A dash tail is an attribution only while it is short and has no sentence end.
TRAILING_NOTE_PATTERN = re.compile(r"(?<=[.!?…\"“”»«])\s*[(\[]([^()\[\]]*)[)\]]$")
TRAILING_ATTRIBUTION_PATTERN = re.compile(r"(?<=[.!?…\"“”»«])\s+[–—-]{1,2}\s+[^–—.!?…]{1,60}$")
SENTENCE_END = ".!?…"

QUOTE_PAIRS = (('"', '"'), ("„", "“"), ("“", "”"), ("»", "«"), ("«", "»"), ("‚", "‘"))


def normalize_heading(title: str) -> str:
    """Heading title without markup, lowercased for comparison."""
    return to_plaintext(title).rstrip(":").strip().casefold()


def section_bodies(markup: str, titles: Iterable[str]) -> List[str]:
    """Collect the bodies of sections whose heading is one of ``titles``.

    A section reaches up to the next heading of the same or a higher level,
    so nested subsections are part of it.

    Args:
        markup: Page content in MediaWiki format
        titles: Accepted section titles (case-insensitive)

    Returns:
        Body of every matching section, in page order
    """
    wanted = {title.casefold() for title in titles}
    bodies = []
    current: List[str] = []
    current_level = None

    for line in markup.splitlines():
        heading = SECTION_PATTERN.match(line.strip())
        if heading:
            level = len(heading.group(1))
            if current_level is not None and level <= current_level:
                bodies.append("\n".join(current))
                current, current_level = [], None
            if current_level is None and normalize_heading(heading.group(2)) in wanted:
                current_level = level
            continue

        if current_level is not None:
            current.append(line)

    if current_level is not None:
        bodies.append("\n".join(current))

    return bodies


def top_level_list_items(body: str) -> List[str]:
    """Raw markup of first-level list items (``* text`` or ``# text``).

    Deeper items (``** source``) annotate the item above them and are skipped.
    """
    items = []
    for line in body.splitlines():
        match = LIST_ITEM_PATTERN.match(line.strip())
        if match and match.group(1) in ("*", "#"):
            items.append(match.group(2))
    return items


def remove_templates(markup: str) -> str:
    """Remove templates, innermost first, so nested ones disappear too."""
    previous = None
    while previous != markup:
        previous = markup
        markup = INNER_TEMPLATE_PATTERN.sub("", markup)
    return markup


def to_plaintext(markup: str) -> str:
    """Convert inline MediaWiki markup to plain text.

    Args:
        markup: Inline markup (a single line or heading)

    Returns:
        Plain text with normalized whitespace
    """
    text = COMMENT_PATTERN.sub("", markup)
    text = REF_PATTERN.sub("", text)
    text = remove_templates(text)
    text = MEDIA_LINK_PATTERN.sub("", text)
    text = LINK_PATTERN.sub(lambda m: m.group(2) if m.group(2) is not None else m.group(1), text)
    text = EXTERNAL_LINK_PATTERN.sub(lambda m: m.group(1) or "", text)
    text = BOLD_ITALIC_PATTERN.sub("", text)
    text = BR_TAG_PATTERN.sub(" ", text)
    text = HTML_PATTERN.sub("", text)
    text = html.unescape(text)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def is_sentence(text: str) -> bool:
    """Whether text reads as a sentence of its own (``A ty mě taky.``)."""
    text = text.strip().strip("\"„“”»«")
    return " " in text and text[:1].isupper() and text[-1:] in SENTENCE_END


def strip_trailing_annotations(text: str) -> str:
    """Remove trailing notes like ``(Speech, 1940)`` or `` – Source``.

    Parentheses holding a whole sentence and dash tails that continue the
    text (dialogue) are part of the quote and stay.
    """
    previous = None
    while previous != text:
        previous = text
        note = TRAILING_NOTE_PATTERN.search(text)
        if note and not is_sentence(note.group(1)):
            text = text[:note.start()].rstrip()
        text = TRAILING_ATTRIBUTION_PATTERN.sub("", text).rstrip()
    return text


def strip_enclosing_quotes(text: str) -> str:
    """Drop quotation marks that wrap the whole text."""
    for opening, closing in QUOTE_PAIRS:
        if len(text) > 2 and text.startswith(opening) and text.endswith(closing):
            inner = text[len(opening):-len(closing)]
            if opening not in inner and closing not in inner:
                return inner.strip()
    return text
