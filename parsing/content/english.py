"""Content extractor for English Wikiquote (en.wikiquote.org)."""
from parsing.content.content_extractor import ContentExtractor


class EnglishExtractor(ContentExtractor):
    language_code = "en"

    forbidden_prefixes = (
        "Wikiquote:",
        "Wikiquote talk:",
        "Talk:",
        "Category:",
        "Category talk:",
        "Help:",
        "Help talk:",
        "Template:",
        "Template talk:",
        "File:",
        "File talk:",
        "User:",
        "User talk:",
        "MediaWiki:",
        "Portal:",
        "Module:",
        "Special:",
        "Media:",
        "List of ",
        "Main Page",
    )

    # Not "Disputed" or "Misattributed"
    quote_section_titles = (
        "Quotes",
        "Quotations",
        "Sourced",
        "Attributed",
    )
