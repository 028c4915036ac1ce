"""Content extractor for Czech Wikiquote (cs.wikiquote.org)."""
from parsing.content.content_extractor import ContentExtractor


class CzechExtractor(ContentExtractor):
    language_code = "cs"

    forbidden_prefixes = (
        "Wikicitáty:",
        "Wikicitáty diskuse:",
        "Diskuse:",
        "Kategorie:",
        "Diskuse ke kategorii:",
        "Nápověda:",
        "Diskuse k nápovědě:",
        "Šablona:",
        "Diskuse k šabloně:",
        "Soubor:",
        "Diskuse k souboru:",
        "Uživatel:",
        "Diskuse s uživatelem:",
        "MediaWiki:",
        "Diskuse k MediaWiki:",
        "Portál:",
        "Modul:",
        "Speciální:",
        "Média:",
        "Hlavní strana",
    )

    quote_section_titles = (
        "Citáty",
        "Citace",
        "Výroky",
        "Výroky o sobě",
        "Připisované",
    )
