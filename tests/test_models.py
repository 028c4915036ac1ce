"""Test Pydantic models."""
import pytest
from pydantic import ValidationError

from classification.models import ClassificationResult, ParsedQuote, ScoreResult
from ingestion.models import Dump, Page
from storage.models import Language, Quote


def test_classification_result_aliases():
    """Test model payload keys map to snake_case fields."""
    result = ClassificationResult.model_validate({"isHuman": True, "englishName": "Winston Churchill"})

    assert result.is_human
    assert result.english_name == "Winston Churchill"
    assert ClassificationResult(is_human=False).english_name is None


def test_score_result_range():
    """Test scores outside 0-100 are rejected."""
    assert ScoreResult.model_validate({"score": 100, "cleanQuote": "Be yourself."}).clean_quote == "Be yourself."

    with pytest.raises(ValidationError):
        ScoreResult.model_validate({"score": 101})
    with pytest.raises(ValidationError):
        ScoreResult.model_validate({"score": -1})


def test_parsed_quote_defaults():
    """Test an unscored quote is a rejection."""
    parsed = ParsedQuote()

    assert parsed.score == 0
    assert parsed.clean_quote is None


def test_page_defaults():
    """Test a page without revision text is empty and not a redirect."""
    page = Page(title="Karel Čapek")

    assert not page.is_redirect
    assert page.raw_content == ""


def test_dump_language_code_length():
    """Test dump language codes have two characters."""
    dump = Dump(language_code="cs", site_name="Wikicitáty", pages=[Page(title="A")])

    assert len(dump.pages) == 1
    with pytest.raises(ValidationError):
        Dump(language_code="ces", site_name="Wikicitáty")


def test_language_abbreviation():
    """Test languages are identified by two-letter codes."""
    with pytest.raises(ValidationError):
        Language(abbreviation="c", english_name="Czech", native_name="Čeština")


def test_quote_constraints():
    """Test quote text and score bounds."""
    quote = Quote(text="Veni, vidi, vici.", source="https://en.wikiquote.org/wiki/Julius_Caesar",
                  score=70, author_id=1, language_abbreviation="en")

    assert quote.id is None
    with pytest.raises(ValidationError):
        Quote(text="", source="x", score=70, author_id=1, language_abbreviation="en")
    with pytest.raises(ValidationError):
        Quote(text="x" * 1001, source="x", score=70, author_id=1, language_abbreviation="en")
    with pytest.raises(ValidationError):
        Quote(text="x", source="x", score=101, author_id=1, language_abbreviation="en")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
