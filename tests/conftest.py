"""Shared fixtures: fake Anthropic client, fake classifiers and dump files."""
from types import SimpleNamespace
from xml.sax.saxutils import escape

import pytest

from classification.models import ParsedQuote
from classification.retry_policy import RetryPolicy
from storage.database import Database


def tool_message(name, payload, stop_reason="tool_use"):
    """Build a Messages API response carrying one tool_use block."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="tool_use", name=name, input=payload)],
        stop_reason=stop_reason,
        usage=SimpleNamespace(input_tokens=12, output_tokens=8)
    )


def text_message(text="Sorry, I can't help with that."):
    """Build a response without any tool payload."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        stop_reason="end_turn",
        usage=SimpleNamespace(input_tokens=12, output_tokens=8)
    )


class FakeMessages:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeAnthropic:
    """Stands in for ``anthropic.Anthropic``; replays canned responses in order."""

    def __init__(self, responses):
        self.messages = FakeMessages(responses)


class FakeAuthorClassifier:
    """Maps page titles to canonical names; unknown titles are not human."""

    def __init__(self, names=None):
        self.names = names or {}
        self.calls = []

    def classify(self, candidate_name):
        self.calls.append(candidate_name)
        return self.names.get(candidate_name)


class FakeQuoteScorer:
    """Returns a fixed score per candidate text (default 80, text unchanged)."""

    def __init__(self, scores=None, default=80):
        self.scores = scores or {}
        self.default = default
        self.calls = []

    def score(self, author_name, candidate_text):
        self.calls.append((author_name, candidate_text))
        result = self.scores.get(candidate_text, self.default)
        if isinstance(result, BaseException):
            raise result
        if isinstance(result, ParsedQuote):
            return result
        return ParsedQuote(score=result, clean_quote=candidate_text)


class RecordingSleep:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def retry_policy(recording_sleep):
    """Retry policy that records waits instead of sleeping."""
    return RetryPolicy(sleep=recording_sleep)


@pytest.fixture
def database(tmp_path):
    return Database(tmp_path / "quotes.db")


def render_dump(pages, dbname="cswikiquote"):
    """Render a minimal MediaWiki export.

    Args:
        pages: (title, content) tuples, or (title, content, is_redirect)
        dbname: Site identifier
    """
    parts = [
        '<mediawiki xmlns="http://www.mediawiki.org/xml/export-0.11/" version="0.11" xml:lang="cs">',
        f"  <siteinfo><sitename>Wikicitáty</sitename><dbname>{dbname}</dbname></siteinfo>",
    ]
    for page in pages:
        title, content = page[0], page[1]
        is_redirect = len(page) > 2 and page[2]
        redirect = '<redirect title="Jiná stránka" />' if is_redirect else ""
        parts.append(
            f"  <page><title>{escape(title)}</title><ns>0</ns>{redirect}"
            f'<revision><text xml:space="preserve">{escape(content)}</text></revision></page>'
        )
    parts.append("</mediawiki>")
    return "\n".join(parts)


@pytest.fixture
def write_dump(tmp_path):
    """Factory writing a dump file into the test directory."""
    def _write(pages, dbname="cswikiquote", name="dump.xml"):
        path = tmp_path / name
        path.write_text(render_dump(pages, dbname), encoding="utf-8")
        return path
    return _write
