"""Test author name classification."""
import pytest

from classification.author_classifier import AuthorClassifier
from classification.retry_policy import ClassificationError
from conftest import FakeAnthropic, text_message, tool_message

TOOL = "classify_author_name"


def test_human_name_is_normalized(retry_policy):
    """Test that a human name returns its English form."""
    client = FakeAnthropic([
        tool_message(TOOL, {"isHuman": True, "englishName": "Arthur Schopenhauer"})
    ])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    assert classifier.classify("Artur Şopenhauer") == "Arthur Schopenhauer"

    call = client.messages.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0
    assert call["tool_choice"] == {"type": "tool", "name": TOOL}
    assert call["messages"] == [{"role": "user", "content": "Artur Şopenhauer"}]


def test_not_a_human(retry_policy):
    """Test that non-human titles return None."""
    client = FakeAnthropic([tool_message(TOOL, {"isHuman": False, "englishName": ""})])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    assert classifier.classify("Farma zvířat") is None


def test_human_without_name(retry_policy):
    """Test that a human decision with an empty name is treated as not a name."""
    client = FakeAnthropic([tool_message(TOOL, {"isHuman": True, "englishName": "  "})])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    assert classifier.classify("???") is None


def test_missing_payload_is_retried(retry_policy, recording_sleep):
    """Test that a response without the tool payload is retried."""
    client = FakeAnthropic([
        text_message(),
        tool_message(TOOL, {"isHuman": "maybe"}),
        tool_message(TOOL, {"isHuman": True, "englishName": "Karel Čapek"}),
    ])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    assert classifier.classify("Karel Čapek") == "Karel Čapek"
    assert len(client.messages.calls) == 3
    assert recording_sleep.delays == [1.0, 4.0]


def test_truncated_response_is_retried(retry_policy):
    """Test that a truncated name classification is retried."""
    client = FakeAnthropic([
        tool_message(TOOL, {}, stop_reason="max_tokens"),
        tool_message(TOOL, {"isHuman": True, "englishName": "Jan Hus"}),
    ])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    assert classifier.classify("Jan Hus") == "Jan Hus"


def test_all_attempts_fail(retry_policy):
    """Test that three empty responses raise a ClassificationError."""
    client = FakeAnthropic([text_message(), text_message(), text_message()])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    with pytest.raises(ClassificationError):
        classifier.classify("Karel Čapek")

    assert len(client.messages.calls) == 3


def test_token_usage_is_tracked(retry_policy):
    """Test that token usage accumulates."""
    client = FakeAnthropic([tool_message(TOOL, {"isHuman": False, "englishName": ""})])
    classifier = AuthorClassifier(client, "test-model", retry_policy)

    classifier.classify("Praha")

    assert classifier.llm.total_tokens_used == 20


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
