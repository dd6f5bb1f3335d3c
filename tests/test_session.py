from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest

from emo_lex.lexicon import LexiconStore
from emo_lex.session import AnalysisSession, History


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, 12, 0, 0)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def test_example_sentence(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession()
    result = session.analyze("I love dogs but I hate cats!", love_hate_lexicon)
    assert result is not None
    assert result.normalization.tokens == ("i", "love", "dogs", "but", "i", "hate", "cats")
    assert result.total_emotion_tags == 6
    expected = {"joy", "trust", "positive", "anger", "disgust", "negative"}
    for emotion, count in result.emotion_counts.items():
        assert count == (1 if emotion in expected else 0)
        assert result.emotion_percentages[emotion] == ("16.67" if emotion in expected else "0.00")
    assert sum(result.emotion_counts.values()) == result.total_emotion_tags
    assert result.matched_words == ["love", "hate"]
    assert result.dominant_emotion == "anger"
    assert len(result.word_details) == len(result.normalization.tokens)


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_input_is_a_no_op(love_hate_lexicon: LexiconStore, text: str) -> None:
    session = AnalysisSession(love_hate_lexicon)
    session.analyze("love", love_hate_lexicon)
    before = session.history()
    assert session.analyze(text) is None
    assert session.history() == before


def test_without_lexicon_analysis_is_refused(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession()
    assert not session.is_ready
    assert session.analyze("I love it") is None
    assert session.history() == ()

    session.attach_lexicon(love_hate_lexicon)
    assert session.is_ready
    assert session.analyze("I love it") is not None


def test_repeat_analysis_is_idempotent(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon, clock=_Clock())
    first = session.analyze("Hate loving haters")
    second = session.analyze("Hate loving haters")
    assert dict(first.emotion_counts) == dict(second.emotion_counts)
    assert dict(first.emotion_percentages) == dict(second.emotion_percentages)
    assert first.created_at != second.created_at


def test_history_keeps_five_most_recent(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon)
    texts = [f"text number {index}" for index in range(1, 7)]
    for text in texts:
        session.analyze(text)
    history = session.history()
    assert len(history) == 5
    assert history[0].source_text == "text number 6"
    assert "text number 1" not in [item.source_text for item in history]
    assert [item.source_text for item in history] == list(reversed(texts[1:]))


def test_load_from_history_is_a_pure_read(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon)
    older = session.analyze("I hate rain")
    newer = session.analyze("I love sun")
    assert session.load_from_history(1) is older
    assert session.load_from_history(0) is newer
    assert session.history() == (newer, older)
    with pytest.raises(IndexError):
        session.load_from_history(2)
    with pytest.raises(IndexError):
        session.load_from_history(-1)


def test_history_view_cannot_mutate_session(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon)
    session.analyze("love")
    view = session.history()
    assert isinstance(view, tuple)
    session.analyze("hate")
    assert len(view) == 1


def test_history_capacity_is_configurable() -> None:
    history = History(2)
    assert history.capacity == 2
    with pytest.raises(ValueError):
        History(0)


def test_fallback_lexicon_still_analyses() -> None:
    session = AnalysisSession()
    session.attach_lexicon(LexiconStore.fallback())
    result = session.analyze("So happy, not sad")
    assert result.emotion_counts["joy"] == 1
    assert result.emotion_counts["sadness"] == 1
    assert result.total_emotion_tags == 4


def test_to_dict_is_json_serialisable(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon, clock=lambda: datetime(2024, 5, 1, 9, 30))
    payload = session.analyze("Love!").to_dict()
    assert json.loads(json.dumps(payload)) == payload
    assert payload["created_at"] == "2024-05-01T09:30:00"
    assert payload["preprocessing"]["depunctuated"] == "love"
    assert payload["word_details"][0]["emotions"] == ["joy", "trust", "positive"]


def test_stored_results_cannot_be_edited(love_hate_lexicon: LexiconStore) -> None:
    session = AnalysisSession(love_hate_lexicon)
    result = session.analyze("love")
    with pytest.raises(TypeError):
        result.emotion_counts["joy"] = 99
    with pytest.raises(TypeError):
        result.emotion_percentages["joy"] = "50.00"
    stored = session.load_from_history(0)
    assert stored.emotion_counts["joy"] == 1
    assert sum(stored.emotion_counts.values()) == stored.total_emotion_tags

    payload = result.to_dict()
    payload["emotion_counts"]["joy"] = 99
    assert result.emotion_counts["joy"] == 1
