"""
LinguaCorp API — Phrase Validation Unit Tests
==============================================

What:  Tests for validate_phrase() and the PhraseCandidate/Phrase schemas.
How:   Pure function tests, no app or store involved.

What we test:
    ✅ Valid candidates produce no errors
    ✅ Missing/blank originalText is reported
    ✅ Missing language and wrong-length language get distinct messages
    ✅ Several violated fields are reported together
    ✅ camelCase wire names in and out
"""

import pytest

from linguacorp.schemas.phrase import (
    LANGUAGE_INVALID,
    LANGUAGE_REQUIRED,
    ORIGINAL_TEXT_REQUIRED,
    Phrase,
    PhraseCandidate,
    validate_phrase,
)


def _candidate(**fields) -> PhraseCandidate:
    return PhraseCandidate.model_validate(fields)


class TestValidatePhrase:

    def test_valid_phrase_has_no_errors(self):
        candidate = _candidate(originalText="Hello", language="EN", translatedText="Bonjour")
        assert validate_phrase(candidate) == {}

    def test_translated_text_is_optional(self):
        """Absent and empty translations are both fine."""
        assert validate_phrase(_candidate(originalText="Hello", language="EN")) == {}
        assert validate_phrase(
            _candidate(originalText="Hello", language="EN", translatedText="")
        ) == {}

    @pytest.mark.parametrize("original_text", [None, "", "   "])
    def test_original_text_required(self, original_text):
        errors = validate_phrase(_candidate(originalText=original_text, language="EN"))
        assert errors == {"originalText": [ORIGINAL_TEXT_REQUIRED]}

    @pytest.mark.parametrize("language", [None, "", "  "])
    def test_language_required(self, language):
        errors = validate_phrase(_candidate(originalText="Hello", language=language))
        assert errors == {"language": [LANGUAGE_REQUIRED]}

    @pytest.mark.parametrize("language", ["E", "ENG", "en-US"])
    def test_language_must_be_two_characters(self, language):
        errors = validate_phrase(_candidate(originalText="Hello", language=language))
        assert errors == {"language": [LANGUAGE_INVALID]}

    def test_reports_every_violated_field(self):
        """Validation is not short-circuited: one message per violated field."""
        errors = validate_phrase(_candidate(originalText="", language="ENG"))
        assert errors == {
            "originalText": ["OriginalText is required."],
            "language": ["Language must be a 2-letter ISO code."],
        }


class TestPhraseSchemas:

    def test_candidate_accepts_snake_case_names(self):
        candidate = PhraseCandidate(original_text="Hi", language="EN")
        assert candidate.original_text == "Hi"

    def test_candidate_ignores_client_id(self):
        candidate = _candidate(id=42, originalText="Hi", language="EN")
        assert not hasattr(candidate, "id")

    def test_phrase_serializes_with_camel_case(self):
        phrase = Phrase(id=1, original_text="Hello", language="EN", translated_text="")
        assert phrase.model_dump(by_alias=True) == {
            "id": 1,
            "originalText": "Hello",
            "language": "EN",
            "translatedText": "",
        }

    def test_from_candidate_stores_missing_translation_as_empty(self):
        phrase = Phrase.from_candidate(7, _candidate(originalText="Hello", language="EN"))
        assert phrase.id == 7
        assert phrase.translated_text == ""
