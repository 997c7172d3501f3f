"""Tests for keyword synonym resolution."""

import pytest

from resume_ats.domain.synonyms import (
    SYNONYM_MAP,
    _build_synonym_map,
    classify_skill,
    get_canonical_form,
    get_known_phrases,
    resolve_synonyms,
)


class TestResolveSynonyms:
    def test_returns_whole_group(self):
        assert resolve_synonyms("JS") == ["javascript", "js", "ecmascript", "es6", "es2015"]

    def test_any_member_resolves_to_same_group(self):
        assert resolve_synonyms("k8s") == resolve_synonyms("Kubernetes") == ["kubernetes", "k8s"]

    def test_unknown_term_returned_unchanged(self):
        assert resolve_synonyms("Foobar") == ["Foobar"]

    def test_surrounding_whitespace_ignored(self):
        assert resolve_synonyms("  postgres ")[0] == "postgresql"


class TestCanonicalForm:
    @pytest.mark.parametrize(
        "term,canonical",
        [
            ("K8s", "kubernetes"),
            ("go", "golang"),
            ("AWS", "amazon web services"),
            ("ReactJS", "react"),
            ("ml", "machine learning"),
        ],
    )
    def test_known_terms(self, term, canonical):
        assert get_canonical_form(term) == canonical

    def test_unknown_term_unchanged(self):
        assert get_canonical_form("Zig") == "Zig"


class TestSynonymMap:
    def test_every_form_maps_to_its_own_group(self):
        for form, group in SYNONYM_MAP.items():
            assert form in group

    def test_form_in_two_groups_rejected(self):
        with pytest.raises(ValueError):
            _build_synonym_map([("alpha", "beta"), ("beta", "gamma")])

    def test_known_phrases_are_multi_word_or_hyphenated(self):
        phrases = get_known_phrases()
        assert "machine learning" in phrases
        assert "test-driven development" in phrases
        assert "python" not in phrases


class TestClassifySkill:
    def test_soft_skills(self):
        assert classify_skill("teamwork") == "soft"
        assert classify_skill("Communication") == "soft"
        assert classify_skill("problem-solving") == "soft"

    def test_hard_skills(self):
        assert classify_skill("python") == "hard"
        assert classify_skill("unknown-thing") == "hard"
