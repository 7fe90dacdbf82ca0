"""Tests for the keyword index builder."""
import pytest

from core.errors import KeywordIndexError
from registry.keywords import (
    MANUAL_OVERRIDES,
    REQUIRED_SYNTAX_KEYWORDS,
    build_keyword_index,
)
from test_utils import feature, make_index, make_registry


def _syntax_overrides():
    return {k: f"id-{k}" for k in REQUIRED_SYNTAX_KEYWORDS}


class TestRegistryKeywords:
    def test_first_registration_wins(self):
        index = make_index(
            {
                "first": feature("Shared", api=["dup"]),
                "second": feature("Other", api=["dup"]),
            },
            overrides=_syntax_overrides(),
        )
        assert index["dup"] == "first"
        assert index["shared"] == "first"
        assert index["other"] == "second"

    def test_keywords_lowercased(self):
        index = make_index({"f": feature("F", api=["StructuredClone"])}, overrides=_syntax_overrides())
        assert "structuredclone" in index
        assert "StructuredClone" not in index


class TestOverrides:
    def test_override_beats_registry_for_every_entry(self):
        # One registry feature claims every override keyword first
        claimant = feature("Claimant", keywords=list(MANUAL_OVERRIDES))
        index = make_index({"claimant": claimant})
        for keyword, feature_id in MANUAL_OVERRIDES.items():
            assert index[keyword.lower()] == feature_id

    def test_override_keys_lowercased(self):
        overrides = dict(_syntax_overrides(), **{"Navigator.Share": "web-share"})
        index = make_index(overrides=overrides)
        assert index["navigator.share"] == "web-share"

    def test_override_adds_new_keyword(self):
        index = make_index()
        assert index[":has"] == "has"
        assert index["??"] == "js-nullish-coalescing"

    def test_registry_entries_survive_when_not_overridden(self):
        index = make_index({"dialog": feature("Dialog element", htmlElements=["dialog"])})
        assert index["dialog"] == "dialog"
        assert index["dialog element"] == "dialog"


class TestRequiredKeywords:
    def test_missing_syntax_keyword_is_configuration_error(self):
        overrides = _syntax_overrides()
        del overrides["top-level await"]
        with pytest.raises(KeywordIndexError, match="top-level await"):
            make_index(overrides=overrides)

    def test_registry_may_supply_syntax_keywords(self):
        registry = make_registry({"syntax": feature("Syntax", keywords=list(REQUIRED_SYNTAX_KEYWORDS))})
        index = build_keyword_index(registry, overrides={})
        assert all(index[k] == "syntax" for k in REQUIRED_SYNTAX_KEYWORDS)

    def test_default_overrides_cover_syntax_keywords(self):
        index = make_index()
        assert index["optional chaining"] == "js-optional-chaining"
        assert index["dynamic import"] == "js-dynamic-import"


class TestLineMatchers:
    def _predicate(self, index, keyword):
        for kw, _, predicate in index.line_matchers():
            if kw == keyword:
                return predicate
        raise AssertionError(f"{keyword} not indexed")

    def test_pseudo_class_uses_substring(self):
        matches = self._predicate(make_index(), ":has")
        assert matches("a:has(img) {}")
        assert matches("a:hasx")

    def test_word_keyword_uses_word_boundary(self):
        index = make_index({"has-feature": feature(keywords=["has"])}, overrides=_syntax_overrides())
        matches = self._predicate(index, "has")
        assert matches("it has a value")
        assert not matches("hash")
        assert not matches("phase")

    def test_regex_special_characters_escaped(self):
        matches = self._predicate(make_index(), "color-mix")
        assert matches("background: color-mix(in srgb, red, blue);")
        assert not matches("colorxmix")

    def test_matchers_compiled_once(self):
        index = make_index()
        assert index.line_matchers() is index.line_matchers()
