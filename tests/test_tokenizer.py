"""Tests para tokenizer y stopwords."""

from __future__ import annotations

from awesome_pages.search.stopwords import TECH_TERMS, get_stopwords
from awesome_pages.search.tokenizer import tokenize


def test_version_token_is_removed_as_stopword():
    assert tokenize("Vue v2", get_stopwords("en")) == ["vue"]


def test_versions_normalize_to_v():
    assert tokenize("Python v3.11.2 and v2") == ["python", "v", "and", "v"]


def test_punctuation_and_separators_split_tokens():
    assert tokenize("react-router/dom_utils: (fast!) [yes]") == [
        "react",
        "router",
        "dom",
        "utils",
        "fast",
        "yes",
    ]


def test_dots_are_removed_after_version_check():
    assert tokenize("Node.js ... next.js") == ["nodejs", "nextjs"]


def test_empty_input():
    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize("  ... --- ") == []


def test_tech_terms_are_never_stopwords():
    stopwords = get_stopwords("en")
    assert "the" in stopwords
    assert TECH_TERMS.isdisjoint(stopwords)
    assert tokenize("The AI API for SQL", stopwords) == ["ai", "api", "sql"]


def test_stopwords_use_primary_subtag():
    assert "de" in get_stopwords("pt-br")
    assert get_stopwords("pt-BR") == get_stopwords("pt")


def test_unknown_language_falls_back_to_english():
    assert get_stopwords("xx") == get_stopwords("en")
