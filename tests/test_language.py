"""Tests para detección de idioma y normalización BCP-47."""

from __future__ import annotations

import pytest

from awesome_pages.language import detect_language, normalize_bcp47

ENGLISH = (
    "This repository collects the best open source tools for developers who "
    "want to build modern web applications quickly and with great quality."
)
PORTUGUESE = (
    "Esta lista reúne as melhores ferramentas de código aberto para quem quer "
    "construir aplicações modernas com rapidez, qualidade e muita diversão."
)
SPANISH = (
    "Esta lista reúne las mejores herramientas de código abierto para quienes "
    "quieren construir aplicaciones modernas con rapidez y buena calidad."
)
CHINESE = (
    "这个仓库收集了最好的开源工具，帮助开发者快速构建现代网页应用程序，"
    "并且保证高质量的代码和良好的用户体验。"
)


def test_short_text_defaults_to_english():
    assert detect_language("") == "en"
    assert detect_language("Olá, tudo bem?") == "en"


def test_detects_languages():
    assert detect_language(ENGLISH) == "en"
    assert detect_language(PORTUGUESE) == "pt"
    assert detect_language(SPANISH) == "es"


def test_chinese_variants_map_to_primary_subtag():
    """langdetect reporta zh-cn/zh-tw; se expone solo el subtag primario."""
    assert len(CHINESE) > 30
    assert detect_language(CHINESE) == "zh"


def test_low_confidence_falls_back_to_english():
    assert detect_language(PORTUGUESE, min_confidence=1.01) == "en"


def test_undetermined_text_falls_back_to_english():
    """Texto sin rasgos de idioma hace fallar al clasificador: no se propaga."""
    assert detect_language("1234567890 1234567890 1234567890 !!! ???") == "en"


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("en", "en"),
        ("  PT-BR ", "pt-br"),
        ("zh-Hant", "zh-hant"),
        ("fil", "fil"),
        ("", "en"),
        (None, "en"),
        ("english", "en"),
        ("pt_BR", "en"),
        ("en-US-x-private", "en"),
    ],
)
def test_normalize_bcp47(tag, expected):
    assert normalize_bcp47(tag) == expected
