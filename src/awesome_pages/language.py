"""Detección de idioma (langdetect) y normalización de tags BCP-47."""

from __future__ import annotations

import re

import structlog
from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

logger = structlog.get_logger(__name__)

# langdetect es probabilístico; la semilla fija lo vuelve determinista.
DetectorFactory.seed = 0

DEFAULT_LANGUAGE = "en"
UNDETERMINED = "unknown"

_BCP47_RE = re.compile(r"^[a-z]{2,3}(-[a-z]{2,4})?$")

# Etiquetas de langdetect que no son un subtag primario BCP-47.
# El resto pasa sin cambios.
_CLASSIFIER_TO_BCP47 = {
    "zh-cn": "zh",
    "zh-tw": "zh",
}


def detect_language(text: str, min_confidence: float = 0.5, min_length: int = 30) -> str:
    """Detecta el idioma de un texto y retorna un tag BCP-47.

    Textos vacíos o de menos de ``min_length`` caracteres, resultados
    indeterminados o con confianza menor a ``min_confidence`` retornan "en".
    """
    if not text or len(text.strip()) < min_length:
        return DEFAULT_LANGUAGE

    try:
        results = detect_langs(text)
    except LangDetectException as exc:
        logger.debug("language_fallback", reason="classifier_error", error=str(exc))
        return DEFAULT_LANGUAGE

    if not results or results[0].lang == UNDETERMINED:
        logger.debug("language_fallback", reason="undetermined")
        return DEFAULT_LANGUAGE

    top = results[0]
    if top.prob < min_confidence:
        logger.debug(
            "language_fallback",
            reason="low_confidence",
            lang=top.lang,
            confidence=round(top.prob, 3),
        )
        return DEFAULT_LANGUAGE

    return _CLASSIFIER_TO_BCP47.get(top.lang, top.lang)


def normalize_bcp47(tag: str | None) -> str:
    """Valida y normaliza un tag BCP-47 simple ("en", "pt-br"); si no, "en"."""
    if not tag:
        return DEFAULT_LANGUAGE
    normalized = tag.strip().lower()
    if not _BCP47_RE.match(normalized):
        return DEFAULT_LANGUAGE
    return normalized


def primary_subtag(tag: str) -> str:
    """'pt-br' -> 'pt'."""
    return tag.split("-")[0].lower()
