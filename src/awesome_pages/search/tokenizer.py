"""Tokenización y normalización de texto para el índice."""

from __future__ import annotations

import re
from collections.abc import Collection

_PUNCT_RE = re.compile(r"[,!?:;()\[\]{}'\"]")
_SEPARATORS_RE = re.compile(r"[-_/]")
_VERSION_RE = re.compile(r"^v\d+(\.\d+)*$")


def tokenize(text: str | None, stopwords: Collection[str] = frozenset()) -> list[str]:
    """Minúsculas, sin puntuación, versiones ("v2", "v3.1") -> "v", sin stopwords.

    Los puntos se conservan hasta normalizar versiones y luego se eliminan.
    """
    if not text:
        return []

    normalized = _SEPARATORS_RE.sub(" ", _PUNCT_RE.sub(" ", text.lower()))
    tokens: list[str] = []
    for raw in normalized.split():
        token = _VERSION_RE.sub("v", raw).replace(".", "")
        if token and token not in stopwords:
            tokens.append(token)
    return tokens
