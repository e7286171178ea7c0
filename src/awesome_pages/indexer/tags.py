"""Extracción de tags inline ``(#tag #tag)`` al final de una descripción."""

from __future__ import annotations

import re

from awesome_pages.models import TagExtraction

_TAG_BLOCK_RE = re.compile(
    r"\((\s*#[a-z0-9_-]+(?:\s+#[a-z0-9_-]+)*\s*)\)\s*$",
    re.IGNORECASE,
)


def extract_inline_tags(description: str) -> TagExtraction:
    """Separa el bloque final de tags de la descripción.

    Solo cuenta un bloque entre paréntesis al final del texto y compuesto
    únicamente por ``#tokens``; cualquier otro paréntesis queda intacto.
    """
    match = _TAG_BLOCK_RE.search(description)
    if not match:
        return TagExtraction(clean=description, tags=[])

    tags: list[str] = []
    for raw in match.group(1).split():
        tag = raw.lstrip("#").lower()
        if tag not in tags:
            tags.append(tag)

    return TagExtraction(clean=description[: match.start()].strip(), tags=tags)
