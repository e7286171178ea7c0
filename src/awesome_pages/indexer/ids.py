"""Slugs e IDs deterministas de items, aislados por sección."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Slug en minúsculas, sin diacríticos, con guiones simples.

    Idempotente: ``slugify(slugify(x)) == slugify(x)``.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RE.sub("-", ascii_only.lower()).strip("-")


class ItemIdAssigner:
    """Asigna IDs únicos dentro de un scope (la sección del item).

    Se crea uno por construcción de dominio; mismos títulos en el mismo
    orden producen siempre los mismos IDs. Colisiones dentro del scope
    reciben sufijo ``-2``, ``-3``, ...
    """

    def __init__(self) -> None:
        self._taken: dict[str, set[str]] = {}

    def assign(self, scope: str, title: str) -> str:
        taken = self._taken.setdefault(scope, set())
        base = slugify(title)
        candidate = base
        n = 2
        while candidate in taken:
            candidate = f"{base}-{n}"
            n += 1
        taken.add(candidate)
        return candidate
