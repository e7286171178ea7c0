"""Índice invertido con pesos por campo a partir de un ``Domain``."""

from __future__ import annotations

import re
from collections import defaultdict

import structlog

from awesome_pages.config import Settings, get_settings
from awesome_pages.schemas import (
    Domain,
    FieldWeights,
    IndexedDoc,
    IndexMeta,
    IndexStats,
    Posting,
    SearchIndex,
)
from awesome_pages.search.stopwords import get_stopwords
from awesome_pages.search.tokenizer import tokenize

logger = structlog.get_logger(__name__)

_GITHUB_SOURCE_RE = re.compile(r"^github:([^@]+)@([^:]+):(.+)$")

_FIELDS = ("title", "description", "tags")


def parse_source(source: str) -> dict[str, str]:
    """``github:owner/repo@ref:path`` -> {repo, ref, path}; otro formato -> {source}."""
    match = _GITHUB_SOURCE_RE.match(source)
    if match:
        repo, ref, path = match.groups()
        return {"repo": repo, "ref": ref, "path": path}
    return {"source": source}


def _as_number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def build_search_index(domain: Domain, settings: Settings | None = None) -> SearchIndex:
    """Construye el índice: docs mínimos por item y postings por término.

    El peso de un posting es la suma de ocurrencias por campo multiplicadas
    por el peso del campo (título 2, descripción 1, cada tag 1.5 por defecto).
    Los postings se ordenan por peso descendente y, a igual peso, por id.
    """
    settings = settings or get_settings()
    weights = FieldWeights(
        title=settings.title_weight,
        description=settings.description_weight,
        tags=settings.tags_weight,
    )
    stopwords = get_stopwords(domain.meta.language or settings.default_language)

    docs: dict[str, IndexedDoc] = {}
    # term -> doc id -> field -> ocurrencias
    counts: dict[str, dict[str, dict[str, int]]] = defaultdict(dict)

    for item in domain.items:
        docs[item.id] = IndexedDoc(title=item.title, url=item.url, section_id=item.section_id)

        fields = {
            "title": [item.title],
            "description": [item.description] if item.description else [],
            "tags": item.tags,
        }
        for field, texts in fields.items():
            for text in texts:
                for token in tokenize(text, stopwords):
                    freqs = counts[token].setdefault(item.id, dict.fromkeys(_FIELDS, 0))
                    freqs[field] += 1

    terms: dict[str, list[Posting]] = {}
    for term, per_doc in counts.items():
        postings = [
            Posting(
                id=doc_id,
                f=_as_number(sum(freqs[field] * getattr(weights, field) for field in _FIELDS)),
            )
            for doc_id, freqs in per_doc.items()
        ]
        postings.sort(key=lambda p: (-p.f, p.id))
        terms[term] = postings

    index = SearchIndex(
        meta=IndexMeta(
            **parse_source(domain.meta.source),
            generated_at=domain.meta.generated_at,
            field_weights=weights,
        ),
        stats=IndexStats(docs=len(docs), terms=len(terms)),
        docs=docs,
        terms=terms,
    )
    logger.info("search_index_built", docs=index.stats.docs, terms=index.stats.terms)
    return index
