"""Orquestador: markdown -> ParsedDocument -> Domain -> SearchIndex."""

from __future__ import annotations

import time

import structlog

from awesome_pages.config import Settings, get_settings
from awesome_pages.indexer.builder import build_domain
from awesome_pages.indexer.parser import parse_markdown
from awesome_pages.language import detect_language
from awesome_pages.models import ParsedDocument, ProcessResult
from awesome_pages.search.index import build_search_index

logger = structlog.get_logger(__name__)


def resolve_language(parsed: ParsedDocument, settings: Settings) -> str:
    """Idioma del documento: frontmatter ``language`` > detección > default."""
    if parsed.language:
        return parsed.language
    if not settings.language_detection:
        return settings.default_language

    sample = " ".join(part for part in (parsed.title, parsed.description) if part)
    return detect_language(
        sample,
        min_confidence=settings.language_min_confidence,
        min_length=settings.language_min_length,
    )


def process_document(
    text: str,
    source_id: str,
    *,
    generated_at: str | None = None,
    settings: Settings | None = None,
) -> ProcessResult:
    """Pipeline completo para un documento ya leído.

    No hace I/O: la lectura del markdown (disco, HTTP, GitHub) le
    corresponde al llamador. Cada llamada es independiente de las demás.
    """
    t0 = time.time()
    settings = settings or get_settings()

    parsed = parse_markdown(text, source_id)
    language = resolve_language(parsed, settings)

    domain = build_domain(
        parsed.ast,
        source=source_id,
        title=parsed.title,
        description=parsed.description,
        description_html=parsed.description_html,
        frontmatter=parsed.frontmatter,
        language=language,
        generated_at=generated_at,
    )
    index = build_search_index(domain, settings)

    result = ProcessResult(
        parsed=parsed,
        domain=domain,
        index=index,
        duration_seconds=round(time.time() - t0, 3),
    )
    logger.info(
        "document_processed",
        source=source_id,
        language=language,
        sections=len(domain.sections),
        items=len(domain.items),
        terms=index.stats.terms,
        diagnostics=len(parsed.diagnostics),
        duration=result.duration_seconds,
    )
    return result
