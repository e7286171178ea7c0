"""Transformación del AST filtrado a un ``Domain`` validado (schema v1)."""

from __future__ import annotations

import re
from collections.abc import Iterator
from datetime import datetime, timezone
from functools import partial, reduce
from typing import Any, NamedTuple

import structlog
from markdown_it.tree import SyntaxTreeNode

from awesome_pages.indexer.ids import ItemIdAssigner, slugify
from awesome_pages.indexer.nodes import (
    heading_level,
    inline_children,
    inline_tokens,
    node_text,
    render_fragment,
    text_token,
)
from awesome_pages.indexer.tags import extract_inline_tags
from awesome_pages.schemas import Domain, DomainValidationError, validate_domain

logger = structlog.get_logger(__name__)

_LIST_TYPES = frozenset({"bullet_list", "ordered_list"})
_LEADING_SEP_RE = re.compile(r"^[\s\-–—:]+")
_WS_RE = re.compile(r"\s+")


class _BuildState(NamedTuple):
    """Acumulador inmutable del recorrido: cada paso retorna uno nuevo."""

    sections: tuple[dict[str, Any], ...] = ()
    items: tuple[dict[str, Any], ...] = ()
    # id de la sección abierta por profundidad (None = hueco, p.ej. H2 -> H4)
    open_sections: tuple[str | None, ...] = ()

    def current_section(self) -> str | None:
        for section_id in reversed(self.open_sections):
            if section_id is not None:
                return section_id
        return None


def utc_now_iso() -> str:
    """Timestamp UTC en ISO-8601 con milisegundos y sufijo Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _iter_blocks(nodes: list[SyntaxTreeNode]) -> Iterator[SyntaxTreeNode]:
    """Headings y listas en orden de documento (preorden, incluye anidadas)."""
    for node in nodes:
        if node.type == "heading":
            yield node
            continue
        if node.type in _LIST_TYPES:
            yield node
        if node.type != "inline":
            yield from _iter_blocks(node.children)


def _open_section(state: _BuildState, node: SyntaxTreeNode) -> _BuildState:
    level = heading_level(node)
    if level < 2:
        return state

    depth = level - 2
    stack = state.open_sections
    parent_id = stack[depth - 1] if 0 < depth <= len(stack) else None

    title = node_text(node).strip()
    section_id = slugify(title)
    section = {
        "id": section_id,
        "title": title,
        "parent_id": parent_id,
        "depth": depth,
        "order": len(state.sections),
        "path": f"{parent_id}/{section_id}" if parent_id else section_id,
        "description_html": None,
    }

    # Cierra las secciones más profundas; rellena huecos si se salta un nivel.
    opened = stack[:depth] + (None,) * (depth - len(stack)) + (section_id,)
    return state._replace(sections=state.sections + (section,), open_sections=opened)


def _first_paragraph(list_item: SyntaxTreeNode) -> SyntaxTreeNode | None:
    for child in list_item.children:
        if child.type == "paragraph":
            return child
    return None


def _describe(rest: list[SyntaxTreeNode]) -> tuple[str | None, list[str], str | None]:
    """Descripción en texto plano, tags inline y HTML a partir de los hijos sin link."""
    # Los separadores iniciales del HTML solo se quitan si el primer hijo es texto.
    strip_first = bool(rest) and rest[0].type == "text"
    rest = [c for c in rest if c.type != "html_inline"]
    raw = _WS_RE.sub(" ", " ".join(c.content for c in rest if c.type == "text")).strip()
    normalized = _LEADING_SEP_RE.sub("", raw)
    extraction = extract_inline_tags(normalized) if normalized else None
    description = extraction.clean if extraction and extraction.clean else None
    tags = extraction.tags if extraction else []

    description_html = None
    if rest:
        tokens = inline_tokens(rest)
        if strip_first:
            tokens[0] = text_token(_LEADING_SEP_RE.sub("", rest[0].content))
        description_html = render_fragment(tokens)

    return description, tags, description_html


def _item_from_paragraph(
    para: SyntaxTreeNode,
    section_id: str,
    order: int,
    assigner: ItemIdAssigner,
) -> dict[str, Any]:
    children = inline_children(para)
    link = next((c for c in children if c.type == "link"), None)
    title = node_text(link if link is not None else para).strip()
    rest = [c for c in children if c is not link]
    description, tags, description_html = _describe(rest)

    return {
        "id": assigner.assign(section_id, title),
        "section_id": section_id,
        "title": title,
        "url": link.attrs.get("href") if link is not None else None,
        "description": description,
        "description_html": description_html,
        "order": order,
        "tags": tags,
    }


def _collect_items(
    state: _BuildState, node: SyntaxTreeNode, assigner: ItemIdAssigner
) -> _BuildState:
    section_id = state.current_section()
    if section_id is None:
        return state

    items: list[dict[str, Any]] = []
    for list_item in node.children:
        para = _first_paragraph(list_item)
        if para is None:
            continue
        items.append(_item_from_paragraph(para, section_id, len(items), assigner))

    return state._replace(items=state.items + tuple(items))


def _step(state: _BuildState, node: SyntaxTreeNode, *, assigner: ItemIdAssigner) -> _BuildState:
    if node.type == "heading":
        return _open_section(state, node)
    return _collect_items(state, node, assigner)


def build_domain(
    tree: SyntaxTreeNode,
    *,
    source: str,
    title: str | None = None,
    description: str | None = None,
    description_html: str | None = None,
    frontmatter: dict[str, Any] | None = None,
    language: str | None = None,
    generated_at: str | None = None,
) -> Domain:
    """Construye y valida el dominio desde el AST ya filtrado.

    Cada heading de nivel >= 2 abre una sección (profundidad 0 = H2); cada
    lista bajo una sección produce items. Los IDs de items son únicos por
    sección dentro de esta llamada.

    Raises:
        DomainValidationError: con todos los problemas de schema e
            integridad referencial agregados.
    """
    assigner = ItemIdAssigner()
    state = reduce(partial(_step, assigner=assigner), _iter_blocks(tree.children), _BuildState())

    payload = {
        "schema_version": 1,
        "meta": {
            "title": title,
            "description": description,
            "description_html": description_html,
            "generated_at": generated_at or utc_now_iso(),
            "source": source,
            "language": language,
            "frontmatter": frontmatter,
        },
        "sections": list(state.sections),
        "items": list(state.items),
    }

    try:
        domain = validate_domain(payload)
    except DomainValidationError as exc:
        logger.error("domain_invalid", source=source, issues=exc.error_count)
        raise

    logger.info(
        "domain_built",
        source=source,
        sections=len(domain.sections),
        items=len(domain.items),
    )
    return domain
