"""Parseo de markdown tipo awesome list: frontmatter, metadata y AST filtrado."""

from __future__ import annotations

import posixpath
import re
from typing import Any

import structlog
from frontmatter.default_handlers import YAMLHandler
from markdown_it.tree import SyntaxTreeNode

from awesome_pages.indexer.markers import filter_visibility
from awesome_pages.indexer.nodes import (
    heading_level,
    inline_children,
    inline_tokens,
    node_text,
    parse_tree,
    rebuild_tree,
    render_fragment,
    text_token,
)
from awesome_pages.language import normalize_bcp47
from awesome_pages.models import Diagnostic, ParsedDocument

logger = structlog.get_logger(__name__)

_FM_LINE_RE = re.compile(r"^(\w+):\s*(.+)$", re.ASCII)
_FM_QUOTES_RE = re.compile(r"^[\"']|[\"']$")

_fm_handler = YAMLHandler()


def parse_frontmatter(raw: str) -> dict[str, Any] | None:
    """Escáner línea a línea de ``clave: valor``; no es un parser YAML.

    Las líneas que no calzan se ignoran. Sin claves válidas retorna None.
    """
    result: dict[str, Any] = {}
    for line in raw.splitlines():
        match = _FM_LINE_RE.match(line)
        if match:
            key, value = match.groups()
            result[key] = _FM_QUOTES_RE.sub("", value).strip()
    return result or None


def _split_frontmatter(text: str) -> tuple[str | None, str, list[Diagnostic]]:
    """Separa el bloque ``---`` inicial del body."""
    if not _fm_handler.detect(text):
        return None, text, []
    try:
        raw, body = _fm_handler.split(text)
    except ValueError:
        logger.warning("frontmatter_unclosed")
        return None, text, [
            Diagnostic("frontmatter_unclosed", "bloque --- inicial sin cierre; se trata como body")
        ]
    return raw, body, []


def _fm_string(frontmatter: dict[str, Any] | None, key: str) -> str | None:
    if not frontmatter:
        return None
    value = frontmatter.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _extract_metadata(
    nodes: list[SyntaxTreeNode],
    frontmatter: dict[str, Any] | None,
    source_id: str | None,
) -> tuple[str | None, str | None, str | None]:
    """Obtiene título, descripción y su HTML desde el árbol sin filtrar.

    Título: frontmatter > primer H1 > basename de ``source_id``.
    Descripción: frontmatter > primer párrafo tras el título y antes del
    primer heading de nivel >= 2. El primer párrafo candidato cierra la
    búsqueda aunque esté vacío.
    """
    title = _fm_string(frontmatter, "title")
    description = _fm_string(frontmatter, "description")
    description_html = render_fragment([text_token(description)]) if description else None
    title_seen = title is not None

    for node in nodes:
        if node.type == "html_block":
            continue

        if node.type == "heading":
            level = heading_level(node)
            if not title and level == 1:
                title = node_text(node).strip()
                title_seen = True
                continue
            if title_seen and level >= 2:
                break

        if description is None and title_seen and node.type == "paragraph":
            text = node_text(node).strip()
            if text:
                description = text
                description_html = render_fragment(inline_tokens(inline_children(node)))
            break

    if not title and source_id:
        title = posixpath.basename(source_id)

    return title or None, description, description_html


def _frontmatter_language(frontmatter: dict[str, Any] | None) -> str | None:
    value = _fm_string(frontmatter, "language")
    return normalize_bcp47(value) if value else None


def parse_markdown(text: str, source_id: str | None = None) -> ParsedDocument:
    """Parsea un markdown a ``ParsedDocument``.

    La metadata se extrae del árbol completo; el filtro de visibilidad se
    aplica al final, así los marcadores nunca ocultan título o descripción.

    Args:
        text: Contenido markdown crudo.
        source_id: Identificador opaco de la fuente (fallback del título).
    """
    raw_fm, body, diagnostics = _split_frontmatter(text)

    frontmatter: dict[str, Any] | None = None
    if raw_fm is not None:
        frontmatter = parse_frontmatter(raw_fm)
        if frontmatter is None:
            diagnostics.append(
                Diagnostic("frontmatter_empty", "frontmatter sin líneas clave: valor")
            )

    full_tree = parse_tree(body)
    title, description, description_html = _extract_metadata(
        full_tree.children, frontmatter, source_id
    )

    visibility = filter_visibility(full_tree.children)
    diagnostics.extend(visibility.diagnostics)
    for diag in visibility.diagnostics:
        logger.warning("visibility_marker_mismatch", code=diag.code, source=source_id)

    return ParsedDocument(
        ast=rebuild_tree(visibility.nodes),
        title=title,
        description=description,
        description_html=description_html,
        frontmatter=frontmatter,
        language=_frontmatter_language(frontmatter),
        has_explicit_blocks=visibility.has_explicit_blocks,
        diagnostics=diagnostics,
    )
