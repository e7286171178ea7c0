"""Filtro de visibilidad por marcadores ``<!--awesome-pages:...-->``.

Dos pasadas sobre los nodos de primer nivel:

1. Si existe algún ``start`` el documento tiene bloques explícitos y solo
   se conserva lo que está dentro de ``start``/``end``.
2. ``ignore:start``/``ignore:end`` excluyen contenido en ambos modos.

Los contadores de profundidad nunca bajan de cero: un ``end`` sobrante no
hace nada. Los bloques HTML crudos (marcadores, comentarios o no) nunca
llegan al árbol de salida.
"""

from __future__ import annotations

import structlog
from markdown_it.tree import SyntaxTreeNode

from awesome_pages.models import Diagnostic, VisibilityResult

logger = structlog.get_logger(__name__)

MARKER_START = "<!--awesome-pages:start-->"
MARKER_END = "<!--awesome-pages:end-->"
MARKER_IGNORE_START = "<!--awesome-pages:ignore:start-->"
MARKER_IGNORE_END = "<!--awesome-pages:ignore:end-->"


def _marker(node: SyntaxTreeNode) -> str | None:
    if node.type != "html_block":
        return None
    value = node.content.strip()
    if value in (MARKER_START, MARKER_END, MARKER_IGNORE_START, MARKER_IGNORE_END):
        return value
    return None


def has_explicit_blocks(nodes: list[SyntaxTreeNode]) -> bool:
    return any(_marker(node) == MARKER_START for node in nodes)


def filter_visibility(nodes: list[SyntaxTreeNode]) -> VisibilityResult:
    """Decide qué nodos de primer nivel sobreviven."""
    explicit = has_explicit_blocks(nodes)
    diagnostics: list[Diagnostic] = []
    kept: list[SyntaxTreeNode] = []
    parse_depth = 0
    ignore_depth = 0

    for node in nodes:
        marker = _marker(node)
        if marker == MARKER_START:
            parse_depth += 1
            continue
        if marker == MARKER_END:
            if parse_depth == 0:
                diagnostics.append(
                    Diagnostic("unmatched_block_end", f"{MARKER_END} sin {MARKER_START} previo")
                )
            parse_depth = max(0, parse_depth - 1)
            continue
        if marker == MARKER_IGNORE_START:
            ignore_depth += 1
            continue
        if marker == MARKER_IGNORE_END:
            if ignore_depth == 0:
                diagnostics.append(
                    Diagnostic(
                        "unmatched_ignore_end",
                        f"{MARKER_IGNORE_END} sin {MARKER_IGNORE_START} previo",
                    )
                )
            ignore_depth = max(0, ignore_depth - 1)
            continue
        if node.type == "html_block":
            continue

        visible = parse_depth > 0 and ignore_depth == 0 if explicit else ignore_depth == 0
        if visible:
            kept.append(node)

    if parse_depth > 0:
        diagnostics.append(
            Diagnostic("unclosed_block", f"{parse_depth} bloque/s {MARKER_START} sin cerrar")
        )
    if ignore_depth > 0:
        diagnostics.append(
            Diagnostic(
                "unclosed_ignore_block",
                f"{ignore_depth} bloque/s {MARKER_IGNORE_START} sin cerrar",
            )
        )

    logger.debug(
        "visibility_filtered",
        has_explicit_blocks=explicit,
        kept=len(kept),
        dropped=len(nodes) - len(kept),
    )
    return VisibilityResult(nodes=kept, has_explicit_blocks=explicit, diagnostics=diagnostics)
