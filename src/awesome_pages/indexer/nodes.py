"""Helpers compartidos sobre el AST de markdown-it (``SyntaxTreeNode``)."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.tasklists import tasklists_plugin

_SILENT_TYPES = frozenset({"html_inline", "html_block", "image"})
_BREAK_TYPES = frozenset({"softbreak", "hardbreak"})
_LEAF_TEXT_TYPES = frozenset({"text", "code_inline"})


@lru_cache(maxsize=1)
def create_markdown() -> MarkdownIt:
    """Instancia única de markdown-it con gramática tipo GitHub.

    Tablas, strikethrough, autolinks y task lists. El HTML crudo se reconoce
    porque los marcadores de visibilidad son comentarios, pero nunca se emite
    al renderizar fragmentos.

    Solo se autolinkean URLs con esquema (``https://...``) y emails; palabras
    como ``README.md`` o ``Socket.io`` quedan como texto.
    """
    md = MarkdownIt("gfm-like", {"html": True}).use(tasklists_plugin)
    md.linkify.set({"fuzzy_link": False})
    return md


def parse_tree(text: str) -> SyntaxTreeNode:
    return SyntaxTreeNode(create_markdown().parse(text))


def rebuild_tree(nodes: Iterable[SyntaxTreeNode]) -> SyntaxTreeNode:
    """Arma una raíz nueva con los nodos de primer nivel dados."""
    return SyntaxTreeNode([tok for node in nodes for tok in node.to_tokens()])


def heading_level(node: SyntaxTreeNode) -> int:
    return int(node.tag[1:])


def node_text(node: SyntaxTreeNode) -> str:
    """Texto plano de un nodo; imágenes y HTML crudo no aportan texto."""
    if node.type in _SILENT_TYPES:
        return ""
    if node.type in _BREAK_TYPES:
        return "\n"
    if node.type in _LEAF_TEXT_TYPES:
        return node.content
    return "".join(node_text(child) for child in node.children)


def inline_children(node: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    """Hijos inline de un bloque (paragraph, heading)."""
    for child in node.children:
        if child.type == "inline":
            return list(child.children)
    return []


def inline_tokens(nodes: Iterable[SyntaxTreeNode]) -> list[Token]:
    return [tok for node in nodes for tok in node.to_tokens()]


def render_fragment(tokens: list[Token]) -> str | None:
    """Renderiza tokens inline como ``<p>…</p>`` seguro.

    Los tokens de HTML crudo se descartan y el texto se escapa.
    Retorna None si el fragmento queda vacío.
    """
    md = create_markdown()
    safe = [tok for tok in tokens if tok.type != "html_inline"]
    inner = md.renderer.renderInline(safe, md.options, {}).strip()
    if not inner:
        return None
    return f"<p>{inner}</p>"


def text_token(content: str) -> Token:
    return Token(type="text", tag="", nesting=0, content=content)
