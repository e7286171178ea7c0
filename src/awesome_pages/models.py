"""DTOs internos que circulan entre las etapas del parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from markdown_it.tree import SyntaxTreeNode

if TYPE_CHECKING:
    from awesome_pages.schemas import Domain, SearchIndex


@dataclass(frozen=True)
class Diagnostic:
    """Condición blanda detectada al parsear; nunca interrumpe el proceso."""

    code: str
    message: str


@dataclass(frozen=True)
class TagExtraction:
    """Descripción sin el bloque final ``(#tag ...)`` y los tags encontrados."""

    clean: str
    tags: list[str] = field(default_factory=list)


@dataclass
class VisibilityResult:
    """Nodos de primer nivel que sobreviven a los marcadores awesome-pages."""

    nodes: list[SyntaxTreeNode]
    has_explicit_blocks: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedDocument:
    """Resultado de parsear un markdown: AST filtrado + metadata."""

    ast: SyntaxTreeNode
    title: str | None
    description: str | None
    description_html: str | None
    frontmatter: dict[str, Any] | None
    language: str | None
    has_explicit_blocks: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass
class ProcessResult:
    """Resultado de procesar un documento completo."""

    parsed: ParsedDocument
    domain: Domain
    index: SearchIndex
    duration_seconds: float = 0.0
