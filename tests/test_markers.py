"""Tests para el filtro de visibilidad por marcadores awesome-pages."""

from __future__ import annotations

import textwrap

from awesome_pages.indexer.markers import filter_visibility, has_explicit_blocks
from awesome_pages.indexer.nodes import parse_tree


def _filter(md: str):
    return filter_visibility(parse_tree(textwrap.dedent(md)).children)


def test_explicit_blocks_keep_only_inside(explicit_blocks_md: str):
    """Con un start en el documento solo sobrevive lo que está dentro."""
    result = _filter(explicit_blocks_md)

    assert result.has_explicit_blocks is True
    assert [n.type for n in result.nodes] == ["heading", "paragraph"]
    assert result.diagnostics == []


def test_ignore_blocks_without_explicit_blocks():
    """Sin start, todo es visible salvo los bloques ignore."""
    result = _filter("""\
        # Hello

        Just regular content.

        <!--awesome-pages:ignore:start-->

        This is ignored.

        <!--awesome-pages:ignore:end-->

        More content.
    """)

    assert result.has_explicit_blocks is False
    assert [n.type for n in result.nodes] == ["heading", "paragraph", "paragraph"]


def test_ignore_inside_explicit_block():
    """ignore dentro de start/end excluye igual."""
    result = _filter("""\
        <!--awesome-pages:start-->

        Kept.

        <!--awesome-pages:ignore:start-->

        Dropped.

        <!--awesome-pages:ignore:end-->

        Kept too.

        <!--awesome-pages:end-->
    """)

    texts = [n.children[0].content for n in result.nodes]
    assert texts == ["Kept.", "Kept too."]


def test_extra_end_markers_are_noops():
    """Un end sin start no deja contadores negativos ni oculta contenido."""
    result = _filter("""\
        <!--awesome-pages:ignore:end-->

        Visible.

        <!--awesome-pages:ignore:start-->

        Hidden.

        <!--awesome-pages:ignore:end-->
    """)

    assert len(result.nodes) == 1
    assert [d.code for d in result.diagnostics] == ["unmatched_ignore_end"]


def test_unclosed_start_is_permissive():
    """Un start sin end mantiene visible el resto del documento."""
    result = _filter("""\
        Outside.

        <!--awesome-pages:start-->

        Inside one.

        Inside two.
    """)

    assert len(result.nodes) == 2
    assert [d.code for d in result.diagnostics] == ["unclosed_block"]


def test_html_comments_never_survive():
    """Comentarios que no son marcadores también se descartan."""
    result = _filter("""\
        <!-- just a note -->

        Text.
    """)

    assert [n.type for n in result.nodes] == ["paragraph"]


def test_has_explicit_blocks_detects_start_anywhere():
    nodes = parse_tree("Intro.\n\n<!--awesome-pages:start-->\n").children
    assert has_explicit_blocks(nodes) is True
    assert has_explicit_blocks(parse_tree("Intro.\n").children) is False


def test_unclosed_ignore_hides_rest_of_document():
    """Un ignore:start sin cierre oculta todo lo que sigue."""
    result = _filter("""\
        Visible.

        <!--awesome-pages:ignore:start-->

        Hidden.

        More hidden.
    """)

    assert [n.children[0].content for n in result.nodes] == ["Visible."]
    assert [d.code for d in result.diagnostics] == ["unclosed_ignore_block"]


def test_unclosed_start_survives_nested_ignore():
    """Tras cerrar un ignore, un start sin end sigue mostrando contenido."""
    result = _filter("""\
        Outside.

        <!--awesome-pages:start-->

        Kept.

        <!--awesome-pages:ignore:start-->

        Dropped.

        <!--awesome-pages:ignore:end-->

        Still kept.
    """)

    assert [n.children[0].content for n in result.nodes] == ["Kept.", "Still kept."]
    assert [d.code for d in result.diagnostics] == ["unclosed_block"]
