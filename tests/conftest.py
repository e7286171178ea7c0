"""Fixtures compartidas para tests."""

from __future__ import annotations

import textwrap

import pytest


@pytest.fixture
def awesome_md() -> str:
    """Awesome list típica con frontmatter, jerarquía de secciones y tags."""
    return textwrap.dedent("""\
        ---
        title: "Awesome Tools"
        owner: team-docs
        ---

        # Awesome Tools

        A curated list of developer tools.

        ## Contents

        <!--awesome-pages:ignore:start-->

        - [Editors](#editors)
        - [Hosting](#hosting)

        <!--awesome-pages:ignore:end-->

        ## Editors

        - [Neovim](https://neovim.io) - Vim-fork focused on extensibility (#editor #vim)
        - [Helix](https://helix-editor.com) — A post-modern modal editor.

        ### Plugins

        - [Telescope](https://github.com/nvim-telescope/telescope.nvim): fuzzy finder (#lua)

        ## Hosting

        - [GitHub](https://github.com) - hosts code (#git)
        - [GitLab](https://gitlab.com) - hosts code too
    """)


@pytest.fixture
def explicit_blocks_md() -> str:
    """Documento con bloques explícitos start/end."""
    return textwrap.dedent("""\
        # Before

        This is filtered.

        <!--awesome-pages:start-->

        # Inside

        This is kept.

        <!--awesome-pages:end-->

        This is also filtered.
    """)
