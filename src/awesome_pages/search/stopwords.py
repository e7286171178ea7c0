"""Stopwords por idioma (stopwords-iso) sin la jerga técnica."""

from __future__ import annotations

from functools import lru_cache

import stopwordsiso

from awesome_pages.language import DEFAULT_LANGUAGE, primary_subtag

# Términos técnicos que nunca son stopwords aunque la lista los incluya.
TECH_TERMS = frozenset({
    # AI/ML
    "ai", "ml", "llm", "gpt", "nlp", "cv", "nn",
    # Web
    "html", "css", "js", "ts", "jsx", "tsx", "xml", "json", "yaml", "toml", "svg",
    "http", "https", "ssh", "ftp", "tcp", "udp", "ip", "dns", "url", "uri",
    "api", "rest", "graphql", "grpc", "soap", "cors", "csrf", "xss", "sql", "nosql",
    # Herramientas de desarrollo
    "git", "npm", "yarn", "pnpm", "pip", "cli", "gui", "ide", "sdk", "ci", "cd", "devops",
    # Cloud / infraestructura
    "aws", "gcp", "azure", "cdn", "vpn", "ssl", "tls", "k8s", "docker",
    # Bases de datos
    "db", "orm", "crud",
    # Diseño / UX
    "ui", "ux", "seo", "a11y", "i18n", "l10n",
    # Arquitecturas
    "mvc", "mvvm", "spa", "pwa", "ssr", "csr",
    # Auth
    "jwt", "oauth", "saml", "sso",
    # APIs de browser
    "dom", "bom", "xhr", "ajax", "wasm",
    # Sistemas operativos
    "os", "ios", "macos", "linux", "unix",
    # Formatos
    "pdf", "csv", "md", "rst",
})


@lru_cache(maxsize=32)
def get_stopwords(language: str) -> frozenset[str]:
    """Stopwords del subtag primario ('pt-br' -> 'pt'); inglés si no hay lista."""
    lang = primary_subtag(language or DEFAULT_LANGUAGE)
    if not stopwordsiso.has_lang(lang):
        lang = DEFAULT_LANGUAGE
    return frozenset(stopwordsiso.stopwords(lang)) - TECH_TERMS
