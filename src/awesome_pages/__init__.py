"""Parser de awesome lists: markdown -> dominio validado + índice de búsqueda."""

from awesome_pages.indexer.builder import build_domain
from awesome_pages.indexer.ids import ItemIdAssigner, slugify
from awesome_pages.indexer.parser import parse_markdown
from awesome_pages.indexer.pipeline import process_document
from awesome_pages.indexer.tags import extract_inline_tags
from awesome_pages.language import detect_language, normalize_bcp47
from awesome_pages.schemas import Domain, DomainValidationError, SearchIndex, load_domain
from awesome_pages.search.index import build_search_index
from awesome_pages.search.tokenizer import tokenize

__version__ = "0.1.0"

__all__ = [
    "Domain",
    "DomainValidationError",
    "ItemIdAssigner",
    "SearchIndex",
    "__version__",
    "build_domain",
    "build_search_index",
    "detect_language",
    "extract_inline_tags",
    "load_domain",
    "normalize_bcp47",
    "parse_markdown",
    "process_document",
    "slugify",
    "tokenize",
]
