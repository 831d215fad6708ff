"""Screen document pipeline.

This package turns YAML text into a canonical `Document`:
- the reader deserializes the text and indexes node positions;
- the structural validator collects every structural problem;
- the normalizer resolves authoring shapes and builds the document.

The primary public entry point is `DocumentParser` (or the
`parse_document` shortcut), which runs the whole pipeline and returns
a `ParseSuccess` or a `ParseFailure` without ever raising for a
malformed document.
"""

from .normalizer import DocumentNormalizer, normalize_document
from .parser import DocumentParser, parse_document
from .reader import DocumentLoader, RawDocument, read_document
from .results import ParseFailure, ParseResult, ParseSuccess
from .validator import StructureValidator

__all__ = (
    'DocumentLoader',
    'DocumentNormalizer',
    'DocumentParser',
    'ParseFailure',
    'ParseResult',
    'ParseSuccess',
    'RawDocument',
    'StructureValidator',
    'normalize_document',
    'parse_document',
    'read_document',
)
