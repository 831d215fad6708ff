"""Screen document parser.

This module defines the high-level parser that runs the whole document
pipeline:

    text -> read -> validate -> (errors? stop) -> normalize -> Document

Each stage reports problems as diagnostics. The parser never raises for
a malformed document; it returns a `ParseFailure` instead, leaving the
caller to decide whether to surface, log or abort.
"""

from typing import TYPE_CHECKING

from pydantic import ValidationError
from yaml import SafeLoader

from screendoc.diagnostics import Diagnostic
from screendoc.errors import DocumentSyntaxError
from screendoc.settings import ParserSettings

from .normalizer import DocumentNormalizer
from .reader import DocumentLoader, read_document
from .results import ParseFailure, ParseSuccess
from .validator import StructureValidator

if TYPE_CHECKING:
    from io import TextIOBase

if TYPE_CHECKING:
    from .results import ParseResult


class DocumentParser:
    """Parser of screen documents.

    The parser holds no state between calls: every parse is a pure
    function of its input text and the parser settings, so a single
    instance may be shared freely.
    """

    def __init__(self, loader: type[SafeLoader] = DocumentLoader,
                 settings: ParserSettings | None = None) -> None:
        """Initialize the document parser.

        Args:
            loader: YAML loader class used to deserialize documents.
            settings: Pipeline settings. Defaults are resolved from
                the environment when omitted.
        """
        self.loader = loader
        self.settings = settings or ParserSettings()

    def parse(self, content: 'TextIOBase | str | bytes') -> 'ParseResult':
        """Parse a document into its canonical form.

        Args:
            content: YAML content as a string or file-like object.

        Returns:
            `ParseSuccess` with the canonical document, or
            `ParseFailure` with every diagnostic found.
        """
        try:
            raw = read_document(content, loader=self.loader, limit=self.settings.max_depth)

        except DocumentSyntaxError as base:
            return ParseFailure(diagnostics=(base.diagnostic,))

        diagnostics = StructureValidator(self.settings, raw.positions).validate(raw.tree)
        if diagnostics:
            return ParseFailure(diagnostics=tuple(diagnostics))

        normalizer = DocumentNormalizer(self.settings)
        tree = normalizer.restructure(raw.tree)

        try:
            document = normalizer.build(tree)

        except ValidationError as base:
            return ParseFailure(diagnostics=tuple(Diagnostic.from_pydantic_error(base, tree)))

        return ParseSuccess(document=document)


def parse_document(content: 'TextIOBase | str | bytes',
                   settings: ParserSettings | None = None) -> 'ParseResult':
    """Parse a document with the default loader.

    Args:
        content: YAML content as a string or file-like object.
        settings: Pipeline settings.

    Returns:
        The parse result.
    """
    return DocumentParser(settings=settings).parse(content)
