"""Parse results.

A parse always returns one of two result values instead of raising:
`ParseSuccess` carrying the canonical document, or `ParseFailure`
carrying the batched diagnostics. Callers preferring exceptions can
call `unwrap()` on either of them.
"""

from typing import Literal

from pydantic import Field

from screendoc.diagnostics import Diagnostic, DiagnosticFormatter
from screendoc.errors import DocumentError
from screendoc.models import SchemaModel
from screendoc.schema import Document


class ParseSuccess(SchemaModel):
    """Result of a successful parse."""

    success: Literal[True] = True
    document: Document

    def unwrap(self) -> Document:
        """Return the parsed document."""
        return self.document


class ParseFailure(SchemaModel):
    """Result of a failed parse."""

    success: Literal[False] = False
    diagnostics: tuple[Diagnostic, ...] = Field(
        min_length=1,
        title='Diagnostics',
        description='Every problem found in the document, in document order.',
    )

    def unwrap(self) -> Document:
        """Raise the diagnostics as an exception.

        Raises:
            DocumentError: Always.
        """
        raise DocumentError(self.diagnostics)

    def format(self) -> str:
        """Format the diagnostics, one per line."""
        return DiagnosticFormatter.format(self.diagnostics)


#: Outcome of parsing a document.
type ParseResult = ParseSuccess | ParseFailure
