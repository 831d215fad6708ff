"""Core exception and warning hierarchy.

Malformed documents are reported as diagnostics, never as exceptions.
The types defined here exist for callers that prefer exceptions
(`ParseFailure.unwrap`), for the document reader, which signals
unreadable text to the parser, and for non-fatal events emitted while
a valid document is normalized.
"""

from typing import TYPE_CHECKING

from screendoc.diagnostics import DiagnosticFormatter

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from screendoc.diagnostics import Diagnostic


class DocumentWarning(UserWarning):
    """Warning emitted for non-fatal normalization events.

    For example, when two entries of a legacy array-form collection
    derive the same key and one of them has to be renamed.
    """


class ScreenDocError(Exception):
    """Base exception for all screendoc errors.

    All custom exceptions raised by the library should inherit from
    this class to allow unified error handling by callers.
    """


class DocumentError(ScreenDocError):
    """Error carrying the diagnostics of a document that failed to parse."""

    def __init__(self, diagnostics: 'Iterable[Diagnostic]') -> None:
        """Initialize an error.

        Args:
            diagnostics: Diagnostics reported for the document.
        """
        self.diagnostics = tuple(diagnostics)

        super().__init__(DiagnosticFormatter.format(self.diagnostics))


class DocumentSyntaxError(ScreenDocError):
    """Error raised when document text cannot be deserialized.

    The error always carries exactly one `SYNTAX` diagnostic.
    """

    def __init__(self, diagnostic: 'Diagnostic') -> None:
        """Initialize an error.

        Args:
            diagnostic: Syntax diagnostic describing the failure.
        """
        self.diagnostic = diagnostic

        super().__init__(DiagnosticFormatter.format_one(diagnostic))
