"""Structured diagnostics and their human-readable formatting.

A diagnostic is one path-qualified report of a structural problem found
in a document. Diagnostics are values, not exceptions: the pipeline
collects all of them in one pass and hands the list back to the caller.

This module also converts low-level failures (PyYAML syntax errors and
Pydantic validation errors raised while building the canonical model)
into diagnostics, and renders diagnostic lists as text.
"""

from enum import StrEnum
from os import linesep
from typing import TYPE_CHECKING, Any

from pydantic import Field

from screendoc.models import SchemaModel
from screendoc.values import is_mapping, is_sequence

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Self

if TYPE_CHECKING:
    from pydantic import ValidationError
    from pydantic_core import ErrorDetails
    from yaml.error import MarkedYAMLError

if TYPE_CHECKING:
    from screendoc.values import Location, RawValue


class DiagnosticKind(StrEnum):
    """Category of a reported problem."""

    #: The document text could not be deserialized at all.
    SYNTAX = 'SYNTAX'
    #: The root of the document has the wrong shape.
    SCHEMA = 'SCHEMA'
    #: A required attribute is absent.
    MISSING_REQUIRED_FIELD = 'MISSING_REQUIRED_FIELD'
    #: A type tag is outside its closed set (for example an action type).
    INVALID_FIELD_TYPE = 'INVALID_FIELD_TYPE'
    #: A node has the wrong shape or an unacceptable value.
    INVALID_VALUE = 'INVALID_VALUE'


#: Pydantic error types mapped onto diagnostic kinds.
_PYDANTIC_KINDS = {
    'missing': DiagnosticKind.MISSING_REQUIRED_FIELD,
    'union_tag_invalid': DiagnosticKind.INVALID_FIELD_TYPE,
    'literal_error': DiagnosticKind.INVALID_VALUE,
}


def render_path(location: 'Location') -> str:
    """Render a location as a dot/bracket path rooted at the document.

    Args:
        location: Sequence of mapping keys and sequence indexes.

    Returns:
        A path such as `view.login.fields[0]`, or an empty string
        for the document root.
    """
    path = ''
    for key in location:
        if isinstance(key, int):
            path += f'[{key}]'
        elif path:
            path += f'.{key}'
        else:
            path = str(key)

    return path


class Diagnostic(SchemaModel):
    """One structured, path-qualified report of a structural problem."""

    kind: DiagnosticKind = Field(
        title='Diagnostic kind',
        description='Category of the reported problem.',
    )

    message: str = Field(
        title='Message',
        description='Human-readable description of the problem.',
    )

    path: str = Field(
        default='',
        title='Document path',
        description=(
            'Dot/bracket path of the offending node rooted at the document, '
            'for example `view.login.fields[0]`. Empty for the root.'
        ),
    )

    line: int | None = Field(
        default=None,
        ge=0,
        title='Line',
        description='0-based line of the offending node, when known.',
    )

    column: int | None = Field(
        default=None,
        ge=0,
        title='Column',
        description='0-based column of the offending node, when known.',
    )

    @classmethod
    def from_yaml_error(cls, error: 'MarkedYAMLError') -> 'Self':
        """Create a syntax diagnostic from a YAML parsing failure.

        Args:
            error: Exception raised by the YAML parser or constructor.

        Returns:
            A `SYNTAX` diagnostic carrying the problem position.
        """
        message = 'Invalid YAML'
        if error.problem:
            message += f': {error.problem}'
        if error.context:
            message += f' ({error.context})'

        mark = error.problem_mark or error.context_mark
        if mark is None:
            return cls(kind=DiagnosticKind.SYNTAX, message=message)

        return cls(
            kind=DiagnosticKind.SYNTAX,
            message=message,
            line=mark.line,
            column=mark.column,
        )

    @classmethod
    def from_pydantic_error(cls, error: 'ValidationError',
                            data: 'RawValue') -> list['Self']:
        """Convert a canonical model construction failure into diagnostics.

        Pydantic error locations contain union member tags that do not
        exist in the validated data. Each location is replayed against the
        data and only the keys that actually address a node are kept, so
        the resulting paths use the same notation as structural diagnostics.

        Args:
            error: ValidationError raised while building the document.
            data: The normalized tree that was being validated.

        Returns:
            One diagnostic per reported error.
        """
        return [
            cls._from_error_details(item, data)
            for item in error.errors(include_url=False, include_input=False)
        ]

    @classmethod
    def _from_error_details(cls, item: 'ErrorDetails', data: 'RawValue') -> 'Self':
        """Build a single diagnostic from Pydantic error details."""
        location: list[str | int] = []
        node: Any = data
        missing: str | int | None = None

        for key in item['loc']:
            if is_mapping(node) and key in node:
                node = node[key]
                location.append(key)
            elif is_sequence(node) and isinstance(key, int) and 0 <= key < len(node):
                node = node[key]
                location.append(key)
            else:
                missing = key

        kind = _PYDANTIC_KINDS.get(item['type'], DiagnosticKind.INVALID_VALUE)

        message = item['msg']
        if kind is DiagnosticKind.MISSING_REQUIRED_FIELD and missing is not None:
            message = f'Missing required attribute "{missing}"'

        return cls(kind=kind, message=message, path=render_path(tuple(location)))


class DiagnosticFormatter:
    """Utility class rendering diagnostics as human-readable text."""

    @classmethod
    def format(cls, diagnostics: 'Iterable[Diagnostic]') -> str:
        """Format a diagnostic list, one diagnostic per line.

        Each line reads `[KIND] at "<path>" (line N, column M): <message>`.
        The path clause is omitted for root diagnostics and the position
        clause when no position is known. Lines and columns are 1-based.

        Args:
            diagnostics: Diagnostics to render.

        Returns:
            A multi-line string.
        """
        return linesep.join(
            cls.format_one(diagnostic)
            for diagnostic in diagnostics
        )

    @classmethod
    def format_one(cls, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic line."""
        return f'[{diagnostic.kind}]{cls.get_location_string(diagnostic)}: {diagnostic.message}'

    @staticmethod
    def get_location_string(diagnostic: Diagnostic) -> str:
        """Format the path and source position of a diagnostic.

        Args:
            diagnostic: Diagnostic to locate.

        Returns:
            Location clause with a leading space, or an empty string.
        """
        location = ''
        if diagnostic.path:
            location += f' at "{diagnostic.path}"'

        if diagnostic.line is not None:
            location += f' (line {diagnostic.line + 1}'
            if diagnostic.column is not None:
                location += f', column {diagnostic.column + 1}'
            location += ')'

        return location


def format_diagnostics(diagnostics: 'Iterable[Diagnostic]') -> str:
    """Format diagnostics into one multi-line string."""
    return DiagnosticFormatter.format(diagnostics)
