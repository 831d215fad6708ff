"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from screendoc.core import DocumentLoader, DocumentParser
from screendoc.settings import ParserSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from screendoc.core import ParseResult


@pytest.fixture
def loader() -> type[DocumentLoader]:
    """Provide an isolated document loader class for tests.

    Creates a dedicated subclass of `DocumentLoader` to ensure that
    YAML constructors or resolvers registered during a test do not
    leak into other tests or affect the package loader.

    Returns:
        A subclass of `DocumentLoader`.
    """
    class Loader(DocumentLoader):
        pass

    return Loader


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> ParserSettings:
    """Provide default settings unaffected by the test environment.

    Every `SCREENDOC_` variable is removed from the environment before
    the settings are resolved.
    """
    for name in ParserSettings.model_fields:
        monkeypatch.delenv(f'SCREENDOC_{name.upper()}', raising=False)

    return ParserSettings()


@pytest.fixture
def parser(loader: type[DocumentLoader], settings: ParserSettings) -> DocumentParser:
    """Provide a document parser using the isolated loader."""
    return DocumentParser(loader, settings=settings)


@pytest.fixture
def parse(parser: DocumentParser) -> 'Callable[[str], ParseResult]':
    """Provide a shortcut parsing document text."""
    return parser.parse
