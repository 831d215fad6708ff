"""Runtime settings of the document pipeline.

Settings are resolved from environment variables prefixed with
`SCREENDOC_` and passed explicitly to the parser. Complex values
(tuples and sets) are read from the environment as JSON.
"""

from re import escape, search

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from screendoc.models import SettingsModel
from screendoc.names import DISPLAY_ONLY_FIELD_TYPES, PLACEHOLDER_FIELD_TYPES


class ParserSettings(SettingsModel):
    """Immutable configuration of deserialization, validation and normalization."""

    model_config = SettingsConfigDict(
        env_prefix='SCREENDOC_',
        frozen=True,
        extra='ignore',
    )

    max_depth: int = Field(
        default=32,
        ge=1,
        title='Maximum nesting depth',
        description=(
            'Maximum number of nested containers (mappings and sequences) '
            'accepted in a document. Deeper documents are rejected with a '
            'single diagnostic before any other rule runs.'
        ),
    )

    max_nodes: int = Field(
        default=100_000,
        ge=1,
        title='Maximum number of values',
        description=(
            'Maximum number of values (scalars, mappings and sequences) '
            'accepted in a document, counting values shared through YAML '
            'aliases once per reference. Larger documents are rejected '
            'with a single diagnostic before any other rule runs.'
        ),
    )

    search_keywords: tuple[str, ...] = Field(
        default=('キーワード', '検索', 'search', 'keyword'),
        title='Free-text search keywords',
        description=(
            'Legacy filter names containing any of these keywords '
            '(case-insensitive) enable the search box of a synthesized '
            'data table instead of producing a filter field. Keywords '
            'written in ASCII letters only match whole words.'
        ),
    )

    placeholder_field_types: frozenset[str] = Field(
        default=PLACEHOLDER_FIELD_TYPES,
        title='Placeholder field types',
        description=(
            'Field types that are not fully specified yet and are exempt '
            'from the `id` and `label` requirements.'
        ),
    )

    page_size: int = Field(
        default=10,
        ge=1,
        title='Synthesized table page size',
    )

    page_size_options: tuple[int, ...] = Field(
        default=(10, 25, 50, 100),
        title='Synthesized table page size options',
    )

    def is_placeholder_type(self, field_type: object) -> bool:
        """Check whether a field type is exempt from `id` and `label`."""
        return isinstance(field_type, str) and field_type in self.placeholder_field_types

    def is_display_only_type(self, field_type: object) -> bool:
        """Check whether a field type is exempt from `id`."""
        if not isinstance(field_type, str):
            return False

        return field_type in DISPLAY_ONLY_FIELD_TYPES or self.is_placeholder_type(field_type)

    def is_search_filter(self, name: str) -> bool:
        """Check whether a legacy filter name denotes free-text search.

        ASCII keywords match whole words only (`search` matches
        "Search by name" but not "Research area"). Other keywords,
        such as `検索`, match anywhere in the name.
        """
        lowered = name.lower()

        for keyword in map(str.lower, self.search_keywords):
            if not keyword.isascii():
                if keyword in lowered:
                    return True

            elif search(rf'(?<![a-z0-9]){escape(keyword)}(?![a-z0-9])', lowered):
                return True

        return False
