"""Authoring shapes of keyed collections.

Screens, shared components and validation rules are conceptually keyed
collections, but documents may author them either as a mapping keyed by
name or as a legacy sequence of self-naming entries. The shape of every
collection is resolved once, here, into one of two explicit variants;
the validator and the normalizer both dispatch on the resolved variant
and never re-test the raw value.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from screendoc.values import is_mapping, is_sequence

if TYPE_CHECKING:
    from collections.abc import Iterator

if TYPE_CHECKING:
    from screendoc.values import Location, RawMapping, RawSequence, RawValue


@dataclass(frozen=True, slots=True)
class CollectionKind:
    """Static description of a top-level collection.

    Attributes:
        name: Attribute of the document root holding the collection.
        element: Human-readable name of a single entry.
        required: Whether the collection must be present.
        name_key: Attribute naming an entry authored in the sequence form.
        fallback: Prefix of generated keys for sequence entries without a
            usable name.
    """

    name: str
    element: str
    required: bool
    name_key: str
    fallback: str


VIEW = CollectionKind(
    name='view',
    element='screen',
    required=True,
    name_key='name',
    fallback='screen',
)

COMMON_COMPONENTS = CollectionKind(
    name='common_components',
    element='component',
    required=False,
    name_key='component_name',
    fallback='component',
)

VALIDATIONS = CollectionKind(
    name='validations',
    element='rule',
    required=False,
    name_key='field',
    fallback='rule',
)

#: Every top-level collection, in validation order.
COLLECTIONS = (VIEW, COMMON_COMPONENTS, VALIDATIONS)


@dataclass(frozen=True, slots=True)
class KeyedCollection:
    """A collection authored as a mapping of names to entries."""

    kind: CollectionKind
    entries: 'RawMapping'

    def __iter__(self) -> 'Iterator[tuple[Location, RawValue]]':
        """Iterate over entries with their locations."""
        for key, entry in self.entries.items():
            yield (self.kind.name, str(key)), entry


@dataclass(frozen=True, slots=True)
class ListedCollection:
    """A collection authored as a sequence of self-naming entries."""

    kind: CollectionKind
    entries: 'RawSequence'

    def __iter__(self) -> 'Iterator[tuple[Location, RawValue]]':
        """Iterate over entries with their locations."""
        for index, entry in enumerate(self.entries):
            yield (self.kind.name, index), entry


#: A collection with its authoring shape resolved.
type Collection = KeyedCollection | ListedCollection


def classify(kind: CollectionKind, value: 'RawValue') -> 'Collection | None':
    """Resolve the authoring shape of a collection.

    Args:
        kind: Description of the collection.
        value: Raw value found under the collection attribute.

    Returns:
        The resolved collection, or `None` when the value is
        neither a mapping nor a sequence.
    """
    if is_mapping(value):
        return KeyedCollection(kind, value)

    if is_sequence(value):
        return ListedCollection(kind, value)

    return None
