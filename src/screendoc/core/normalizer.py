"""Shape normalization of validated document trees.

The normalizer converts whichever authoring shape a document used into
the canonical shape and builds the canonical `Document` from it. It is
only ever given trees the structural validator accepted, so it performs
no error detection of its own; mapping raw attributes onto canonical
ones (aliases, option expansion, field type dispatch) is carried by the
canonical models themselves.

Normalization is a two-step process:
- `restructure` resolves document-level shapes: sequence-form collections
  become mappings keyed by a slug, and every screen is reduced to one
  coherent content representation;
- `normalize` validates the restructured tree against `Document`.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any
from warnings import warn

from screendoc.errors import DocumentWarning
from screendoc.names import to_safe_key, unique_key
from screendoc.schema import Document
from screendoc.settings import ParserSettings
from screendoc.values import coalesce, is_defined, is_sequence, is_string

from .shapes import COLLECTIONS, KeyedCollection, ListedCollection, classify

if TYPE_CHECKING:
    from collections.abc import Callable

if TYPE_CHECKING:
    from screendoc.values import RawMapping, RawSequence, RawValue

    from .shapes import Collection, CollectionKind

#: A normalized tree node.
type Tree = dict[str, Any]

#: A rule restructuring a single collection entry.
type Restructure = Callable[[RawMapping], Tree]

#: Screen attributes carried over unchanged.
SCREEN_ATTRIBUTES = ('app_header', 'app_navi', 'wizard', 'layout')

#: Section attributes carried over unchanged.
SECTION_ATTRIBUTES = ('section_name', 'icon', 'publish_toggle', 'input_fields')

#: Frames of the package skipped when locating warnings.
PACKAGE_PREFIXES = (str(Path(__file__).parent.parent),)


def pick(node: 'RawMapping', keys: tuple[str, ...]) -> Tree:
    """Copy the present attributes of a node."""
    return {
        key: node[key]
        for key in keys
        if is_defined(node.get(key))
    }


class DocumentNormalizer:
    """Converter of validated raw trees into canonical documents.

    Attributes:
        settings: Pipeline settings (search keywords, synthesized
            table pagination).
    """

    def __init__(self, settings: ParserSettings | None = None) -> None:
        """Initialize a normalizer.

        Args:
            settings: Pipeline settings. Defaults are resolved from
                the environment when omitted.
        """
        self.settings = settings or ParserSettings()

        #: Mapping-form and sequence-form rules of every collection element.
        self.rules: dict[str, tuple[Restructure, Restructure]] = {
            'screen': (self.restructure_screen, self.restructure_screen),
            'component': (dict, self.restructure_listed_component),
            'rule': (dict, self.restructure_listed_rule),
        }

    def normalize(self, tree: 'RawMapping') -> Document:
        """Build the canonical document of a validated tree.

        Args:
            tree: Raw tree accepted by the structural validator.

        Returns:
            The canonical document.

        Raises:
            ValidationError: If a restructured attribute cannot be
                converted to its canonical type.
        """
        return self.build(self.restructure(tree))

    @staticmethod
    def build(tree: Tree) -> Document:
        """Validate a restructured tree against the canonical model.

        Raises:
            ValidationError: If an attribute cannot be converted to its
                canonical type.
        """
        return Document.model_validate(tree)

    def restructure(self, tree: 'RawMapping') -> Tree:
        """Resolve the document-level shape of a validated tree."""
        document: Tree = {}

        for kind in COLLECTIONS:
            collection = classify(kind, tree.get(kind.name))
            if collection is not None:
                document[kind.name] = self.restructure_collection(collection)

        return document

    def restructure_collection(self, collection: 'Collection') -> Tree:
        """Convert a collection of either shape into a keyed mapping.

        Entries of a sequence-form collection are keyed by the slug of
        their name. The first entry keeps a slug shared with later ones,
        which receive numeric suffixes (`_2`, `_3`, ...); every such
        collision is reported with a `DocumentWarning`.
        """
        keyed, listed = self.rules[collection.kind.element]

        match collection:
            case KeyedCollection(entries=entries):
                return {
                    str(key): keyed(entry)
                    for key, entry in entries.items()
                }

            case ListedCollection(kind=kind, entries=entries):
                result: Tree = {}
                for index, entry in enumerate(entries):
                    result[self.derive_key(kind, entry, index, result)] = listed(entry)

                return result

    def derive_key(self, kind: 'CollectionKind', entry: 'RawMapping',
                   index: int, taken: Tree) -> str:
        """Derive the key of a sequence-form collection entry.

        Args:
            kind: Description of the collection.
            entry: The entry to key.
            index: Position of the entry in the sequence.
            taken: Entries keyed so far.

        Returns:
            The slug of the entry name, or `<prefix>_<index>` when the
            entry has no usable name, made unique among taken keys.
        """
        name = entry.get(kind.name_key)
        key = to_safe_key(str(name)) if is_defined(name) else ''
        if not key:
            key = f'{kind.fallback}_{index}'

        unique = unique_key(key, taken)
        if unique != key:
            warn(
                f'{kind.element.capitalize()} key "{key}" is already taken, '
                f'entry {index} of "{kind.name}" is keyed "{unique}"',
                category=DocumentWarning,
                skip_file_prefixes=PACKAGE_PREFIXES,
            )

        return unique

    def restructure_screen(self, raw: 'RawMapping') -> Tree:
        """Reduce a screen to its canonical content representation.

        The title falls back to the screen name, then to `Untitled`,
        and the description to the legacy `purpose` attribute. Content
        is resolved in precedence order:
        1. non-empty `sections`, which are kept, and whose fields are
           also flattened into the screen field list;
        2. `fields`;
        3. `display_fields` (and `filters`), which produce a single
           synthesized data table field;
        4. the legacy `input_fields` list.
        """
        screen = pick(raw, SCREEN_ATTRIBUTES)
        screen['title'] = coalesce(raw.get('title'), raw.get('name'), 'Untitled')

        description = coalesce(raw.get('description'), raw.get('purpose'))
        if description is not None:
            screen['description'] = description

        sections = raw.get('sections')
        if is_sequence(sections) and sections:
            screen['sections'] = [pick(section, SECTION_ATTRIBUTES) for section in sections]
            screen['fields'] = [
                field
                for section in screen['sections']
                for field in section.get('input_fields', ())
            ]

        elif is_defined(raw.get('fields')):
            screen['fields'] = list(raw['fields'])

        elif is_sequence(raw.get('display_fields')):
            screen['fields'] = [self.build_data_table(
                raw['display_fields'],
                raw.get('filters'),
                raw.get('name'),
            )]

        if 'fields' not in screen and is_sequence(raw.get('input_fields')):
            screen['fields'] = list(raw['input_fields'])

        actions = raw.get('actions')
        if is_sequence(actions):
            screen['actions'] = [
                self.expand_action(action, index)
                for index, action in enumerate(actions)
            ]

        return screen

    @staticmethod
    def expand_action(action: 'RawValue', index: int) -> 'RawValue':
        """Expand a plain label into a submit action.

        The first action of a screen is styled as primary and the
        others as secondary.
        """
        if not is_string(action):
            return action

        return {
            'id': f'action_{index}',
            'type': 'submit',
            'label': action,
            'style': 'primary' if index == 0 else 'secondary',
        }

    def build_data_table(self, names: 'RawSequence', filters: 'RawValue',
                         screen_name: 'RawValue') -> Tree:
        """Synthesize a data table field from legacy list shorthands.

        Args:
            names: Display field names, one column each, in order.
            filters: Filter names. Names containing a search keyword
                enable the search box instead of producing a filter.
            screen_name: Name of the screen, used for the table id
                and label.

        Returns:
            A raw `data_table` field.
        """
        name = str(screen_name) if is_defined(screen_name) else ''
        slug = to_safe_key(name)

        table: Tree = {
            'id': f'{slug}_table' if slug else 'data_table',
            'type': 'data_table',
            'label': name or 'List',
            'columns': [
                {'id': f'col_{index}', 'label': str(column), 'sortable': True}
                for index, column in enumerate(names)
            ],
            'data': [],
            'selection': 'single',
            'pagination': {
                'enabled': True,
                'page_size': self.settings.page_size,
                'page_size_options': list(self.settings.page_size_options),
            },
            'empty_state': {
                'title': 'No data',
                'description': 'There is no data to display',
                'icon': '📭',
            },
            'hoverable': True,
            'striped': True,
        }

        if is_sequence(filters) and filters:
            table['filters'] = self.build_filters([str(item) for item in filters])

        return table

    def build_filters(self, names: list[str]) -> Tree:
        """Build the filter configuration of a synthesized table."""
        fields = [name for name in names if not self.settings.is_search_filter(name)]

        return {
            'enabled': True,
            'show_search': len(fields) < len(names),
            'fields': [
                {
                    'id': f'filter_{index}',
                    'label': name,
                    'column': f'col_{index}',
                    'type': 'select',
                    'options': [],
                }
                for index, name in enumerate(fields)
            ],
        }

    @staticmethod
    def restructure_listed_component(raw: 'RawMapping') -> Tree:
        """Convert a sequence-form component into a field group."""
        component = pick(raw, ('description', 'used_in'))
        component['name'] = raw['component_name']
        component['type'] = 'field_group'

        return component

    @staticmethod
    def restructure_listed_rule(raw: 'RawMapping') -> Tree:
        """Convert a sequence-form `{field, rule}` entry into a named rule."""
        return {
            'name': raw['field'],
            'rules': {'message': raw['rule']},
            'message': raw['rule'],
        }


def normalize_document(tree: 'RawMapping',
                       settings: ParserSettings | None = None) -> Document:
    """Build the canonical document of a validated tree.

    Shortcut for `DocumentNormalizer(settings).normalize(tree)`.
    """
    return DocumentNormalizer(settings).normalize(tree)


__all__ = (
    'DocumentNormalizer',
    'normalize_document',
)
