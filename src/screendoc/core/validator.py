"""Structural validation of raw document trees.

The validator walks the untyped tree produced by the reader and reports
every structural problem it finds in a single pass. It never mutates or
normalizes the tree.

Each top-level collection is checked by one of two rule sets, selected
by its resolved authoring shape:
- mapping-keyed entries follow the strict rules (screens need a title,
  every field, action, section and wizard step is checked recursively);
- sequence entries follow the relaxed rules (screens need a name or a
  title, and only the containers the normalizer iterates are checked).
"""

from typing import TYPE_CHECKING

from screendoc.diagnostics import Diagnostic, DiagnosticKind, render_path
from screendoc.names import ACTION_TYPES, COMPONENT_TYPES, SELECT_FIELD_TYPES
from screendoc.settings import ParserSettings
from screendoc.values import (
    count_nodes,
    is_defined,
    is_mapping,
    is_scalar,
    is_sequence,
    is_string,
    measure_depth,
)

from .shapes import COLLECTIONS, KeyedCollection, classify

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

if TYPE_CHECKING:
    from screendoc.values import Location, RawValue

    from .reader import Positions
    from .shapes import Collection

#: Lazily produced diagnostics.
type Diagnostics = Iterator[Diagnostic]

#: A rule checking a single node at a location.
type Check = Callable[[RawValue, Location], Diagnostics]


class StructureValidator:
    """Collect-all structural validator.

    Attributes:
        settings: Pipeline settings (size and depth ceilings, field type
            exemptions).
        positions: Source positions of the raw tree nodes. Diagnostics
            whose location is indexed carry its line and column.
    """

    def __init__(self, settings: ParserSettings | None = None,
                 positions: 'Positions | None' = None) -> None:
        """Initialize a validator.

        Args:
            settings: Pipeline settings. Defaults are resolved from
                the environment when omitted.
            positions: Source positions of the tree to validate.
        """
        self.settings = settings or ParserSettings()
        self.positions = positions or {}

        #: Strict and relaxed rules of every collection element.
        self.rules: dict[str, tuple[Check, Check]] = {
            'screen': (self.check_screen, self.check_listed_screen),
            'component': (self.check_component, self.check_listed_component),
            'rule': (self.check_rule, self.check_listed_rule),
        }

    def validate(self, tree: 'RawValue') -> list[Diagnostic]:
        """Validate a raw document tree.

        The size and nesting depth of the tree are measured before any
        rule runs. A tree larger or deeper than the configured ceilings
        is reported with a single diagnostic and no further checks.

        Args:
            tree: Raw tree produced by the reader.

        Returns:
            Every diagnostic found, in document order. An empty list
            means the tree can be normalized.
        """
        if count_nodes(tree, self.settings.max_nodes) > self.settings.max_nodes:
            return [self.report(
                DiagnosticKind.INVALID_VALUE,
                f'Document has more than {self.settings.max_nodes} values',
                (),
            )]

        location = measure_depth(tree, self.settings.max_depth)
        if location is not None:
            return [self.report(
                DiagnosticKind.INVALID_VALUE,
                f'Document is nested deeper than {self.settings.max_depth} levels',
                location,
            )]

        return list(self.check_root(tree))

    def report(self, kind: DiagnosticKind, message: str,
               location: 'Location') -> Diagnostic:
        """Create a diagnostic located at a node."""
        line, column = self.positions.get(location, (None, None))

        return Diagnostic(
            kind=kind,
            message=message,
            path=render_path(location),
            line=line,
            column=column,
        )

    def check_root(self, tree: 'RawValue') -> Diagnostics:
        """Check the document root and dispatch every collection."""
        if not is_mapping(tree):
            yield self.report(DiagnosticKind.SCHEMA, 'Root must be an object', ())
            return

        for kind in COLLECTIONS:
            value = tree.get(kind.name)
            if not is_defined(value):
                if kind.required:
                    yield self.report(
                        DiagnosticKind.MISSING_REQUIRED_FIELD,
                        f'Schema must have a "{kind.name}" section',
                        (),
                    )
                continue

            collection = classify(kind, value)
            if collection is None:
                yield self.report(
                    DiagnosticKind.INVALID_VALUE,
                    f'"{kind.name}" must be an object or array',
                    (kind.name,),
                )
                continue

            yield from self.check_collection(collection)

    def check_collection(self, collection: 'Collection') -> Diagnostics:
        """Check every entry of a collection with the rules of its shape.

        Mapping keys are read as text, so a plain key (`1`, `true`, `~`)
        and the quoted key with the same text (`'1'`, `'True'`, `'None'`)
        resolve to one location. Such entries are reported instead of
        silently replacing one another.
        """
        kind = collection.kind
        strict, relaxed = self.rules[kind.element]
        check = strict if isinstance(collection, KeyedCollection) else relaxed
        seen: set[Location] = set()

        for location, entry in collection:
            if location in seen:
                yield self.report(
                    DiagnosticKind.INVALID_VALUE,
                    f'{kind.element.capitalize()} key "{location[-1]}" is defined more than once',
                    location,
                )
            seen.add(location)

            yield from check(entry, location)

    def check_items(self, value: 'RawValue', location: 'Location',
                    subject: str, check: Check) -> Diagnostics:
        """Check a sequence attribute and each of its items."""
        if not is_sequence(value):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                f'{subject} must be an array',
                location,
            )
            return

        for index, item in enumerate(value):
            yield from check(item, (*location, index))

    def check_optional_items(self, node: dict, location: 'Location', key: str,
                             subject: str, check: Check) -> Diagnostics:
        """Check a sequence attribute only when it is present."""
        if is_defined(node.get(key)):
            yield from self.check_items(node[key], (*location, key), subject, check)

    def check_required_items(self, node: dict, location: 'Location', key: str,
                             subject: str, check: Check) -> Diagnostics:
        """Check a sequence attribute that must be present and non-empty."""
        value = node.get(key)
        if not is_defined(value):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                f'{subject} must have "{key}"',
                location,
            )
        elif is_sequence(value) and not value:
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                f'{subject} "{key}" must not be empty',
                (*location, key),
            )
        else:
            yield from self.check_items(value, (*location, key), f'{subject} {key}', check)

    def require(self, node: dict, location: 'Location', subject: str,
                *keys: str) -> Diagnostics:
        """Report every absent attribute."""
        for key in keys:
            if not is_defined(node.get(key)):
                article = 'an' if key[0] in 'aeiou' else 'a'
                yield self.report(
                    DiagnosticKind.MISSING_REQUIRED_FIELD,
                    f'{subject} must have {article} "{key}"',
                    location,
                )

    def check_field(self, field: 'RawValue', location: 'Location') -> Diagnostics:
        """Check an input field.

        Display-only types are exempt from `id` and placeholder types
        from both `id` and `label`. Select-like fields need options and
        repeaters need item fields, which are checked recursively.
        """
        if not is_mapping(field):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Field must be an object', location)
            return

        field_type = field.get('type')

        if not self.settings.is_display_only_type(field_type):
            yield from self.require(field, location, 'Field', 'id')

        yield from self.require(field, location, 'Field', 'type')

        if not self.settings.is_placeholder_type(field_type):
            yield from self.require(field, location, 'Field', 'label')

        if is_string(field_type) and field_type in SELECT_FIELD_TYPES:
            yield from self.check_options(field, location)

        if field_type == 'repeater':
            yield from self.check_required_items(
                field, location, 'item_fields', 'Repeater field', self.check_field,
            )

    def check_options(self, field: dict, location: 'Location') -> Diagnostics:
        """Check the options of a select-like field."""
        options = field.get('options')
        if not is_defined(options):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                f'Field type "{field["type"]}" requires "options"',
                location,
            )
        elif is_string(options):
            return
        elif not is_sequence(options):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Options must be an array or a reference string',
                (*location, 'options'),
            )
        elif not options:
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Options must not be empty',
                (*location, 'options'),
            )
        else:
            for index, option in enumerate(options):
                yield from self.check_option(option, (*location, 'options', index))

    def check_option(self, option: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(option):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Option must be an object', location)
            return

        yield from self.require(option, location, 'Option', 'value', 'label')

    def check_action(self, action: 'RawValue', location: 'Location') -> Diagnostics:
        """Check an action against the closed set of action types."""
        if not is_mapping(action):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Action must be an object', location)
            return

        yield from self.require(action, location, 'Action', 'id', 'type')

        action_type = action.get('type')
        if is_defined(action_type) and action_type not in ACTION_TYPES:
            yield self.report(
                DiagnosticKind.INVALID_FIELD_TYPE,
                f'Invalid action type: "{action_type}". '
                f'Valid types are: {", ".join(ACTION_TYPES)}',
                (*location, 'type'),
            )

        yield from self.require(action, location, 'Action', 'label')

        if action_type == 'navigate' and not is_defined(action.get('to')):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                'Navigate action must have a "to" destination',
                location,
            )

    def check_wizard(self, wizard: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(wizard):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Wizard must be an object', location)
            return

        if not is_defined(wizard.get('steps')):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                'Wizard must have "steps"',
                location,
            )
            return

        yield from self.check_items(
            wizard['steps'], (*location, 'steps'), 'Wizard steps', self.check_wizard_step,
        )

    def check_wizard_step(self, step: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(step):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Wizard step must be an object', location)
            return

        yield from self.require(step, location, 'Wizard step', 'id', 'title')
        yield from self.check_required_items(
            step, location, 'fields', 'Wizard step', self.check_field,
        )

    def check_section(self, section: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(section):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Section must be an object', location)
            return

        yield from self.require(section, location, 'Section', 'section_name')
        yield from self.check_optional_items(
            section, location, 'input_fields', 'Section input_fields', self.check_field,
        )

    def check_name(self, name: 'RawValue', location: 'Location') -> Diagnostics:
        """Check a display field or filter name."""
        if not is_scalar(name):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Name must be a string', location)

    def check_screen(self, screen: 'RawValue', location: 'Location') -> Diagnostics:
        """Check a screen under the strict rules."""
        if not is_mapping(screen):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Screen definition must be an object',
                location,
            )
            return

        yield from self.require(screen, location, 'Screen', 'title')

        if is_defined(screen.get('wizard')):
            yield from self.check_wizard(screen['wizard'], (*location, 'wizard'))

        yield from self.check_optional_items(
            screen, location, 'sections', 'Screen sections', self.check_section,
        )
        yield from self.check_optional_items(
            screen, location, 'fields', 'Screen fields', self.check_field,
        )
        yield from self.check_optional_items(
            screen, location, 'input_fields', 'Screen input_fields', self.check_field,
        )
        yield from self.check_optional_items(
            screen, location, 'display_fields', 'Screen display_fields', self.check_name,
        )
        yield from self.check_optional_items(
            screen, location, 'filters', 'Screen filters', self.check_name,
        )
        yield from self.check_optional_items(
            screen, location, 'actions', 'Screen actions', self.check_action,
        )

    def check_listed_screen(self, screen: 'RawValue', location: 'Location') -> Diagnostics:
        """Check a screen under the relaxed rules.

        Fields of sequence-form screens are commonly identified by
        `field_name` only, so they are checked for shape, not content.
        """
        if not is_mapping(screen):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Screen definition must be an object',
                location,
            )
            return

        if not is_defined(screen.get('name')) and not is_defined(screen.get('title')):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                'Screen must have a "name" or "title"',
                location,
            )

        yield from self.check_optional_items(
            screen, location, 'sections', 'sections', self.check_listed_section,
        )
        yield from self.check_optional_items(
            screen, location, 'fields', 'fields', self.check_listed_field,
        )
        yield from self.check_optional_items(
            screen, location, 'input_fields', 'input_fields', self.check_listed_field,
        )
        yield from self.check_optional_items(
            screen, location, 'display_fields', 'display_fields', self.check_name,
        )
        yield from self.check_optional_items(
            screen, location, 'filters', 'filters', self.check_name,
        )
        yield from self.check_optional_items(
            screen, location, 'actions', 'actions', self.check_listed_action,
        )

    def check_listed_section(self, section: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(section):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Section must be an object', location)
            return

        yield from self.check_optional_items(
            section, location, 'input_fields', 'input_fields', self.check_listed_field,
        )

    def check_listed_field(self, field: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(field):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Field must be an object', location)

    def check_listed_action(self, action: 'RawValue', location: 'Location') -> Diagnostics:
        """Check an action, accepting the plain label shorthand."""
        if not is_string(action):
            yield from self.check_action(action, location)

    def check_component(self, component: 'RawValue', location: 'Location') -> Diagnostics:
        """Check a shared component under the strict rules."""
        if not is_mapping(component):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Common component must be an object',
                location,
            )
            return

        yield from self.require(component, location, 'Common component', 'name', 'type')

        component_type = component.get('type')
        if is_defined(component_type) and component_type not in COMPONENT_TYPES:
            yield self.report(
                DiagnosticKind.INVALID_FIELD_TYPE,
                f'Invalid component type: "{component_type}". '
                f'Valid types are: {", ".join(COMPONENT_TYPES)}',
                (*location, 'type'),
            )

        if component_type == 'field_group':
            yield from self.check_optional_items(
                component, location, 'fields', 'Component fields', self.check_field,
            )

        if component_type == 'action_group':
            yield from self.check_optional_items(
                component, location, 'actions', 'Component actions', self.check_action,
            )

    def check_listed_component(self, component: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(component):
            yield self.report(
                DiagnosticKind.INVALID_VALUE,
                'Common component must be an object',
                location,
            )
            return

        yield from self.require(component, location, 'Common component', 'component_name')

    def check_rule(self, rule: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(rule):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Validation rule must be an object', location)
            return

        yield from self.require(rule, location, 'Validation rule', 'name')

        if not is_defined(rule.get('rules')):
            yield self.report(
                DiagnosticKind.MISSING_REQUIRED_FIELD,
                'Validation rule must have "rules"',
                location,
            )

    def check_listed_rule(self, rule: 'RawValue', location: 'Location') -> Diagnostics:
        if not is_mapping(rule):
            yield self.report(DiagnosticKind.INVALID_VALUE, 'Validation rule must be an object', location)
            return

        yield from self.require(rule, location, 'Validation rule', 'field', 'rule')
