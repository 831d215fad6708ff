"""Tests for structural validation of raw trees."""

from typing import Any

import pytest

from screendoc.core import StructureValidator
from screendoc.diagnostics import DiagnosticKind
from screendoc.settings import ParserSettings

MISSING = DiagnosticKind.MISSING_REQUIRED_FIELD
INVALID = DiagnosticKind.INVALID_VALUE
TYPE = DiagnosticKind.INVALID_FIELD_TYPE


def summarize(tree: Any, settings: ParserSettings) -> list[tuple[DiagnosticKind, str]]:  # noqa: ANN401
    """Validate a tree and keep the kind and path of every diagnostic."""
    return [
        (diagnostic.kind, diagnostic.path)
        for diagnostic in StructureValidator(settings).validate(tree)
    ]


def screen(**attributes: Any) -> dict[str, Any]:  # noqa: ANN401
    """Build a document with a single mapping-keyed screen."""
    return {'view': {'home': {'title': 'Home', **attributes}}}


@pytest.mark.parametrize('tree', (
    pytest.param({'view': {'home': {'title': 'Welcome'}}}, id='minimal'),
    pytest.param({'view': {}}, id='no screens'),
    pytest.param({'view': []}, id='no listed screens'),
    pytest.param(screen(fields=[
        {'id': 'name', 'type': 'text', 'label': 'Name'},
        {'id': 'kind', 'type': 'select', 'label': 'Kind', 'options': [{'value': 'a', 'label': 'A'}]},
        {'id': 'tags', 'type': 'multi_select', 'label': 'Tags', 'options': 'tags'},
        {'type': 'heading', 'label': 'Section'},
        {'id': 'future', 'type': 'hologram', 'label': 'Future'},
    ]), id='fields'),
    pytest.param(screen(fields=[{
        'id': 'items',
        'type': 'repeater',
        'label': 'Items',
        'item_fields': [{'id': 'qty', 'type': 'number', 'label': 'Quantity'}],
    }]), id='repeater'),
    pytest.param(screen(actions=[
        {'id': 'save', 'type': 'submit', 'label': 'Save'},
        {'id': 'back', 'type': 'navigate', 'label': 'Back', 'to': 'list'},
        {'id': 'run', 'type': 'custom', 'label': 'Run'},
    ]), id='actions'),
    pytest.param(screen(wizard={'steps': [
        {'id': 'one', 'title': 'One', 'fields': [{'id': 'a', 'type': 'text', 'label': 'A'}]},
    ]}), id='wizard'),
    pytest.param(screen(sections=[
        {'section_name': 'Basics', 'input_fields': [{'id': 'a', 'type': 'text', 'label': 'A'}]},
    ]), id='sections'),
    pytest.param({'view': [
        {'name': 'Users', 'display_fields': ['Name', 'Email'], 'filters': ['Keyword search']},
        {'title': 'Edit', 'input_fields': [{'field_name': 'Name', 'type': 'text'}], 'actions': ['Save']},
    ]}, id='listed screens'),
    pytest.param({
        'view': {},
        'common_components': {'address': {'name': 'Address', 'type': 'field_group', 'fields': []}},
        'validations': {'email': {'name': 'email', 'rules': {'pattern': '.+@.+'}}},
    }, id='keyed companions'),
    pytest.param({
        'view': {},
        'common_components': [{'component_name': 'Address'}],
        'validations': [{'field': 'email', 'rule': 'Must be an email'}],
    }, id='listed companions'),
))
def test_valid_documents(tree: Any, settings: ParserSettings) -> None:  # noqa: ANN401
    """Accept well-formed documents of both authoring shapes."""
    assert summarize(tree, settings) == []


@pytest.mark.parametrize('tree, expected', (
    pytest.param(
        ['view'],
        [(DiagnosticKind.SCHEMA, '')],
        id='root is a sequence',
    ),
    pytest.param(
        None,
        [(DiagnosticKind.SCHEMA, '')],
        id='empty document',
    ),
    pytest.param(
        {'screens': {}},
        [(MISSING, '')],
        id='missing view',
    ),
    pytest.param(
        {'view': 'home'},
        [(INVALID, 'view')],
        id='view is a scalar',
    ),
    pytest.param(
        {'view': {}, 'common_components': 1, 'validations': 'all'},
        [(INVALID, 'common_components'), (INVALID, 'validations')],
        id='companions are scalars',
    ),
))
def test_root(tree: Any, expected: list[tuple[DiagnosticKind, str]],  # noqa: ANN401
              settings: ParserSettings) -> None:
    """Report problems of the document root."""
    assert summarize(tree, settings) == expected


@pytest.mark.parametrize('tree, expected', (
    pytest.param(
        {'view': {'home': 'Home'}},
        [(INVALID, 'view.home')],
        id='screen is a scalar',
    ),
    pytest.param(
        {'view': {'home': {'name': 'Home'}}},
        [(MISSING, 'view.home')],
        id='missing title',
    ),
    pytest.param(
        screen(fields={'id': 'a'}),
        [(INVALID, 'view.home.fields')],
        id='fields is a mapping',
    ),
    pytest.param(
        screen(fields=['a']),
        [(INVALID, 'view.home.fields[0]')],
        id='field is a scalar',
    ),
    pytest.param(
        screen(fields=[{}]),
        [(MISSING, 'view.home.fields[0]')] * 3,
        id='empty field',
    ),
    pytest.param(
        screen(fields=[{'type': 'heading'}]),
        [(MISSING, 'view.home.fields[0]')],
        id='display-only field without label',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'select', 'label': 'X'}]),
        [(MISSING, 'view.home.fields[0]')],
        id='select without options',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'radio_group', 'label': 'X', 'options': 1}]),
        [(INVALID, 'view.home.fields[0].options')],
        id='options is a scalar',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'checkbox_group', 'label': 'X', 'options': []}]),
        [(INVALID, 'view.home.fields[0].options')],
        id='empty options',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'select', 'label': 'X', 'options': ['a', {'value': 'b'}]}]),
        [(INVALID, 'view.home.fields[0].options[0]'), (MISSING, 'view.home.fields[0].options[1]')],
        id='malformed options',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'repeater', 'label': 'X'}]),
        [(MISSING, 'view.home.fields[0]')],
        id='repeater without item fields',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'repeater', 'label': 'X', 'item_fields': []}]),
        [(INVALID, 'view.home.fields[0].item_fields')],
        id='repeater with empty item fields',
    ),
    pytest.param(
        screen(fields=[{'id': 'x', 'type': 'repeater', 'label': 'X', 'item_fields': [
            {'id': 'y', 'type': 'repeater', 'label': 'Y', 'item_fields': [{'id': 'z', 'type': 'select', 'label': 'Z'}]},
        ]}]),
        [(MISSING, 'view.home.fields[0].item_fields[0].item_fields[0]')],
        id='nested repeater',
    ),
    pytest.param(
        screen(actions=[{'id': 'a', 'type': 'jump', 'label': 'A'}]),
        [(TYPE, 'view.home.actions[0].type')],
        id='invalid action type',
    ),
    pytest.param(
        screen(actions=[{'id': 'a', 'type': 'navigate', 'label': 'A'}]),
        [(MISSING, 'view.home.actions[0]')],
        id='navigate without destination',
    ),
    pytest.param(
        screen(actions=['Save']),
        [(INVALID, 'view.home.actions[0]')],
        id='action shorthand in strict rules',
    ),
    pytest.param(
        screen(wizard=[]),
        [(INVALID, 'view.home.wizard')],
        id='wizard is a sequence',
    ),
    pytest.param(
        screen(wizard={}),
        [(MISSING, 'view.home.wizard')],
        id='wizard without steps',
    ),
    pytest.param(
        screen(wizard={'steps': {}}),
        [(INVALID, 'view.home.wizard.steps')],
        id='wizard steps is a mapping',
    ),
    pytest.param(
        screen(wizard={'steps': [{'fields': []}]}),
        [
            (MISSING, 'view.home.wizard.steps[0]'),
            (MISSING, 'view.home.wizard.steps[0]'),
            (INVALID, 'view.home.wizard.steps[0].fields'),
        ],
        id='incomplete wizard step',
    ),
    pytest.param(
        screen(sections=[{'input_fields': [{'id': 'a', 'type': 'text'}]}]),
        [(MISSING, 'view.home.sections[0]'), (MISSING, 'view.home.sections[0].input_fields[0]')],
        id='incomplete section',
    ),
    pytest.param(
        screen(display_fields=[['a']]),
        [(INVALID, 'view.home.display_fields[0]')],
        id='display field is a sequence',
    ),
))
def test_strict_screens(tree: Any, expected: list[tuple[DiagnosticKind, str]],  # noqa: ANN401
                        settings: ParserSettings) -> None:
    """Check mapping-keyed screens with the strict rules."""
    assert summarize(tree, settings) == expected


@pytest.mark.parametrize('tree, expected', (
    pytest.param(
        {'view': [{'purpose': 'Nothing'}]},
        [(MISSING, 'view[0]')],
        id='missing name and title',
    ),
    pytest.param(
        {'view': ['Home']},
        [(INVALID, 'view[0]')],
        id='screen is a scalar',
    ),
    pytest.param(
        {'view': [{'name': 'Home', 'sections': {'a': 1}}]},
        [(INVALID, 'view[0].sections')],
        id='sections is a mapping',
    ),
    pytest.param(
        {'view': [{'name': 'Home', 'sections': [{'input_fields': ['a']}]}]},
        [(INVALID, 'view[0].sections[0].input_fields[0]')],
        id='section field is a scalar',
    ),
    pytest.param(
        {'view': [{'name': 'Home', 'input_fields': 'name'}]},
        [(INVALID, 'view[0].input_fields')],
        id='input fields is a scalar',
    ),
    pytest.param(
        {'view': [{'name': 'Home', 'display_fields': 'Name', 'filters': [{'a': 1}]}]},
        [(INVALID, 'view[0].display_fields'), (INVALID, 'view[0].filters[0]')],
        id='malformed shorthands',
    ),
    pytest.param(
        {'view': [{'name': 'Home', 'actions': ['Save', {'id': 'x', 'type': 'jump', 'label': 'X'}]}]},
        [(TYPE, 'view[0].actions[1].type')],
        id='invalid action among labels',
    ),
))
def test_relaxed_screens(tree: Any, expected: list[tuple[DiagnosticKind, str]],  # noqa: ANN401
                         settings: ParserSettings) -> None:
    """Check sequence-form screens with the relaxed rules."""
    assert summarize(tree, settings) == expected


def test_relaxed_fields_are_not_checked_for_content(settings: ParserSettings) -> None:
    """Legacy fields identified by `field_name` only are accepted."""
    tree = {'view': [{'name': 'Home', 'fields': [{'field_name': 'Name'}, {'type': 'select'}]}]}

    assert summarize(tree, settings) == []


@pytest.mark.parametrize('tree, expected', (
    pytest.param(
        {'view': {}, 'common_components': {'a': {}}},
        [(MISSING, 'common_components.a'), (MISSING, 'common_components.a')],
        id='empty component',
    ),
    pytest.param(
        {'view': {}, 'common_components': {'a': {'name': 'A', 'type': 'widget'}}},
        [(TYPE, 'common_components.a.type')],
        id='invalid component type',
    ),
    pytest.param(
        {'view': {}, 'common_components': {'a': {'name': 'A', 'type': 'field_group', 'fields': [{}]}}},
        [(MISSING, 'common_components.a.fields[0]')] * 3,
        id='invalid component field',
    ),
    pytest.param(
        {'view': {}, 'common_components': {'a': {'name': 'A', 'type': 'action_group', 'actions': 'save'}}},
        [(INVALID, 'common_components.a.actions')],
        id='component actions is a scalar',
    ),
    pytest.param(
        {'view': {}, 'common_components': [{'description': 'No name'}, 'Header']},
        [(MISSING, 'common_components[0]'), (INVALID, 'common_components[1]')],
        id='listed components',
    ),
    pytest.param(
        {'view': {}, 'validations': {'a': {'message': 'Bad'}}},
        [(MISSING, 'validations.a'), (MISSING, 'validations.a')],
        id='incomplete rule',
    ),
    pytest.param(
        {'view': {}, 'validations': [{'field': 'email'}, 1]},
        [(MISSING, 'validations[0]'), (INVALID, 'validations[1]')],
        id='listed rules',
    ),
))
def test_companions(tree: Any, expected: list[tuple[DiagnosticKind, str]],  # noqa: ANN401
                    settings: ParserSettings) -> None:
    """Check shared components and validation rules."""
    assert summarize(tree, settings) == expected


def test_collect_all(settings: ParserSettings) -> None:
    """Every problem is reported in a single pass, in document order."""
    tree = {
        'view': {
            'first': {'fields': [{'id': 'x', 'type': 'select', 'label': 'X'}]},
            'second': {'title': 'Second', 'actions': [{'id': 'a', 'type': 'jump', 'label': 'A'}]},
        },
        'validations': {'a': {'name': 'a'}},
    }

    assert summarize(tree, settings) == [
        (MISSING, 'view.first'),
        (MISSING, 'view.first.fields[0]'),
        (TYPE, 'view.second.actions[0].type'),
        (MISSING, 'validations.a'),
    ]


def test_messages(settings: ParserSettings) -> None:
    """Diagnostics carry descriptive messages."""
    tree = screen(
        fields=[{'id': 'x', 'type': 'select', 'label': 'X'}],
        actions=[{'id': 'a', 'type': 'jump', 'label': 'A'}],
    )

    messages = [
        diagnostic.message
        for diagnostic in StructureValidator(settings).validate(tree)
    ]

    assert messages == [
        'Field type "select" requires "options"',
        'Invalid action type: "jump". Valid types are: submit, navigate, custom, reset',
    ]


def test_positions(settings: ParserSettings) -> None:
    """Diagnostics carry the position of their node when it is known."""
    positions = {('view', 'home'): (1, 2)}

    diagnostic, = StructureValidator(settings, positions).validate({'view': {'home': {}}})

    assert diagnostic.path == 'view.home'
    assert (diagnostic.line, diagnostic.column) == (1, 2)


def test_placeholder_types(settings: ParserSettings) -> None:
    """Placeholder types need neither an identifier nor a label."""
    settings = settings.model_copy(update={'placeholder_field_types': frozenset({'sketch'})})
    tree = screen(fields=[{'type': 'sketch'}])

    assert summarize(tree, settings) == []


@pytest.mark.parametrize('layout, expected', (
    pytest.param({'a': 1}, [], id='within limit'),
    pytest.param({'a': {'b': 1}}, [(INVALID, 'view.home.layout.a')], id='beyond limit'),
))
def test_depth_ceiling(layout: dict[str, Any], expected: list[tuple[DiagnosticKind, str]],
                       settings: ParserSettings) -> None:
    """Trees deeper than the ceiling are rejected with a single diagnostic."""
    settings = settings.model_copy(update={'max_depth': 4})

    assert summarize(screen(layout=layout), settings) == expected


def test_cyclic_tree(settings: ParserSettings) -> None:
    """Cyclic trees produced by recursive aliases are rejected with a single diagnostic."""
    cycle: list[Any] = []
    cycle.append(cycle)

    diagnostics = StructureValidator(settings).validate({'view': cycle})

    assert len(diagnostics) == 1
    assert diagnostics[0].kind is INVALID


@pytest.mark.parametrize('tree, expected', (
    pytest.param(
        {'view': {1: {'title': 'A'}, '1': {'title': 'B'}}},
        [(INVALID, 'view.1')],
        id='integer and quoted integer',
    ),
    pytest.param(
        {'view': {True: {'title': 'A'}, 'True': {'title': 'B'}}},
        [(INVALID, 'view.True')],
        id='boolean and quoted boolean',
    ),
    pytest.param(
        {'view': {}, 'validations': {None: {'name': 'a', 'rules': {}}, 'None': {'name': 'b', 'rules': {}}}},
        [(INVALID, 'validations.None')],
        id='null and quoted null',
    ),
    pytest.param(
        {'view': {1: {'title': 'A'}, '2': {'title': 'B'}}},
        [],
        id='distinct keys',
    ),
))
def test_colliding_keys(tree: Any, expected: list[tuple[DiagnosticKind, str]],  # noqa: ANN401
                        settings: ParserSettings) -> None:
    """Keys that read as the same text are reported instead of replaced."""
    assert summarize(tree, settings) == expected


def test_colliding_keys_message(settings: ParserSettings) -> None:
    diagnostic, = StructureValidator(settings).validate({'view': {1: {'title': 'A'}, '1': {'title': 'B'}}})

    assert diagnostic.message == 'Screen key "1" is defined more than once'


@pytest.mark.parametrize('attributes, expected', (
    pytest.param({}, [], id='within limit'),
    pytest.param({'description': 'Start page'}, [(INVALID, '')], id='beyond limit'),
))
def test_size_ceiling(attributes: dict[str, Any], expected: list[tuple[DiagnosticKind, str]],
                      settings: ParserSettings) -> None:
    """Trees with more values than the ceiling are rejected with a single diagnostic."""
    settings = settings.model_copy(update={'max_nodes': 4})

    assert summarize(screen(**attributes), settings) == expected


def test_shared_values_are_counted_per_reference(settings: ParserSettings) -> None:
    """Values shared through aliases count once for every reference."""
    settings = settings.model_copy(update={'max_nodes': 50})
    shared = ['x'] * 10
    tree = screen(layout={'rows': [shared] * 10})

    diagnostic, = StructureValidator(settings).validate(tree)

    assert diagnostic.kind is INVALID
    assert diagnostic.message == 'Document has more than 50 values'
