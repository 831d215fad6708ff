"""Document vocabulary and slug generation rules.

This module defines the closed sets of type tags recognized by the
document pipeline (field types, action types, component types) and the
allow-lists derived from them, together with the deterministic slug
function used to key entries authored in the legacy array form.

The rules defined here form part of the public document contract and are
shared by the structural validator, the shape normalizer and the
canonical models.
"""

from re import compile as regexp

#: Field types with a dedicated canonical variant.
FIELD_TYPES = frozenset({
    'text',
    'number',
    'textarea',
    'select',
    'multi_select',
    'combobox',
    'radio_group',
    'checkbox',
    'checkbox_group',
    'date_picker',
    'time_picker',
    'duration_picker',
    'duration_input',
    'file_upload',
    'repeater',
    'data_table',
    'google_map_embed',
    'photo_manager',
    'toggle',
    'image_uploader',
    'badge',
    'browser',
    'calendar',
    'heading',
    'tooltip',
    'pagination',
    'float_area',
    'loader',
    'notification_bar',
    'response_message',
    'timeline',
    'chip',
    'status_label',
    'segmented_control',
    'tabs',
    'line_clamp',
    'disclosure',
    'accordion_panel',
    'section_nav',
    'stepper',
    'information_panel',
    'dropdown',
    'delete_confirm_dialog',
    'definition_list',
})

#: Tag assigned to fields whose type is not in `FIELD_TYPES`.
UNRECOGNIZED_FIELD_TYPE = 'unrecognized'

#: Field types that must carry an option list or an option reference.
SELECT_FIELD_TYPES = frozenset({
    'select',
    'multi_select',
    'radio_group',
    'checkbox_group',
})

#: Presentation-only field types that do not need an `id`.
DISPLAY_ONLY_FIELD_TYPES = frozenset({
    'heading',
    'notification_bar',
    'response_message',
    'timeline',
    'chip',
    'status_label',
    'loader',
    'stepper',
    'section_nav',
    'tabs',
    'disclosure',
    'accordion_panel',
    'information_panel',
    'float_area',
})

#: Field types used in documents but not fully specified yet.
#: They need neither an `id` nor a `label`.
PLACEHOLDER_FIELD_TYPES: frozenset[str] = frozenset()

ACTION_TYPES = ('submit', 'navigate', 'custom', 'reset')

COMPONENT_TYPES = ('field_group', 'action_group', 'layout', 'template')

_PARENTHESES = regexp(r'[()\uff08\uff09]')
_SEPARATORS = regexp(r'\u30fb')
_WHITESPACE = regexp(r'\s+')
#: Hiragana, Katakana and common CJK ideographs are kept.
_FORBIDDEN = regexp(r'[^a-z0-9_\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf]')
_UNDERSCORES = regexp(r'_{2,}')


def to_safe_key(name: str) -> str:
    """Convert a human-readable name into a slug.

    The conversion lower-cases the name, drops ASCII and full-width
    parentheses, turns the middle-dot separator and whitespace runs into
    underscores, removes every character outside ASCII lowercase letters,
    digits, underscore, Hiragana, Katakana and common CJK ideographs, and
    finally collapses and trims underscores.

    Args:
        name: Human-readable name.

    Returns:
        A slug that never starts or ends with an underscore and never
        contains two underscores in a row. May be empty.
    """
    key = name.lower()
    key = _PARENTHESES.sub('', key)
    key = _SEPARATORS.sub('_', key)
    key = _WHITESPACE.sub('_', key)
    key = _FORBIDDEN.sub('', key)
    key = _UNDERSCORES.sub('_', key)

    return key.strip('_')


def unique_key(key: str, taken: set[str] | dict[str, object]) -> str:
    """Return the first free variant of a key.

    The key itself is returned when it is free; otherwise numeric
    suffixes starting at `_2` are tried in order.

    Args:
        key: Preferred key.
        taken: Keys already in use.

    Returns:
        A key not present in `taken`.
    """
    if key not in taken:
        return key

    suffix = 2
    while f'{key}_{suffix}' in taken:
        suffix += 1

    return f'{key}_{suffix}'
