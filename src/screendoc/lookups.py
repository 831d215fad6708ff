"""Lookup helpers for parsed documents.

These helpers are used by consumers of the canonical document (rendering
and action dispatch layers) to resolve screens, fields, shared components
and validation rules by name.
"""

from typing import TYPE_CHECKING

from screendoc.schema.fields import RepeaterField

if TYPE_CHECKING:
    from collections.abc import Iterable

if TYPE_CHECKING:
    from screendoc.schema import (
        CommonComponent,
        Document,
        InputField,
        ScreenDefinition,
        ValidationRule,
    )


def get_screen(document: 'Document', name: str) -> 'ScreenDefinition | None':
    """Return a screen by name, or `None` when it does not exist."""
    return document.view.get(name)


def get_screen_names(document: 'Document') -> list[str]:
    """Return the names of all screens in document order."""
    return list(document.view)


def find_field_by_id(fields: 'Iterable[InputField]', field_id: str) -> 'InputField | None':
    """Find a field by its identifier.

    Fields are searched depth-first in order, descending into the item
    fields of repeaters.

    Args:
        fields: Fields to search, for example `screen.fields`.
        field_id: Identifier of the field.

    Returns:
        The first field with a matching identifier, or `None`.
    """
    stack = list(fields)[::-1]

    while stack:
        field = stack.pop()
        if field.id == field_id:
            return field

        if isinstance(field, RepeaterField):
            stack.extend(reversed(field.item_fields))

    return None


def get_common_component(document: 'Document', name: str) -> 'CommonComponent | None':
    """Return a shared component by name, or `None`."""
    return (document.common_components or {}).get(name)


def get_validation_rule(document: 'Document', name: str) -> 'ValidationRule | None':
    """Return a shared validation rule by name, or `None`."""
    return (document.validations or {}).get(name)
