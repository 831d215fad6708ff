"""Shared building blocks of canonical document elements."""

from typing import Any, Literal

from screendoc.models import SchemaModel
from screendoc.values import is_mapping, is_sequence

#: Visibility and enablement conditions are kept as authored. They are
#: evaluated by the rendering layer, not by the document pipeline.
type Condition = dict[str, Any]


class SelectOption(SchemaModel):
    """A selectable option of a select-like field."""

    value: str | int | float | bool
    label: str
    disabled: bool | None = None
    group: str | None = None
    icon: str | None = None
    description: str | None = None


#: An option list, or a string referencing an externally supplied list.
type Options = list[SelectOption] | str


def normalize_options(value: Any) -> Any:  # noqa: ANN401
    """Expand scalar option lists into `{value, label}` pairs.

    Lists whose items are plain scalars are converted item by item so that
    `value` and `label` are equal. Mappings and option references (strings)
    are returned unchanged.

    Args:
        value: Authored option list.

    Returns:
        An option list suitable for `SelectOption` validation.
    """
    if not is_sequence(value):
        return value

    return [
        item if is_mapping(item) else {'value': item, 'label': str(item)}
        for item in value
    ]


class FieldValidation(SchemaModel):
    """Validation rules attached to a field or a shared rule."""

    required: bool | str | None = None
    min: int | float | str | None = None
    max: int | float | str | None = None
    pattern: str | dict[str, str] | None = None
    custom: str | None = None
    message: str | None = None


class ConfirmConfig(SchemaModel):
    """Confirmation dialog shown before an action runs."""

    title: str
    message: str
    confirm_label: str | None = None
    cancel_label: str | None = None


class LayoutConfig(SchemaModel):
    """Layout hints for a screen or a component."""

    columns: int | None = None
    type: Literal['form', 'grid', 'stack', 'tabs'] | None = None
    gap: str | None = None
