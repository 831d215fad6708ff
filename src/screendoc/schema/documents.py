"""Canonical document and its companion tables."""

from typing import Any, Literal

from pydantic import Field

from screendoc.models import DescribedMixin, SchemaModel

from .actions import Action
from .common import FieldValidation, LayoutConfig
from .fields import InputField
from .screens import ScreenDefinition


class ComponentParam(SchemaModel):
    """A parameter accepted by a shared component."""

    name: str
    type: Literal['string', 'number', 'boolean', 'array', 'object']
    required: bool | None = None
    default: Any = None


class CommonComponent(DescribedMixin, SchemaModel):
    """A component shared by several screens."""

    name: str
    type: Literal['field_group', 'action_group', 'layout', 'template']
    fields: list[InputField] | None = None
    actions: list[Action] | None = None
    layout: LayoutConfig | None = None
    template: str | None = None
    params: list[ComponentParam] | None = None
    used_in: list[str] | None = Field(
        default=None,
        title='Usages',
        description='Names of the screens using the component.',
    )


class ValidationRule(SchemaModel):
    """A named, reusable validation rule."""

    name: str
    rules: FieldValidation
    message: str | None = None


class Document(SchemaModel):
    """The fully validated and normalized document.

    Screens, shared components and validation rules are keyed by name.
    A document is immutable and owned by the caller that parsed it.
    """

    view: dict[str, ScreenDefinition] = Field(
        title='Screens',
        description='Screen definitions keyed by screen name.',
    )
    common_components: dict[str, CommonComponent] | None = None
    validations: dict[str, ValidationRule] | None = None
