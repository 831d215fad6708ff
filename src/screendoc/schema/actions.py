"""Canonical screen actions.

An action is discriminated by its `type` tag, which must be one of
`submit`, `navigate`, `custom` or `reset`.
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from screendoc.models import SchemaModel

from .common import Condition, ConfirmConfig


class NavigationConfig(SchemaModel):
    """Navigation performed after a successful submit."""

    to: str
    params: dict[str, str] | None = None
    message: str | None = None


class ErrorHandlerConfig(SchemaModel):
    """Behavior after a failed submit."""

    message: str | None = None
    retry: bool | None = None
    redirect: str | None = None


class BaseAction(SchemaModel):
    """Attributes shared by every action."""

    id: str = Field(
        title='Action identifier',
        description='Identifier of the action, unique within its screen.',
    )
    label: str = Field(
        title='Action label',
        description='Text shown on the action button.',
    )

    icon: str | None = None
    style: Literal['primary', 'secondary', 'danger', 'link'] | None = None
    disabled_when: Condition | None = None
    confirm: ConfirmConfig | None = None


class SubmitAction(BaseAction):
    type: Literal['submit'] = 'submit'
    url: str | None = None
    method: Literal['GET', 'POST', 'PUT', 'DELETE', 'PATCH'] | None = None
    on_success: NavigationConfig | None = None
    on_error: ErrorHandlerConfig | None = None


class NavigateAction(BaseAction):
    """Moves to another screen."""

    type: Literal['navigate'] = 'navigate'
    to: str = Field(
        title='Destination',
        description='Name of the destination screen or a URL.',
    )
    params: dict[str, str] | None = None


class CustomAction(BaseAction):
    type: Literal['custom'] = 'custom'
    handler: str | None = None
    params: dict[str, Any] | None = None


class ResetAction(BaseAction):
    """Resets the listed fields, or every field when none is listed."""

    type: Literal['reset'] = 'reset'
    fields: list[str] | None = None


#: Any canonical action.
Action = Annotated[
    SubmitAction | NavigateAction | CustomAction | ResetAction,
    Field(discriminator='type'),
]

__all__ = (
    'Action',
    'BaseAction',
    'CustomAction',
    'NavigateAction',
    'ResetAction',
    'SubmitAction',
)
