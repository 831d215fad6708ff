"""Canonical screen definitions.

A screen carries a title, optional header and navigation bars, and its
content as sections, a flat field list or a wizard, followed by actions.
Header and navigation attributes are accepted in both snake_case and
camelCase; the canonical spelling is snake_case.
"""

from typing import TYPE_CHECKING, Literal

from pydantic import AliasChoices, Field

from screendoc.models import DescribedMixin, SchemaModel

from .actions import Action
from .common import Condition, LayoutConfig
from .fields import InputField

if TYPE_CHECKING:
    from collections.abc import Iterator


def either(name: str, camel: str) -> AliasChoices:
    """Accept an attribute in snake_case or camelCase, snake_case first."""
    return AliasChoices(name, camel)


class Tenant(SchemaModel):
    id: str
    name: str


class UserInfo(SchemaModel):
    name: str = ''
    email: str | None = None
    avatar_url: str | None = Field(
        default=None,
        validation_alias=either('avatar_url', 'avatarUrl'),
    )


class HeaderNavDropdownItem(SchemaModel):
    id: str
    label: str
    href: str | None = None
    divider: bool | None = None


class HeaderNavItem(SchemaModel):
    id: str
    label: str
    href: str | None = None
    active: bool | None = None
    disabled: bool | None = None
    dropdown: list[HeaderNavDropdownItem] | None = None


class AppLauncherItem(SchemaModel):
    id: str
    name: str
    url: str
    icon: str | None = None


class AppHeaderConfig(SchemaModel):
    """Application header bar shown above a screen."""

    logo: str | None = None
    logo_alt: str | None = Field(
        default=None,
        validation_alias=either('logo_alt', 'logoAlt'),
    )
    logo_href: str | None = Field(
        default=None,
        validation_alias=either('logo_href', 'logoHref'),
    )
    app_name: str = Field(
        default='',
        validation_alias=either('app_name', 'appName'),
    )
    tenants: list[Tenant] | None = None
    current_tenant_id: str | None = Field(
        default=None,
        validation_alias=either('current_tenant_id', 'currentTenantId'),
    )
    user_info: UserInfo = Field(
        default_factory=UserInfo,
        validation_alias=either('user_info', 'userInfo'),
    )
    navigations: list[HeaderNavItem] | None = None
    app_launcher: list[AppLauncherItem] | None = Field(
        default=None,
        validation_alias=either('app_launcher', 'appLauncher'),
    )
    help_page_url: str | None = Field(
        default=None,
        validation_alias=either('help_page_url', 'helpPageUrl'),
    )
    show_release_note: bool | None = Field(
        default=None,
        validation_alias=either('show_release_note', 'showReleaseNote'),
    )
    release_note_text: str | None = Field(
        default=None,
        validation_alias=either('release_note_text', 'releaseNoteText'),
    )
    show_data_sync: bool | None = Field(
        default=None,
        validation_alias=either('show_data_sync', 'showDataSync'),
    )


class AppNaviDropdownItem(SchemaModel):
    id: str
    label: str
    icon: str | None = None
    disabled: bool | None = None
    href: str | None = None


class AppNaviItem(SchemaModel):
    id: str
    label: str
    type: Literal['button', 'anchor', 'dropdown']
    icon: str | None = None
    disabled: bool | None = None
    current: bool | None = None
    href: str | None = None
    target: Literal['_blank', '_self', '_parent', '_top'] | None = None
    dropdown_items: list[AppNaviDropdownItem] | None = Field(
        default=None,
        validation_alias=either('dropdown_items', 'dropdownItems'),
    )


class AppNaviConfig(SchemaModel):
    """Application navigation bar shown above a screen."""

    label: str | None = None
    items: list[AppNaviItem] = Field(default_factory=list)


class FormSection(SchemaModel):
    """A named group of fields of a multi-section screen."""

    section_name: str = Field(
        default='',
        title='Section name',
        description='Name shown in the section navigation.',
    )
    icon: str | None = None
    publish_toggle: bool | None = None
    input_fields: list[InputField] | None = None


class StepStatus(SchemaModel):
    type: Literal['pending', 'completed', 'error', 'warning', 'closed']
    text: str


class WizardStep(DescribedMixin, SchemaModel):
    """A single step of a wizard."""

    id: str
    title: str
    subtitle: str | None = None
    fields: list[InputField]
    next_condition: Condition | None = None
    status: Literal['pending', 'completed', 'error', 'warning', 'closed'] | StepStatus | None = None
    skippable: bool | None = None


class WizardConfig(SchemaModel):
    """Multi-step form configuration."""

    steps: list[WizardStep]
    layout: Literal['horizontal', 'vertical'] | None = None
    validate_on_step: bool | None = None
    allow_back: bool | None = None
    show_progress: bool | None = None
    clickable_steps: bool | None = None
    active_index: int | None = Field(
        default=None,
        ge=0,
        validation_alias=either('active_index', 'activeIndex'),
    )


class ScreenDefinition(DescribedMixin, SchemaModel):
    """A single application screen.

    Screen content is exactly one of: sections (with `fields` holding
    every section field flattened in order), a flat field list, or a
    wizard. Legacy shorthands are resolved before the definition is built.
    """

    title: str = Field(
        title='Screen title',
        description='Title shown at the top of the screen.',
    )
    app_header: AppHeaderConfig | None = None
    app_navi: AppNaviConfig | None = None
    wizard: WizardConfig | None = None
    sections: list[FormSection] | None = None
    fields: list[InputField] | None = None
    actions: list[Action] | None = None
    layout: LayoutConfig | None = None

    def iter_fields(self) -> 'Iterator[InputField]':
        """Iterate over the top-level fields of the screen and its wizard."""
        yield from self.fields or ()

        if self.wizard is not None:
            for step in self.wizard.steps:
                yield from step.fields
