"""Canonical input field variants.

An input field is a closed tagged union discriminated by its `type` tag.
Each variant carries only the attributes meaningful to it and declares
the historical spellings it accepts for them, so mapping raw authored
attributes onto the canonical attribute set is expressed next to the
attribute itself.

Fields whose `type` tag is unknown are preserved verbatim as
`UnrecognizedField` instead of being rejected, which lets documents use
field types introduced after this library was released.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
    model_validator,
)

from screendoc.models import DescribedMixin, SchemaModel
from screendoc.names import FIELD_TYPES, UNRECOGNIZED_FIELD_TYPE
from screendoc.values import is_mapping, is_string

from .common import Condition, FieldValidation, Options, SelectOption, normalize_options
from .tables import (
    DataTableColumn,
    DataTableEmptyState,
    DataTableFilterConfig,
    DataTableFixedHeaderConfig,
    DataTableGroupConfig,
    DataTablePaginationConfig,
    DataTableResizeConfig,
    DataTableRow,
    DataTableRowAction,
    DataTableSortConfig,
)

type Size = Literal['small', 'medium', 'large']
type Align = Literal['left', 'center', 'right']
type Direction = Literal['horizontal', 'vertical']
type Variant = Literal['info', 'success', 'warning', 'error']


class BaseInputField(DescribedMixin, SchemaModel):
    """Attributes shared by every field variant.

    Fields authored in the legacy array form are identified by a single
    `field_name` attribute, which stands in for both `id` and `label`
    when those are absent.
    """

    id: str = Field(
        default='unknown',
        title='Field identifier',
        description='Identifier of the field, unique within its screen.',
    )
    label: str = Field(
        default='Unknown',
        title='Field label',
        description='Human-readable label shown next to the field.',
    )

    required: bool | None = None
    disabled: bool | None = None
    readonly: bool | None = None
    placeholder: str | None = None
    default: Any = None
    validation: FieldValidation | str | None = None
    visible_when: Condition | None = None
    class_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices('class_name', 'class'),
    )

    @model_validator(mode='before')
    @classmethod
    def resolve_field_name(cls, data: Any) -> Any:  # noqa: ANN401
        """Fill `id` and `label` from the legacy `field_name` attribute."""
        if not is_mapping(data) or data.get('field_name') is None:
            return data

        return {
            **data,
            **{
                key: data['field_name']
                for key in ('id', 'label')
                if data.get(key) is None
            },
        }


class OptionsMixin(SchemaModel):
    """Mixin for variants requiring an option list or an option reference."""

    options: Options = Field(
        default_factory=list,
        title='Options',
        description=(
            'Selectable options, or a string referencing an option list '
            'supplied by the rendering layer. Scalar items are expanded '
            'into options whose value and label are equal.'
        ),
    )

    @field_validator('options', mode='before')
    @classmethod
    def expand_options(cls, value: Any) -> Any:  # noqa: ANN401
        """Expand scalar option items."""
        return normalize_options(value)


class OptionalOptionsMixin(SchemaModel):
    """Mixin for variants accepting an optional option list."""

    options: Options | None = None

    @field_validator('options', mode='before')
    @classmethod
    def expand_options(cls, value: Any) -> Any:  # noqa: ANN401
        """Expand scalar option items."""
        return normalize_options(value)


class SwitchMixin(SchemaModel):
    """Attributes shared by checkbox and toggle fields."""

    checked_label: str | None = None
    unchecked_label: str | None = None
    size: Size | None = None
    name: str | None = None
    label_position: Literal['left', 'right'] | None = None


class TextField(BaseInputField):
    type: Literal['text'] = 'text'
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    input_type: Literal['text', 'email', 'url', 'tel', 'password'] | None = None


class NumberField(BaseInputField):
    type: Literal['number'] = 'number'
    min: int | float | None = None
    max: int | float | None = None
    step: int | float | None = None
    unit: str | None = None


class TextareaField(BaseInputField):
    type: Literal['textarea'] = 'textarea'
    rows: int | None = None
    min_length: int | None = None
    max_length: int | None = None
    resizable: bool | None = None


class SelectField(OptionsMixin, BaseInputField):
    type: Literal['select'] = 'select'
    searchable: bool | None = None
    clearable: bool | None = None
    size: Literal['s', 'default'] | None = None
    name: str | None = None


class MultiSelectField(OptionsMixin, BaseInputField):
    type: Literal['multi_select'] = 'multi_select'
    min_selections: int | None = None
    max_selections: int | None = None
    searchable: bool | None = None


class ComboboxField(OptionalOptionsMixin, BaseInputField):
    """Searchable select with optional asynchronous option loading."""

    type: Literal['combobox'] = 'combobox'
    mode: Literal['single', 'multi'] | None = None
    async_loader: str | None = None
    min_search_length: int | None = None
    debounce_ms: int | None = None
    clearable: bool | None = None
    max_selections: int | None = None
    no_options_message: str | None = None
    loading_message: str | None = None


class RadioGroupField(OptionsMixin, BaseInputField):
    type: Literal['radio_group'] = 'radio_group'
    direction: Direction | None = None


class CheckboxGroupField(OptionsMixin, BaseInputField):
    type: Literal['checkbox_group'] = 'checkbox_group'
    min_selections: int | None = None
    max_selections: int | None = None
    direction: Direction | None = None


class CheckboxField(SwitchMixin, BaseInputField):
    type: Literal['checkbox'] = 'checkbox'


class ToggleField(SwitchMixin, BaseInputField):
    type: Literal['toggle'] = 'toggle'


class DatePickerField(BaseInputField):
    type: Literal['date_picker'] = 'date_picker'
    format: str | None = None
    min_date: str | None = None
    max_date: str | None = None
    include_time: bool | None = None


class TimePickerField(BaseInputField):
    type: Literal['time_picker'] = 'time_picker'
    format: str | None = None
    minute_step: int | None = None


class DurationPickerField(BaseInputField):
    type: Literal['duration_picker'] = 'duration_picker'
    units: list[Literal['hours', 'minutes', 'seconds', 'days']] | None = None
    min_duration: int | float | None = None
    max_duration: int | float | None = None


class DurationInputField(BaseInputField):
    type: Literal['duration_input'] = 'duration_input'
    display_unit: Literal['hours', 'minutes', 'seconds'] | None = Field(
        default=None,
        validation_alias=AliasChoices('display_unit', 'unit'),
    )
    format: str | None = None


class FileUploadField(BaseInputField):
    """File upload control.

    Accepted file types may be authored as an `accept` list or as a
    comma-joined `accepted_types` string, which takes precedence.
    """

    type: Literal['file_upload'] = 'file_upload'
    accept: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices('accepted_types', 'accept'),
    )
    max_size: int | None = None
    multiple: bool | None = None
    max_files: int | None = None
    drag_drop: bool | None = None

    @field_validator('accept', mode='before')
    @classmethod
    def split_accept(cls, value: Any) -> Any:  # noqa: ANN401
        """Split a comma-joined list of accepted types."""
        if not is_string(value):
            return value

        return [
            item.strip()
            for item in value.split(',')
            if item.strip()
        ]


class RepeaterField(BaseInputField):
    """A group of fields the user can repeat any number of times."""

    type: Literal['repeater'] = 'repeater'
    item_fields: list['InputField'] = Field(
        default_factory=list,
        title='Item fields',
        description='Fields rendered for every repeated item, in order.',
    )
    min_items: int | None = None
    max_items: int | None = None
    add_button_label: str | None = None
    show_remove_button: bool | None = None
    sortable: bool | None = None


class DataTableField(BaseInputField):
    """Tabular data display with selection, sorting, paging and filters."""

    type: Literal['data_table'] = 'data_table'
    columns: list[DataTableColumn] = Field(default_factory=list)
    data: list[DataTableRow] | None = None
    selection: Literal['none', 'single', 'multiple'] | None = None
    row_actions: list[DataTableRowAction] | None = None
    default_sort: DataTableSortConfig | None = None
    pagination: DataTablePaginationConfig | None = None
    filters: DataTableFilterConfig | None = None
    empty_state: DataTableEmptyState | None = None
    height: str | None = None
    striped: bool | None = None
    hoverable: bool | None = None
    bordered: bool | None = None
    compact: bool | None = None
    responsive: bool | None = None
    fixed_header: DataTableFixedHeaderConfig | bool | None = None
    grouping: DataTableGroupConfig | None = None
    column_resize: DataTableResizeConfig | bool | None = None
    layout: Literal['auto', 'fixed'] | None = None


class GoogleMapEmbedField(BaseInputField):
    type: Literal['google_map_embed'] = 'google_map_embed'
    height: str | None = None
    width: str | None = None
    show_open_link: bool | None = None
    zoom: int | None = None


class PhotoConfig(SchemaModel):
    id: str
    src: str
    alt: str | None = None
    is_main: bool | None = None


class PhotoManagerField(BaseInputField):
    type: Literal['photo_manager'] = 'photo_manager'
    photos: list[PhotoConfig] | None = None
    max_photos: int | None = None
    max_file_size: int | None = None
    accepted_formats: list[str] | None = None
    columns: int | None = None


class ImageUploaderField(BaseInputField):
    type: Literal['image_uploader'] = 'image_uploader'
    accepted_formats: list[str] | None = None
    max_file_size: int | None = None
    max_files: int | None = None
    min_files: int | None = None


class BadgeField(BaseInputField):
    type: Literal['badge'] = 'badge'
    color: Literal['gray', 'blue', 'green', 'yellow', 'red'] | None = None
    size: Literal['small', 'medium'] | None = None
    dot: bool | None = None
    count: int | None = None
    max_count: int | None = None
    text: str | None = None


class BrowserItem(SchemaModel):
    """A node of a hierarchical browser column."""

    value: str
    label: str
    children: list['BrowserItem'] | None = None
    disabled: bool | None = None


class BrowserField(BaseInputField):
    type: Literal['browser'] = 'browser'
    items: list[BrowserItem] = Field(default_factory=list)
    default: str | None = None
    max_columns: int | None = Field(
        default=None,
        validation_alias=AliasChoices('max_columns', 'maxColumns'),
    )
    height: str | None = None


class CalendarField(BaseInputField):
    type: Literal['calendar'] = 'calendar'
    default: str | None = None
    from_date: str | None = Field(
        default=None,
        validation_alias=AliasChoices('from_date', 'from'),
    )
    to_date: str | None = Field(
        default=None,
        validation_alias=AliasChoices('to_date', 'to'),
    )
    week_starts_on: Literal[0, 1] | None = Field(
        default=None,
        validation_alias=AliasChoices('week_starts_on', 'weekStartsOn'),
    )
    locale: str | None = None


class HeadingField(BaseInputField):
    """Section heading.

    The heading text defaults to the field label when no explicit
    `text` is authored.
    """

    type: Literal['heading'] = 'heading'
    level: Literal[1, 2, 3, 4, 5, 6] = 2
    text: str = ''
    size: Literal['xs', 'sm', 'md', 'lg', 'xl', '2xl'] | None = None
    align: Align | None = None
    color: Literal['default', 'primary', 'secondary', 'muted', 'danger', 'success', 'warning'] | None = None
    icon: str | None = None

    @model_validator(mode='before')
    @classmethod
    def resolve_text(cls, data: Any) -> Any:  # noqa: ANN401
        """Default the heading text to the label."""
        if not is_mapping(data) or data.get('text') is not None:
            return data

        return {**data, 'text': data.get('label') or data.get('field_name') or ''}


class TooltipField(BaseInputField):
    type: Literal['tooltip'] = 'tooltip'
    content: str = ''
    position: Literal['top', 'bottom', 'left', 'right'] | None = None
    delay: int | None = None
    show_arrow: bool | None = None
    is_html: bool | None = None
    max_width: str | None = None


class PaginationField(BaseInputField):
    type: Literal['pagination'] = 'pagination'
    total_items: int = 0
    current_page: int | None = None
    page_size: int | None = None
    page_size_options: list[int] | None = None
    show_page_size_selector: bool | None = None
    show_item_count: bool | None = None
    show_jump_buttons: bool | None = None
    max_page_buttons: int | None = None
    compact: bool | None = None
    align: Align | None = None


class FloatAreaField(BaseInputField):
    type: Literal['float_area'] = 'float_area'
    position: Literal['top', 'bottom'] | None = None
    show_shadow: bool | None = None
    show_border: bool | None = None
    z_index: int | None = None
    responsive: bool | None = None
    sticky: bool | None = None
    align: Literal['left', 'center', 'right', 'space-between'] | None = Field(
        default=None,
        validation_alias=AliasChoices('float_align', 'align'),
    )
    padding: str | None = None
    gap: str | None = None
    aria_label: str | None = None


class LoaderField(BaseInputField):
    """Loading indicator. Accepts both snake_case and camelCase attributes."""

    type: Literal['loader'] = 'loader'
    size: Size | None = Field(
        default=None,
        validation_alias=AliasChoices('loader_size', 'size'),
    )
    loader_type: Literal['primary', 'light'] | None = Field(
        default=None,
        validation_alias=AliasChoices('loader_type', 'loaderType'),
    )
    overlay: bool | None = None
    show_progress: bool | None = Field(
        default=None,
        validation_alias=AliasChoices('show_progress', 'showProgress'),
    )
    initial_progress: int | float | None = Field(
        default=None,
        validation_alias=AliasChoices('initial_progress', 'initialProgress'),
    )


class NotificationBarField(BaseInputField):
    type: Literal['notification_bar'] = 'notification_bar'
    variant: Variant | None = None
    dismissible: bool | None = None


class ResponseMessageField(BaseInputField):
    type: Literal['response_message'] = 'response_message'
    variant: Variant | None = None


class TimelineItem(SchemaModel):
    time: str
    title: str
    description: str | None = None


class TimelineField(BaseInputField):
    type: Literal['timeline'] = 'timeline'
    items: list[TimelineItem] | None = None


class ChipField(BaseInputField):
    type: Literal['chip'] = 'chip'
    variant: Literal['default', 'primary', 'success', 'warning', 'danger'] | None = None
    removable: bool | None = None


class StatusLabelField(BaseInputField):
    type: Literal['status_label'] = 'status_label'
    variant: Literal['default', 'primary', 'success', 'warning', 'danger', 'info'] | None = None


class SegmentedControlField(OptionalOptionsMixin, BaseInputField):
    type: Literal['segmented_control'] = 'segmented_control'
    default: str | None = None


class TabItem(SchemaModel):
    id: str
    label: str
    content: str | None = None


class TabsField(BaseInputField):
    type: Literal['tabs'] = 'tabs'
    tabs: list[TabItem] | None = None


class LineClampField(BaseInputField):
    type: Literal['line_clamp'] = 'line_clamp'
    lines: int | None = None
    text: str | None = None


class DisclosureField(BaseInputField):
    type: Literal['disclosure'] = 'disclosure'
    default_open: bool | None = Field(
        default=None,
        validation_alias=AliasChoices('default_open', 'defaultOpen'),
    )


class AccordionPanelField(BaseInputField):
    type: Literal['accordion_panel'] = 'accordion_panel'
    default_open: bool | None = Field(
        default=None,
        validation_alias=AliasChoices('default_open', 'defaultOpen'),
    )


class SectionNavItem(SchemaModel):
    id: str
    label: str
    href: str | None = None


class SectionNavField(BaseInputField):
    type: Literal['section_nav'] = 'section_nav'
    items: list[SectionNavItem] | None = None


class DefinitionItem(SchemaModel):
    term: str
    description: str


class DefinitionListField(BaseInputField):
    type: Literal['definition_list'] = 'definition_list'
    items: list[DefinitionItem] | None = None


class StepperStep(SchemaModel):
    id: str
    label: str
    completed: bool | None = None


class StepperField(BaseInputField):
    type: Literal['stepper'] = 'stepper'
    steps: list[StepperStep] | None = None
    current_step: int | None = Field(
        default=None,
        validation_alias=AliasChoices('current_step', 'currentStep'),
    )


class InformationPanelField(BaseInputField):
    type: Literal['information_panel'] = 'information_panel'
    variant: Variant | None = None


class DropdownField(OptionalOptionsMixin, BaseInputField):
    type: Literal['dropdown'] = 'dropdown'


class DeleteConfirmDialogField(BaseInputField):
    type: Literal['delete_confirm_dialog'] = 'delete_confirm_dialog'
    message: str | None = None


class UnrecognizedField(BaseInputField):
    """Fallback variant for field types unknown to this library.

    The authored `type` tag and every authored attribute are preserved,
    so a rendering layer can show a placeholder for the field.
    """

    model_config = ConfigDict(extra='allow')

    type: str = UNRECOGNIZED_FIELD_TYPE


#: Every field variant with a dedicated type tag.
FIELD_VARIANTS: tuple[type[BaseInputField], ...] = (
    TextField,
    NumberField,
    TextareaField,
    SelectField,
    MultiSelectField,
    ComboboxField,
    RadioGroupField,
    CheckboxField,
    CheckboxGroupField,
    DatePickerField,
    TimePickerField,
    DurationPickerField,
    DurationInputField,
    FileUploadField,
    RepeaterField,
    DataTableField,
    GoogleMapEmbedField,
    PhotoManagerField,
    ToggleField,
    ImageUploaderField,
    BadgeField,
    BrowserField,
    CalendarField,
    HeadingField,
    TooltipField,
    PaginationField,
    FloatAreaField,
    LoaderField,
    NotificationBarField,
    ResponseMessageField,
    TimelineField,
    ChipField,
    StatusLabelField,
    SegmentedControlField,
    TabsField,
    LineClampField,
    DisclosureField,
    AccordionPanelField,
    SectionNavField,
    StepperField,
    InformationPanelField,
    DropdownField,
    DeleteConfirmDialogField,
    DefinitionListField,
)


def field_tag(value: Any) -> str:  # noqa: ANN401
    """Resolve the union tag of a raw or canonical field.

    Args:
        value: A raw field mapping or a field model instance.

    Returns:
        The field `type` when it is a known tag, otherwise the tag
        of the fallback variant.
    """
    tag = value.get('type') if is_mapping(value) else getattr(value, 'type', None)
    if is_string(tag) and tag in FIELD_TYPES:
        return tag

    return UNRECOGNIZED_FIELD_TYPE


#: Any canonical input field.
InputField = Annotated[
    Union[  # noqa: UP007
        tuple(
            Annotated[variant, Tag(variant.model_fields['type'].default)]
            for variant in FIELD_VARIANTS
        ) + (
            Annotated[UnrecognizedField, Tag(UNRECOGNIZED_FIELD_TYPE)],
        )
    ],
    Discriminator(field_tag),
]

RepeaterField.model_rebuild()

#: Adapter validating a single raw field into its canonical variant.
field_adapter: TypeAdapter[Any] = TypeAdapter(InputField)

__all__ = (
    'FIELD_VARIANTS',
    'BaseInputField',
    'InputField',
    'SelectOption',
    'UnrecognizedField',
    'field_adapter',
    'field_tag',
)
