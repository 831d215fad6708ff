"""Configuration elements of data table fields.

A data table field carries its columns, optional rows, selection mode,
row actions, sorting, pagination, filtering and an empty-state message.
Rows are authored data and are kept as mappings.
"""

from typing import Any, Literal

from pydantic import Field

from screendoc.models import SchemaModel

from .common import ConfirmConfig, SelectOption

#: A table row. Rows carry an `id` and arbitrary cell values.
type DataTableRow = dict[str, Any]


class DataTableColumn(SchemaModel):
    """A single table column."""

    id: str
    label: str
    field: str | None = None
    width: str | None = None
    min_width: str | None = None
    max_width: str | None = None
    resizable: bool | None = None
    sortable: bool | None = None
    filterable: bool | None = None
    format: Literal['text', 'number', 'date', 'datetime', 'currency', 'status'] | None = None
    status_map: dict[str, dict[str, str]] | None = None
    currency_format: dict[str, Any] | None = None
    align: Literal['left', 'center', 'right'] | None = None
    fixed: Literal['left', 'right'] | None = None
    colspan: int | None = None
    rowspan: int | None = None


class DataTableRowAction(SchemaModel):
    """An action offered on every table row."""

    id: str
    label: str
    icon: str | None = None
    style: Literal['primary', 'secondary', 'danger', 'link'] | None = None
    confirm: ConfirmConfig | None = None
    handler: str | None = None


class DataTableSortConfig(SchemaModel):
    """Initial sort order of a table."""

    column: str
    direction: Literal['asc', 'desc'] = 'asc'


class DataTablePaginationConfig(SchemaModel):
    """Pagination of table rows."""

    enabled: bool | None = None
    page_size: int | None = None
    page_size_options: list[int] | None = None
    current_page: int | None = None
    total_count: int | None = None


class DataTableFilterField(SchemaModel):
    """A filter control bound to a column."""

    id: str
    label: str
    column: str
    type: Literal['text', 'select', 'date_range', 'number_range'] = 'text'
    options: list[SelectOption] | None = None
    placeholder: str | None = None


class DataTableFilterConfig(SchemaModel):
    """Filtering controls shown above a table."""

    enabled: bool | None = None
    show_search: bool | None = Field(
        default=None,
        title='Search box flag',
        description='Whether a free-text search box is shown next to the filters.',
    )
    fields: list[DataTableFilterField] | None = None
    layout: Literal['inline', 'stacked'] | None = None


class DataTableEmptyState(SchemaModel):
    """Message shown when a table has no rows."""

    title: str | None = None
    description: str | None = None
    icon: str | None = None
    action: dict[str, Any] | None = None


class DataTableGroupConfig(SchemaModel):
    """Row grouping."""

    enabled: bool | None = None
    field: str | None = None
    header_renderer: str | None = None
    default_expanded: bool | None = None
    collapsible: bool | None = None


class DataTableFixedHeaderConfig(SchemaModel):
    """Sticky table header."""

    enabled: bool | None = None
    offset: int | None = None


class DataTableResizeConfig(SchemaModel):
    """Column resizing."""

    enabled: bool | None = None
    min_width: int | None = None
    max_width: int | None = None
    on_resize: str | None = None
