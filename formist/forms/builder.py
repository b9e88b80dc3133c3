from __future__ import annotations

from typing import Any, Iterable

from formist.core.errors import BuilderMisuse
from formist.core.messages import message
from formist.forms.handlers import FormHandlers, LoadHandler, PageHandler, PageHandlers, SubmitHandler, TableDataSource
from formist.schemas.form import (
    FieldGroup,
    FieldType,
    Form,
    FormField,
    Page,
    RuleKind,
    SelectOption,
    TableColumn,
    TableConfig,
    ValidationRule,
)


def select_option(value: str, label: str, disabled: bool = False) -> SelectOption:
    return SelectOption(value=value, label=label, disabled=disabled)


def validation_rule(kind: str, value: Any = None, message: str | None = None) -> ValidationRule:
    return ValidationRule(kind=kind, value=value, message=message)


def _type_default_rules(field_type: FieldType) -> list[ValidationRule]:
    if field_type == FieldType.EMAIL:
        return [ValidationRule(kind=RuleKind.EMAIL, message=message("email_hint"))]
    return []


def _merge_rules(field_type: FieldType, explicit: Iterable[ValidationRule] | None) -> list[ValidationRule]:
    rules = list(explicit or [])
    present = {rule.kind for rule in rules}
    for rule in _type_default_rules(field_type):
        if rule.kind not in present:
            rules.append(rule)
            present.add(rule.kind)
    return rules


def make_field(name: str, field_type: FieldType, label: str = "", **options: Any) -> FormField:
    options["validation"] = _merge_rules(field_type, options.get("validation"))
    return FormField(name=name, type=field_type, label=label, **options)


class FormBuilder:
    def __init__(self, name: str, title: str):
        self._name = name
        self._title = title
        self._description: str | None = None
        self._fields: list[FormField] = []
        self._groups: list[FieldGroup] = []
        self._handlers = FormHandlers()
        self._open_tables: list[TableFieldBuilder] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def handlers(self) -> FormHandlers:
        return FormHandlers(
            on_submit=self._handlers.on_submit,
            on_load=self._handlers.on_load,
            data_sources=dict(self._handlers.data_sources),
        )

    def with_description(self, description: str) -> FormBuilder:
        self._description = description
        return self

    def add_field(self, field: FormField) -> FormBuilder:
        self._fields.append(field)
        return self

    def add_text_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.TEXT, label, **options))

    def add_email_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.EMAIL, label, **options))

    def add_password_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.PASSWORD, label, **options))

    def add_number_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.NUMBER, label, **options))

    def add_select_field(self, name: str, label: str, options: list[SelectOption], **extra: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.SELECT, label, options=options, **extra))

    def add_multi_select_field(self, name: str, label: str, options: list[SelectOption], **extra: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.SELECT, label, options=options, multiple=True, **extra))

    def add_radio_field(self, name: str, label: str, options: list[SelectOption], **extra: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.RADIO, label, options=options, **extra))

    def add_checkbox_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.CHECKBOX, label, **options))

    def add_textarea_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.TEXTAREA, label, **options))

    def add_date_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.DATE, label, **options))

    def add_time_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.TIME, label, **options))

    def add_file_field(self, name: str, label: str, **options: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.FILE, label, **options))

    def add_hidden_field(self, name: str, value: Any) -> FormBuilder:
        return self.add_field(make_field(name, FieldType.HIDDEN, default_value=value))

    def table_field(self, name: str, label: str, **options: Any) -> TableFieldBuilder:
        table = TableFieldBuilder(self, name, label, **options)
        self._open_tables.append(table)
        return table

    def add_group(self, name: str, title: str, fields: list[str], description: str | None = None) -> FormBuilder:
        self._groups.append(FieldGroup(name=name, title=title, description=description, fields=list(fields)))
        return self

    def on_submit(self, handler: SubmitHandler) -> FormBuilder:
        self._handlers.on_submit = handler
        return self

    def on_load(self, handler: LoadHandler) -> FormBuilder:
        self._handlers.on_load = handler
        return self

    def build(self) -> Form:
        if self._open_tables:
            pending = ", ".join(table.name for table in self._open_tables)
            raise BuilderMisuse(f"table field(s) not finalized: {pending}")
        return Form(
            name=self._name,
            title=self._title,
            description=self._description,
            fields=list(self._fields),
            groups=list(self._groups),
        )

    def _attach_table(self, table: TableFieldBuilder, field: FormField, data_source: TableDataSource | None) -> None:
        self._open_tables.remove(table)
        self._fields.append(field)
        if data_source is not None:
            self._handlers.data_sources[field.name] = data_source

    def _discard_table(self, table: TableFieldBuilder) -> None:
        if table in self._open_tables:
            self._open_tables.remove(table)


class TableFieldBuilder:
    """Accumulates a table field; use as a context manager or call ``done()``."""

    def __init__(self, parent: FormBuilder, name: str, label: str, **options: Any):
        self._parent = parent
        self.name = name
        self._label = label
        self._options = options
        self._columns: list[TableColumn] = []
        self._config: dict[str, Any] = {
            "pagination": True,
            "page_size": 10,
            "sortable": True,
            "filterable": True,
            "selectable": False,
            "editable": False,
        }
        self._data_source: TableDataSource | None = None
        self._closed = False

    def __enter__(self) -> TableFieldBuilder:
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            if not self._closed:
                self.done()
        else:
            self._closed = True
            self._parent._discard_table(self)
        return False

    def _ensure_open(self) -> None:
        if self._closed:
            raise BuilderMisuse(f"table field '{self.name}' is already finalized")

    def _update_last_column(self, **changes: Any) -> TableFieldBuilder:
        self._ensure_open()
        if not self._columns:
            raise BuilderMisuse(f"table field '{self.name}' has no column to modify")
        self._columns[-1] = self._columns[-1].model_copy(update=changes)
        return self

    def _set(self, key: str, value: Any) -> TableFieldBuilder:
        self._ensure_open()
        self._config[key] = value
        return self

    def add_column(self, column: TableColumn) -> TableFieldBuilder:
        self._ensure_open()
        self._columns.append(column)
        return self

    def add_text_column(self, key: str, title: str) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.TEXT))

    def add_email_column(self, key: str, title: str) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.EMAIL))

    def add_number_column(self, key: str, title: str) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.NUMBER))

    def add_select_column(self, key: str, title: str, options: list[SelectOption]) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.SELECT, options=options))

    def add_multi_select_column(self, key: str, title: str, options: list[SelectOption]) -> TableFieldBuilder:
        return self.add_column(
            TableColumn(key=key, title=title, type=FieldType.SELECT, options=options, multiple=True)
        )

    def add_checkbox_column(self, key: str, title: str) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.CHECKBOX))

    def add_date_column(self, key: str, title: str) -> TableFieldBuilder:
        return self.add_column(TableColumn(key=key, title=title, type=FieldType.DATE))

    def sortable(self) -> TableFieldBuilder:
        return self._update_last_column(sortable=True)

    def filterable(self) -> TableFieldBuilder:
        return self._update_last_column(filterable=True)

    def width(self, width: str) -> TableFieldBuilder:
        return self._update_last_column(width=width)

    def align(self, align: str) -> TableFieldBuilder:
        return self._update_last_column(align=align)

    def pagination(self, enabled: bool = True) -> TableFieldBuilder:
        return self._set("pagination", enabled)

    def page_size(self, size: int) -> TableFieldBuilder:
        return self._set("page_size", int(size))

    def table_sortable(self, enabled: bool = True) -> TableFieldBuilder:
        return self._set("sortable", enabled)

    def table_filterable(self, enabled: bool = True) -> TableFieldBuilder:
        return self._set("filterable", enabled)

    def selectable(self, enabled: bool = True) -> TableFieldBuilder:
        return self._set("selectable", enabled)

    def editable(self, enabled: bool = True) -> TableFieldBuilder:
        return self._set("editable", enabled)

    def data_source(self, source: TableDataSource) -> TableFieldBuilder:
        self._ensure_open()
        self._data_source = source
        return self

    def done(self) -> FormBuilder:
        self._ensure_open()
        self._closed = True
        field = make_field(
            self.name,
            FieldType.TABLE,
            self._label,
            table_config=TableConfig(columns=list(self._columns), **self._config),
            **self._options,
        )
        self._parent._attach_table(self, field, self._data_source)
        return self._parent


class PageBuilder:
    def __init__(self, name: str, title: str):
        self._name = name
        self._title = title
        self._content: str | None = None
        self._handler: PageHandler | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def handlers(self) -> PageHandlers:
        return PageHandlers(handler=self._handler)

    def with_content(self, content: str) -> PageBuilder:
        self._content = content
        return self

    def with_handler(self, handler: PageHandler) -> PageBuilder:
        self._handler = handler
        return self

    def build(self) -> Page:
        return Page(name=self._name, title=self._title, content=self._content)


def new_form(name: str, title: str) -> FormBuilder:
    return FormBuilder(name, title)


def new_page(name: str, title: str) -> PageBuilder:
    return PageBuilder(name, title)
