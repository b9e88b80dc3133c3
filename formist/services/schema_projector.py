from __future__ import annotations

from typing import Any

from formist.core.errors import NotAString
from formist.core.messages import message
from formist.schemas.form import CHOICE_TYPES, FieldType, Form, FormField, SelectOption, TableConfig, RuleKind
from formist.services.validation import to_float, to_int

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
TABLE_COLUMN_DEFINITION = "tableColumn"

_STRING_FORMATS = {
    FieldType.EMAIL: "email",
    FieldType.PASSWORD: "password",
    FieldType.DATE: "date",
    FieldType.TIME: "time",
    FieldType.FILE: "data-url",
}

_WIDGETS = {
    FieldType.PASSWORD: "password",
    FieldType.TEXTAREA: "textarea",
    FieldType.FILE: "file",
    FieldType.CHECKBOX: "checkbox",
    FieldType.RADIO: "radio",
    FieldType.TABLE: "table",
    FieldType.HIDDEN: "hidden",
}


def _option_values(options: list[SelectOption]) -> list[str]:
    return [option.value for option in options]


def _enum_options(options: list[SelectOption]) -> list[dict[str, Any]]:
    items: list[dict[str, Any]] = []
    for option in options:
        item: dict[str, Any] = {"value": option.value, "label": option.label}
        if option.disabled:
            item["disabled"] = True
        items.append(item)
    return items


def table_column_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "key": {"type": "string"},
            "title": {"type": "string"},
            "type": {"type": "string"},
            "sortable": {"type": "boolean"},
            "filterable": {"type": "boolean"},
            "width": {"type": "string"},
            "align": {"type": "string"},
        },
    }


def table_schema(field: FormField) -> dict[str, Any]:
    return {
        "type": "object",
        "title": field.label or message("table_title"),
        "properties": {
            "columns": {
                "type": "array",
                "items": {"$ref": f"#/definitions/{TABLE_COLUMN_DEFINITION}"},
            },
            "rows": {"type": "array", "items": {"type": "object"}},
            "total": {"type": "integer"},
            "page": {"type": "integer"},
            "limit": {"type": "integer"},
        },
    }


def _type_schema(field: FormField) -> dict[str, Any]:
    if field.type == FieldType.TABLE:
        return table_schema(field)
    if field.type in CHOICE_TYPES:
        values = _option_values(field.options)
        if field.multiple:
            return {"type": "array", "items": {"type": "string", "enum": values}, "uniqueItems": True}
        return {"type": "string", "enum": values}
    if field.type == FieldType.NUMBER:
        return {"type": "number"}
    if field.type == FieldType.CHECKBOX:
        return {"type": "boolean"}
    schema: dict[str, Any] = {"type": "string"}
    if field.type in _STRING_FORMATS:
        schema["format"] = _STRING_FORMATS[field.type]
    if field.type == FieldType.TEXT and field.placeholder:
        schema["examples"] = [field.placeholder]
    return schema


def _apply_rules(schema: dict[str, Any], field: FormField) -> None:
    for rule in field.validation:
        if rule.kind == RuleKind.MIN:
            schema["minimum"] = to_float(rule.value)
        elif rule.kind == RuleKind.MAX:
            schema["maximum"] = to_float(rule.value)
        elif rule.kind == RuleKind.MIN_LENGTH:
            schema["minLength"] = to_int(rule.value)
        elif rule.kind == RuleKind.MAX_LENGTH:
            schema["maxLength"] = to_int(rule.value)
        elif rule.kind == RuleKind.PATTERN:
            if not isinstance(rule.value, str):
                raise NotAString(message("pattern_not_a_string"), field=field.name)
            schema["pattern"] = rule.value


def field_schema(field: FormField) -> dict[str, Any]:
    schema: dict[str, Any] = {"title": field.label}
    if field.description:
        schema["description"] = field.description
    schema.update(_type_schema(field))
    if field.default_value is not None:
        schema["default"] = field.default_value
    if field.type != FieldType.TABLE:
        _apply_rules(schema, field)
    return schema


def presentation_schema(form: Form) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    definitions: dict[str, Any] = {}

    for field in form.fields:
        if field.type == FieldType.HIDDEN:
            continue
        properties[field.name] = field_schema(field)
        if field.type == FieldType.TABLE:
            definitions[TABLE_COLUMN_DEFINITION] = table_column_schema()
        if field.required:
            required.append(field.name)

    schema: dict[str, Any] = {
        "$schema": JSON_SCHEMA_DIALECT,
        "type": "object",
        "title": form.title,
    }
    if form.description:
        schema["description"] = form.description
    schema["properties"] = properties
    schema["required"] = required
    schema["definitions"] = definitions
    return schema


def table_ui_options(config: TableConfig) -> dict[str, Any]:
    return {
        "pagination": config.pagination,
        "pageSize": config.page_size,
        "sortable": config.sortable,
        "filterable": config.filterable,
        "selectable": config.selectable,
        "editable": config.editable,
        "columns": [column.model_dump(by_alias=True, exclude_none=True, mode="json") for column in config.columns],
    }


def _widget(field: FormField) -> str | None:
    if field.type == FieldType.SELECT:
        return "checkboxes" if field.multiple else "select"
    return _WIDGETS.get(field.type)


def field_ui_schema(field: FormField) -> dict[str, Any]:
    hints: dict[str, Any] = {}
    options: dict[str, Any] | None = None

    widget = _widget(field)
    if widget:
        hints["ui:widget"] = widget

    if field.type == FieldType.TEXTAREA:
        options = {"rows": 4}
    elif field.type in CHOICE_TYPES and field.options:
        options = {"enumOptions": _enum_options(field.options)}
    elif field.type == FieldType.TABLE and field.table_config is not None:
        options = table_ui_options(field.table_config)

    if field.placeholder:
        hints["ui:placeholder"] = field.placeholder
    if field.disabled:
        hints["ui:disabled"] = True
    if field.group:
        hints["ui:group"] = field.group

    if field.config:
        options = dict(options or {})
        for key, value in field.config.items():
            options.setdefault(key, value)
    if options is not None:
        hints["ui:options"] = options
    return hints


def ui_schema(form: Form) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "ui:order": [field.name for field in form.fields if field.type != FieldType.HIDDEN],
    }
    for field in form.fields:
        schema[field.name] = field_ui_schema(field)

    if form.groups:
        schema["ui:groups"] = [
            {
                "ui:title": group.title,
                "ui:description": group.description or "",
                "ui:fields": list(group.fields),
            }
            for group in form.groups
        ]
    return schema


def project(form: Form) -> tuple[dict[str, Any], dict[str, Any]]:
    return presentation_schema(form), ui_schema(form)
