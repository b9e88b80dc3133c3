from __future__ import annotations

import dataclasses
import numbers
import types
import typing
from typing import Any, Iterator, Mapping, NamedTuple

from sqlalchemy.inspection import inspect as sa_inspect

from formist.core.messages import message
from formist.forms.builder import FormBuilder
from formist.schemas.form import FieldType, FormField, RuleKind, ValidationRule

TAG_FORM = "form"
TAG_LABEL = "label"
TAG_REQUIRED = "required"
TAG_TYPE = "type"

_TAG_TYPES = {
    "email": FieldType.EMAIL,
    "password": FieldType.PASSWORD,
    "textarea": FieldType.TEXTAREA,
    "select": FieldType.SELECT,
    "radio": FieldType.RADIO,
    "checkbox": FieldType.CHECKBOX,
    "date": FieldType.DATE,
    "time": FieldType.TIME,
    "file": FieldType.FILE,
    "hidden": FieldType.HIDDEN,
    "number": FieldType.NUMBER,
}


class Member(NamedTuple):
    name: str
    annotation: Any
    tags: Mapping[str, Any]


def _resolved_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError):
        return dict(getattr(record_type, "__annotations__", {}) or {})


def _dataclass_members(record_type: type) -> Iterator[Member]:
    hints = _resolved_hints(record_type)
    for item in dataclasses.fields(record_type):
        yield Member(item.name, hints.get(item.name, item.type), item.metadata or {})


def _pydantic_members(record_type: type) -> Iterator[Member]:
    for name, info in record_type.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        yield Member(name, info.annotation, extra)


def _sqlalchemy_members(mapper: Any) -> Iterator[Member]:
    for column in mapper.columns:
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            python_type = None
        yield Member(column.key, python_type, dict(column.info or {}))


def _annotated_members(record_type: type) -> Iterator[Member]:
    for name, annotation in _resolved_hints(record_type).items():
        if typing.get_origin(annotation) is typing.ClassVar:
            continue
        yield Member(name, annotation, {})


def iter_members(record: Any) -> Iterator[Member]:
    record_type = record if isinstance(record, type) else type(record)
    if dataclasses.is_dataclass(record_type):
        return _dataclass_members(record_type)
    if isinstance(getattr(record_type, "model_fields", None), dict):
        return _pydantic_members(record_type)
    mapper = sa_inspect(record_type, raiseerr=False)
    if mapper is not None and hasattr(mapper, "columns"):
        return _sqlalchemy_members(mapper)
    if record_type.__module__ == "builtins":
        return iter(())
    return _annotated_members(record_type)


def _tag(member: Member, key: str) -> str:
    value = member.tags.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else ""
    return str(value)


def _unwrap(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return _unwrap(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return annotation


def field_name(member: Member) -> str:
    return _tag(member, TAG_FORM) or member.name.lower()


def field_label(member: Member) -> str:
    return _tag(member, TAG_LABEL) or member.name


def field_required(member: Member) -> bool:
    return _tag(member, TAG_REQUIRED) in {"true", "1"}


def field_type(member: Member) -> FieldType:
    declared = _tag(member, TAG_TYPE)
    if declared in _TAG_TYPES:
        return _TAG_TYPES[declared]

    native = _unwrap(member.annotation)
    if not isinstance(native, type):
        return FieldType.TEXT
    if issubclass(native, bool):
        return FieldType.CHECKBOX
    if issubclass(native, numbers.Number):
        return FieldType.NUMBER
    if issubclass(native, str):
        lowered = member.name.lower()
        if "email" in lowered:
            return FieldType.EMAIL
        if "password" in lowered:
            return FieldType.PASSWORD
        return FieldType.TEXT
    return FieldType.TEXT


def field_from_member(member: Member) -> FormField:
    resolved_type = field_type(member)
    validation: list[ValidationRule] = []
    if resolved_type == FieldType.EMAIL:
        validation.append(ValidationRule(kind=RuleKind.EMAIL, message=message("email_hint")))
    return FormField(
        name=field_name(member),
        label=field_label(member),
        type=resolved_type,
        required=field_required(member),
        validation=validation,
    )


def fields_from_struct(record: Any) -> list[FormField]:
    fields: list[FormField] = []
    for member in iter_members(record):
        if member.name.startswith("_"):
            continue
        item = field_from_member(member)
        if item.name:
            fields.append(item)
    return fields


def from_struct(name: str, title: str, record: Any) -> FormBuilder:
    builder = FormBuilder(name, title)
    for item in fields_from_struct(record):
        builder.add_field(item)
    return builder
