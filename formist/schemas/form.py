from __future__ import annotations

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    DATE = "date"
    TIME = "time"
    FILE = "file"
    HIDDEN = "hidden"
    TABLE = "table"


class RuleKind:
    EMAIL = "email"
    MIN = "min"
    MAX = "max"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    PATTERN = "pattern"


CHOICE_TYPES = {FieldType.SELECT, FieldType.RADIO}


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ValidationRule(_FrozenModel):
    kind: str = Field(alias="type")
    value: Any = None
    message: str | None = None


class SelectOption(_FrozenModel):
    value: str
    label: str
    disabled: bool = False


class TableColumn(_FrozenModel):
    key: str
    title: str
    type: FieldType = FieldType.TEXT
    sortable: bool = False
    filterable: bool = False
    width: str | None = None
    align: str | None = None
    options: List[SelectOption] = []
    multiple: bool = False


class TableConfig(_FrozenModel):
    columns: List[TableColumn] = []
    pagination: bool = True
    page_size: int = 10
    sortable: bool = True
    filterable: bool = True
    selectable: bool = False
    editable: bool = False


class TableData(_FrozenModel):
    columns: List[TableColumn] = []
    rows: List[dict[str, Any]] = []
    total: int = 0
    page: int = 1
    limit: int = 10


class FormField(_FrozenModel):
    name: str
    type: FieldType
    label: str = ""
    required: bool = False
    placeholder: str | None = None
    default_value: Any = None
    options: List[SelectOption] = []
    multiple: bool = False
    validation: List[ValidationRule] = []
    group: str | None = None
    description: str | None = None
    disabled: bool = False
    config: dict[str, Any] = {}
    table_config: TableConfig | None = None

    @model_validator(mode="after")
    def _table_config_matches_type(self):
        if self.type == FieldType.TABLE and self.table_config is None:
            raise ValueError(f"table field '{self.name}' requires table_config")
        if self.type != FieldType.TABLE and self.table_config is not None:
            raise ValueError(f"field '{self.name}' of type {self.type.value} cannot carry table_config")
        return self

    def has_rule(self, kind: str) -> bool:
        return any(rule.kind == kind for rule in self.validation)

    def find_option(self, value: str) -> SelectOption | None:
        for option in self.options:
            if option.value == value:
                return option
        return None


class FieldGroup(_FrozenModel):
    name: str
    title: str
    description: str | None = None
    fields: List[str] = []


class Form(_FrozenModel):
    name: str
    title: str
    description: str | None = None
    fields: List[FormField] = []
    groups: List[FieldGroup] = []

    def field(self, name: str) -> FormField | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None


class Page(_FrozenModel):
    name: str
    title: str
    content: str | None = None
