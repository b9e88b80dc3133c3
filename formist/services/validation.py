from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from formist.core.errors import (
    FieldError,
    FieldValidationError,
    MalformedPattern,
    MissingRequiredField,
    NotANumber,
    NotAString,
    ValidationFailed,
)
from formist.core.messages import message
from formist.schemas.form import FieldType, Form, FormField, RuleKind, ValidationRule

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise NotANumber(message("not_a_number", type_name=type(value).__name__))
    if isinstance(value, (int, float, Decimal)):
        try:
            return float(value)
        except (OverflowError, ValueError, InvalidOperation):
            raise NotANumber(message("not_a_number", type_name=type(value).__name__))
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_RE.fullmatch(text):
            return float(text)
    raise NotANumber(message("not_a_number", type_name=type(value).__name__))


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise NotANumber(message("not_an_integer", type_name=type(value).__name__))
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value)
        except (ValueError, OverflowError, InvalidOperation):
            raise NotANumber(message("not_an_integer", type_name=type(value).__name__))
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            return int(text)
    raise NotANumber(message("not_an_integer", type_name=type(value).__name__))


def format_bound(bound: float) -> str:
    if math.isfinite(bound) and bound == int(bound):
        return str(int(bound))
    return repr(bound)


def _require_string(value: Any) -> str:
    if not isinstance(value, str):
        raise NotAString(message("not_a_string"))
    return value


def compile_pattern(pattern: Any) -> re.Pattern[str]:
    if not isinstance(pattern, str):
        raise MalformedPattern(pattern, message("pattern_not_a_string"))
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise MalformedPattern(pattern, message("pattern_invalid", error=str(exc)))


def _fail(rule: ValidationRule, default_key: str, **params: Any) -> ValidationFailed:
    text = rule.message or message(default_key, **params)
    return ValidationFailed(text, rule_kind=rule.kind)


def _check_email(value: Any, rule: ValidationRule) -> None:
    if not EMAIL_RE.fullmatch(_require_string(value)):
        raise _fail(rule, "email_invalid")


def _check_min(value: Any, rule: ValidationRule) -> None:
    number = to_float(value)
    bound = to_float(rule.value)
    if number < bound:
        raise _fail(rule, "min", bound=format_bound(bound))


def _check_max(value: Any, rule: ValidationRule) -> None:
    number = to_float(value)
    bound = to_float(rule.value)
    if number > bound:
        raise _fail(rule, "max", bound=format_bound(bound))


def _check_min_length(value: Any, rule: ValidationRule) -> None:
    text = _require_string(value)
    bound = to_int(rule.value)
    if len(text) < bound:
        raise _fail(rule, "min_length", bound=bound)


def _check_max_length(value: Any, rule: ValidationRule) -> None:
    text = _require_string(value)
    bound = to_int(rule.value)
    if len(text) > bound:
        raise _fail(rule, "max_length", bound=bound)


def _check_pattern(value: Any, rule: ValidationRule) -> None:
    text = _require_string(value)
    if not compile_pattern(rule.value).search(text):
        raise _fail(rule, "pattern_mismatch")


RULE_CHECKS = {
    RuleKind.EMAIL: _check_email,
    RuleKind.MIN: _check_min,
    RuleKind.MAX: _check_max,
    RuleKind.MIN_LENGTH: _check_min_length,
    RuleKind.MAX_LENGTH: _check_max_length,
    RuleKind.PATTERN: _check_pattern,
}


def validate_rule(value: Any, rule: ValidationRule) -> None:
    check = RULE_CHECKS.get(rule.kind)
    if check is None:
        return
    check(value, rule)


def validate_field(field: FormField, value: Any) -> None:
    if field.required and is_empty(value):
        raise MissingRequiredField(message("required"), field=field.name)
    if is_empty(value):
        return
    for rule in field.validation:
        try:
            validate_rule(value, rule)
        except FieldValidationError as exc:
            exc.field = field.name
            raise


def validate_form(form: Form, payload: Mapping[str, Any]) -> None:
    for field in form.fields:
        value = payload.get(field.name)
        # Hidden fields are outside the presentation schema; an absent value is accepted.
        if field.type == FieldType.HIDDEN and is_empty(value):
            continue
        label = field.label or field.name
        try:
            validate_field(field, value)
        except MissingRequiredField as exc:
            raise FieldError(label, message("form_field_required", label=label), cause=exc)
        except FieldValidationError as exc:
            raise FieldError(label, message("form_field_invalid", label=label, message=exc.message), cause=exc)
