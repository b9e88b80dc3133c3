from __future__ import annotations

from typing import Any

from formist.core.config import settings

DEFAULT_LOCALE = "en"

CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "required": "field is required",
        "email_invalid": "invalid email address",
        "email_hint": "Enter a valid email",
        "min": "value must be at least {bound}",
        "max": "value must be at most {bound}",
        "min_length": "length must be at least {bound} characters",
        "max_length": "length must be at most {bound} characters",
        "pattern_mismatch": "value does not match the required format",
        "not_a_string": "value must be a string",
        "not_a_number": "cannot convert {type_name} to a number",
        "not_an_integer": "cannot convert {type_name} to an integer",
        "pattern_not_a_string": "pattern must be a string",
        "pattern_invalid": "invalid regular expression: {error}",
        "form_field_required": "field '{label}' is required",
        "form_field_invalid": "field '{label}': {message}",
        "table_title": "Table",
    },
    "ru": {
        "required": "поле обязательно для заполнения",
        "email_invalid": "некорректный email адрес",
        "email_hint": "Введите корректный email",
        "min": "значение должно быть не менее {bound}",
        "max": "значение должно быть не более {bound}",
        "min_length": "длина должна быть не менее {bound} символов",
        "max_length": "длина должна быть не более {bound} символов",
        "pattern_mismatch": "значение не соответствует требуемому формату",
        "not_a_string": "значение должно быть строкой",
        "not_a_number": "не удается конвертировать {type_name} в число",
        "not_an_integer": "не удается конвертировать {type_name} в целое число",
        "pattern_not_a_string": "паттерн должен быть строкой",
        "pattern_invalid": "некорректное регулярное выражение: {error}",
        "form_field_required": "поле '{label}' обязательно для заполнения",
        "form_field_invalid": "поле '{label}': {message}",
        "table_title": "Таблица",
    },
}


def _locale() -> str:
    locale = str(getattr(settings, "LOCALE", "") or "").strip().lower()
    return locale if locale in CATALOG else DEFAULT_LOCALE


def message(key: str, **params: Any) -> str:
    template = CATALOG[_locale()].get(key) or CATALOG[DEFAULT_LOCALE].get(key) or key
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        return template
