from __future__ import annotations

from typing import Any


class FormistError(Exception):
    pass


class NotFoundError(FormistError):
    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} '{name}' not found")


class BuilderMisuse(FormistError):
    pass


class FieldValidationError(FormistError):
    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class MissingRequiredField(FieldValidationError):
    pass


class ValidationFailed(FieldValidationError):
    def __init__(self, message: str, field: str | None = None, rule_kind: str = ""):
        self.rule_kind = rule_kind
        super().__init__(message, field)


class CoercionError(FieldValidationError):
    pass


class NotANumber(CoercionError):
    pass


class NotAString(CoercionError):
    pass


class MalformedPattern(FormistError):
    def __init__(self, pattern: Any, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(reason)


class FieldError(FormistError):
    """First failing field of a submitted payload."""

    def __init__(self, field_label: str, message: str, cause: FieldValidationError | None = None):
        self.field_label = field_label
        self.message = message
        self.cause = cause
        super().__init__(message)


class RouteConflict(FormistError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"route name '{name}' is already taken")
