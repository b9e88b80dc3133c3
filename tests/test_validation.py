import unittest
from decimal import Decimal

from formist.core.config import settings
from formist.core.errors import (
    FieldError,
    FieldValidationError,
    MalformedPattern,
    MissingRequiredField,
    NotANumber,
    NotAString,
    ValidationFailed,
)
from formist.forms.builder import make_field, new_form, validation_rule
from formist.schemas.form import FieldType
from formist.services.validation import format_bound, is_empty, to_float, to_int, validate_field, validate_form


def _field(field_type=FieldType.TEXT, required=False, rules=None, label="Field"):
    return make_field("value", field_type, label, required=required, validation=list(rules or []))


class CoercionTests(unittest.TestCase):
    def test_empty_values(self):
        for value in (None, "", "   ", "\t\n", [], ()):
            self.assertTrue(is_empty(value), value)
        for value in (0, False, "0", ["x"], {}):
            self.assertFalse(is_empty(value), value)

    def test_to_float_accepts_numbers_and_numeric_strings(self):
        self.assertEqual(to_float(3), 3.0)
        self.assertEqual(to_float(2.5), 2.5)
        self.assertEqual(to_float(Decimal("1.25")), 1.25)
        self.assertEqual(to_float(" 42 "), 42.0)
        self.assertEqual(to_float("-1e3"), -1000.0)
        self.assertEqual(to_float(".5"), 0.5)

    def test_to_float_rejects_everything_else(self):
        for value in ("abc", "1,5", "", None, True, [1], {"a": 1}):
            with self.assertRaises(NotANumber):
                to_float(value)

    def test_to_float_rejects_ints_beyond_float_range(self):
        with self.assertRaises(NotANumber):
            to_float(10**400)
        with self.assertRaises(NotANumber):
            to_float(-(10**400))

    def test_to_int(self):
        self.assertEqual(to_int("7"), 7)
        self.assertEqual(to_int(3.9), 3)
        self.assertEqual(to_int(Decimal("5")), 5)
        with self.assertRaises(NotANumber):
            to_int("3.5")
        with self.assertRaises(NotANumber):
            to_int(False)
        with self.assertRaises(NotANumber):
            to_int(float("inf"))

    def test_format_bound_drops_integral_fraction(self):
        self.assertEqual(format_bound(120.0), "120")
        self.assertEqual(format_bound(-3.0), "-3")
        self.assertEqual(format_bound(2.5), "2.5")


class FieldValidationTests(unittest.TestCase):
    def test_required_field_rejects_empty_values_before_rules(self):
        field = _field(required=True, rules=[validation_rule("minLength", 3), validation_rule("pattern", "(")])
        for value in (None, "", "   ", []):
            with self.assertRaises(MissingRequiredField) as ctx:
                validate_field(field, value)
            self.assertEqual(ctx.exception.message, "field is required")
            self.assertEqual(ctx.exception.field, "value")

    def test_optional_empty_field_skips_rules(self):
        field = _field(rules=[validation_rule("minLength", 3), validation_rule("min", 10), validation_rule("pattern", "(")])
        for value in (None, "", "  ", []):
            validate_field(field, value)

    def test_first_failing_rule_wins(self):
        field = _field(rules=[validation_rule("minLength", 5), validation_rule("pattern", r"^\d+$")])
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, "ab")
        self.assertEqual(ctx.exception.rule_kind, "minLength")
        self.assertEqual(ctx.exception.message, "length must be at least 5 characters")

    def test_max_message_prints_integral_bound(self):
        field = _field(FieldType.NUMBER, rules=[validation_rule("min", 0), validation_rule("max", 120)])
        validate_field(field, 35)
        validate_field(field, "120")
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, 150)
        self.assertEqual(ctx.exception.message, "value must be at most 120")
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, "-1")
        self.assertEqual(ctx.exception.message, "value must be at least 0")

    def test_rule_parameters_may_be_numeric_strings(self):
        field = _field(rules=[validation_rule("minLength", "3"), validation_rule("maxLength", 5.0)])
        validate_field(field, "abcd")
        with self.assertRaises(ValidationFailed):
            validate_field(field, "ab")
        with self.assertRaises(ValidationFailed):
            validate_field(field, "abcdef")

    def test_non_numeric_value_for_numeric_rule(self):
        field = _field(FieldType.NUMBER, rules=[validation_rule("min", 1)])
        with self.assertRaises(NotANumber) as ctx:
            validate_field(field, "abc")
        self.assertNotIsInstance(ctx.exception, ValidationFailed)
        self.assertEqual(ctx.exception.field, "value")
        with self.assertRaises(NotANumber):
            validate_field(field, True)

    def test_huge_integer_value_is_a_coercion_error(self):
        field = _field(FieldType.NUMBER, rules=[validation_rule("max", 120)])
        with self.assertRaises(NotANumber) as ctx:
            validate_field(field, 10**400)
        self.assertEqual(ctx.exception.field, "value")

    def test_non_numeric_rule_parameter(self):
        field = _field(FieldType.NUMBER, rules=[validation_rule("max", "lots")])
        with self.assertRaises(NotANumber):
            validate_field(field, 5)

    def test_length_rule_requires_string_value(self):
        field = _field(rules=[validation_rule("minLength", 2)])
        with self.assertRaises(NotAString):
            validate_field(field, 12345)

    def test_length_counts_characters(self):
        field = _field(rules=[validation_rule("maxLength", 6)])
        validate_field(field, "привет")
        with self.assertRaises(ValidationFailed):
            validate_field(field, "приветы")

    def test_email_rule(self):
        field = _field(FieldType.EMAIL, rules=[validation_rule("email")])
        validate_field(field, "user@example.com")
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, "user@localhost")
        self.assertEqual(ctx.exception.message, "invalid email address")

    def test_custom_message_overrides_default(self):
        field = _field(FieldType.EMAIL, rules=[validation_rule("email", message="Enter a valid email")])
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, "nope")
        self.assertEqual(ctx.exception.message, "Enter a valid email")

    def test_pattern_matches_anywhere_in_value(self):
        field = _field(rules=[validation_rule("pattern", r"\d")])
        validate_field(field, "ab1")
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, "abc")
        self.assertEqual(ctx.exception.rule_kind, "pattern")

    def test_malformed_pattern_is_not_a_field_error(self):
        for pattern in ("(", 5):
            field = _field(rules=[validation_rule("pattern", pattern)])
            with self.assertRaises(MalformedPattern) as ctx:
                validate_field(field, "value")
            self.assertNotIsInstance(ctx.exception, FieldValidationError)
            self.assertEqual(ctx.exception.pattern, pattern)

    def test_unknown_rule_kind_is_ignored(self):
        field = _field(rules=[validation_rule("luhn", True)])
        validate_field(field, "anything")


class FormValidationTests(unittest.TestCase):
    def setUp(self):
        self.form = (
            new_form("user", "User")
            .add_text_field("name", "Name", required=True)
            .add_number_field("age", "Age", validation=[validation_rule("min", 0), validation_rule("max", 120)])
            .add_text_field("nickname", "")
            .build()
        )

    def test_valid_payload_passes(self):
        validate_form(self.form, {"name": "Ann", "age": 30})
        validate_form(self.form, {"name": "Ann", "extra": "ignored"})

    def test_missing_required_field_message_uses_label(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"age": 30})
        self.assertEqual(ctx.exception.field_label, "Name")
        self.assertEqual(ctx.exception.message, "field 'Name' is required")
        self.assertIsInstance(ctx.exception.cause, MissingRequiredField)

    def test_rule_failure_message_uses_label(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"name": "Ann", "age": 150})
        self.assertEqual(ctx.exception.message, "field 'Age': value must be at most 120")

    def test_first_failing_field_in_form_order(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"age": 150})
        self.assertEqual(ctx.exception.field_label, "Name")

    def test_label_falls_back_to_name(self):
        form = new_form("f", "F").add_text_field("nickname", "", validation=[validation_rule("minLength", 3)]).build()
        with self.assertRaises(FieldError) as ctx:
            validate_form(form, {"nickname": "ab"})
        self.assertEqual(ctx.exception.field_label, "nickname")

    def test_huge_integer_is_reported_as_field_error(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"name": "Ann", "age": 10**400})
        self.assertEqual(ctx.exception.message, "field 'Age': cannot convert int to a number")
        self.assertIsInstance(ctx.exception.cause, NotANumber)


class HiddenFieldFormValidationTests(unittest.TestCase):
    def setUp(self):
        self.form = (
            new_form("signup", "Signup")
            .add_field(make_field("token", FieldType.HIDDEN, required=True, default_value="x"))
            .add_field(
                make_field("source", FieldType.HIDDEN, validation=[validation_rule("pattern", r"^[a-z]+$")])
            )
            .add_text_field("name", "Name", required=True)
            .build()
        )

    def test_absent_required_hidden_field_is_accepted(self):
        validate_form(self.form, {"name": "a"})
        validate_form(self.form, {"name": "a", "token": ""})

    def test_submitted_hidden_value_still_runs_rules(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"name": "a", "source": "Admin Panel"})
        self.assertEqual(ctx.exception.field_label, "source")

    def test_visible_required_fields_are_still_checked(self):
        with self.assertRaises(FieldError) as ctx:
            validate_form(self.form, {"token": "x"})
        self.assertEqual(ctx.exception.message, "field 'Name' is required")

    def test_standalone_field_validation_keeps_required_check(self):
        with self.assertRaises(MissingRequiredField):
            validate_field(self.form.field("token"), None)


class LocalizedMessagesTests(unittest.TestCase):
    def setUp(self):
        self._backup = {"LOCALE": settings.LOCALE}

    def tearDown(self):
        for key, value in self._backup.items():
            setattr(settings, key, value)

    def test_russian_catalog(self):
        settings.LOCALE = "ru"
        field = _field(FieldType.NUMBER, rules=[validation_rule("max", 120)])
        with self.assertRaises(ValidationFailed) as ctx:
            validate_field(field, 121)
        self.assertEqual(ctx.exception.message, "значение должно быть не более 120")

    def test_unknown_locale_falls_back_to_english(self):
        settings.LOCALE = "xx"
        with self.assertRaises(MissingRequiredField) as ctx:
            validate_field(_field(required=True), "")
        self.assertEqual(ctx.exception.message, "field is required")


if __name__ == "__main__":
    unittest.main()
