import unittest

from formist.core.errors import NotFoundError
from formist.forms.builder import new_form, new_page
from formist.forms.handlers import FormHandlers, PageHandlers
from formist.services.registry import Registry


class RegistryTests(unittest.TestCase):
    def setUp(self):
        self.registry = Registry()

    def test_forms_are_listed_in_registration_order(self):
        for name in ("users", "orders", "audit"):
            self.registry.register_form(new_form(name, name.title()).build())
        self.assertEqual([form.name for form in self.registry.list_forms()], ["users", "orders", "audit"])

    def test_duplicate_registration_replaces_previous_definition(self):
        first_submit = lambda payload: "first"  # noqa: E731
        second_submit = lambda payload: "second"  # noqa: E731
        self.registry.register_form(new_form("users", "Users").build(), FormHandlers(on_submit=first_submit))
        self.registry.register_form(new_form("orders", "Orders").build())
        self.registry.register_form(new_form("users", "People").build(), FormHandlers(on_submit=second_submit))

        forms = self.registry.list_forms()
        self.assertEqual(len(forms), 2)
        self.assertEqual(forms[0].name, "users")
        self.assertEqual(self.registry.get_form("users").title, "People")
        self.assertIs(self.registry.form_handlers("users").on_submit, second_submit)

    def test_replacement_without_handlers_clears_previous_handlers(self):
        self.registry.register_form(new_form("users", "Users").build(), FormHandlers(on_load=lambda: {}))
        self.registry.register_form(new_form("users", "Users").build())
        self.assertIsNone(self.registry.form_handlers("users").on_load)

    def test_unknown_form(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.registry.get_form("missing")
        self.assertEqual(str(ctx.exception), "form 'missing' not found")
        with self.assertRaises(NotFoundError):
            self.registry.form_handlers("missing")

    def test_pages(self):
        handler = lambda request: {"ok": True}  # noqa: E731
        self.registry.register_page(new_page("about", "About").with_content("Hi").build(), PageHandlers(handler=handler))
        self.registry.register_page(new_page("help", "Help").build())

        self.assertEqual([page.name for page in self.registry.list_pages()], ["about", "help"])
        self.assertEqual(self.registry.get_page("about").content, "Hi")
        self.assertIs(self.registry.page_handlers("about").handler, handler)
        self.assertIsNone(self.registry.page_handlers("help").handler)
        with self.assertRaises(NotFoundError):
            self.registry.get_page("missing")

    def test_forms_and_pages_use_separate_namespaces(self):
        self.registry.register_form(new_form("about", "About form").build())
        self.registry.register_page(new_page("about", "About page").build())
        self.assertEqual(self.registry.get_form("about").title, "About form")
        self.assertEqual(self.registry.get_page("about").title, "About page")


if __name__ == "__main__":
    unittest.main()
