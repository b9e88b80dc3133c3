from __future__ import annotations

import logging

from formist.core.errors import NotFoundError
from formist.forms.handlers import FormHandlers, PageHandlers
from formist.schemas.form import Form, Page

logger = logging.getLogger(__name__)


class Registry:
    def __init__(self):
        self._forms: dict[str, Form] = {}
        self._form_handlers: dict[str, FormHandlers] = {}
        self._pages: dict[str, Page] = {}
        self._page_handlers: dict[str, PageHandlers] = {}

    def register_form(self, form: Form, handlers: FormHandlers | None = None) -> None:
        if form.name in self._forms:
            logger.info("form %s re-registered; previous definition replaced", form.name)
        self._forms[form.name] = form
        self._form_handlers[form.name] = handlers or FormHandlers()

    def register_page(self, page: Page, handlers: PageHandlers | None = None) -> None:
        if page.name in self._pages:
            logger.info("page %s re-registered; previous definition replaced", page.name)
        self._pages[page.name] = page
        self._page_handlers[page.name] = handlers or PageHandlers()

    def list_forms(self) -> list[Form]:
        return list(self._forms.values())

    def get_form(self, name: str) -> Form:
        form = self._forms.get(name)
        if form is None:
            raise NotFoundError("form", name)
        return form

    def form_handlers(self, name: str) -> FormHandlers:
        self.get_form(name)
        return self._form_handlers[name]

    def list_pages(self) -> list[Page]:
        return list(self._pages.values())

    def get_page(self, name: str) -> Page:
        page = self._pages.get(name)
        if page is None:
            raise NotFoundError("page", name)
        return page

    def page_handlers(self, name: str) -> PageHandlers:
        self.get_page(name)
        return self._page_handlers[name]
