from __future__ import annotations

import logging
from typing import Union

import uvicorn
from fastapi import FastAPI

from formist.core.config import Settings, settings as default_settings
from formist.core.errors import FormistError
from formist.forms.builder import FormBuilder, PageBuilder
from formist.forms.handlers import FormHandlers, PageHandlers
from formist.main import create_app
from formist.schemas.form import Form, Page
from formist.schemas.routes import RouteRecord
from formist.services.navigation import persist_route, route_for_form, route_for_page
from formist.services.registry import Registry
from formist.storage.base import RouteStore
from formist.storage.sqlalchemy_store import SqlAlchemyRouteStore

logger = logging.getLogger(__name__)


class Admin:
    """Registry, navigation store and HTTP application of one admin panel."""

    def __init__(self, settings: Settings | None = None, store: RouteStore | None = None):
        self.settings = settings or default_settings
        self.registry = Registry()
        self.store = store
        self.title = self.settings.ADMIN_TITLE
        self.auth_enabled = self.settings.AUTH_ENABLED
        self.cors_enabled = self.settings.CORS_ENABLED
        self.cors_origins = self.settings.cors_origins_list or ["*"]

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Admin:
        settings = settings or default_settings
        store = None
        if settings.DATABASE_URL:
            store = SqlAlchemyRouteStore(settings.DATABASE_URL)
        return cls(settings=settings, store=store)

    def with_storage(self, store: RouteStore) -> Admin:
        self.store = store
        return self

    def set_title(self, title: str) -> Admin:
        self.title = title
        return self

    def enable_auth(self, enabled: bool) -> Admin:
        self.auth_enabled = enabled
        return self

    def enable_cors(self, enabled: bool, *origins: str) -> Admin:
        self.cors_enabled = enabled
        if origins:
            self.cors_origins = list(origins)
        return self

    def register_form(self, form: Union[Form, FormBuilder], handlers: FormHandlers | None = None) -> Admin:
        if isinstance(form, FormBuilder):
            handlers = handlers or form.handlers
            form = form.build()
        self.registry.register_form(form, handlers)
        persist_route(self.store, route_for_form(form, self.settings.ADMIN_PREFIX))
        return self

    def register_page(self, page: Union[Page, PageBuilder], handlers: PageHandlers | None = None) -> Admin:
        if isinstance(page, PageBuilder):
            handlers = handlers or page.handlers
            page = page.build()
        self.registry.register_page(page, handlers)
        persist_route(self.store, route_for_page(page, self.settings.ADMIN_PREFIX))
        return self

    def get_routes(self) -> list[RouteRecord]:
        if self.store is None:
            raise FormistError("storage is not configured")
        return self.store.list()

    def delete_route(self, route_id: str) -> None:
        if self.store is None:
            raise FormistError("storage is not configured")
        self.store.delete(route_id)

    def app(self) -> FastAPI:
        return create_app(self)

    def serve(self, host: str = "0.0.0.0", port: int = 8080) -> None:
        logger.info("serving %s on %s:%s", self.title, host, port)
        uvicorn.run(self.app(), host=host, port=port)
