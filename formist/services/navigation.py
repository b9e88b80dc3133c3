from __future__ import annotations

import logging

from formist.schemas.form import Form, Page
from formist.schemas.routes import RouteRecord
from formist.storage.base import RouteStore

logger = logging.getLogger(__name__)


def route_for_form(form: Form, prefix: str = "/admin") -> RouteRecord:
    return RouteRecord(
        name=form.name,
        path=f"{prefix.rstrip('/')}/forms/{form.name}",
        title=form.title,
        description=form.description or None,
        kind="form",
    )


def route_for_page(page: Page, prefix: str = "/admin") -> RouteRecord:
    return RouteRecord(
        name=page.name,
        path=f"{prefix.rstrip('/')}/pages/{page.name}",
        title=page.title,
        kind="page",
    )


def persist_route(store: RouteStore | None, route: RouteRecord) -> RouteRecord | None:
    if store is None:
        return None
    # Navigation metadata is best-effort: a broken store must not block registration.
    try:
        return store.save(route)
    except Exception:
        logger.warning("navigation route %s (%s) was not persisted", route.name, route.kind, exc_info=True)
        return None
