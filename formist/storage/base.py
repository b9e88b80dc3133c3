from __future__ import annotations

from threading import Lock
from typing import Protocol

from formist.core.errors import NotFoundError, RouteConflict
from formist.models.route import utcnow
from formist.schemas.routes import RouteRecord


class RouteStore(Protocol):
    def save(self, route: RouteRecord) -> RouteRecord:
        ...

    def list(self) -> list[RouteRecord]:
        ...

    def get(self, route_id: str) -> RouteRecord:
        ...

    def delete(self, route_id: str) -> None:
        ...

    def close(self) -> None:
        ...


def new_route_id(route: RouteRecord) -> str:
    return f"{route.kind}_{route.name}_{int(utcnow().timestamp())}"


def route_sort_key(route: RouteRecord) -> tuple[str, str]:
    return (route.kind, route.title)


class InMemoryRouteStore:
    def __init__(self):
        self._routes: dict[str, RouteRecord] = {}
        self._lock = Lock()

    def _find_id(self, route: RouteRecord) -> str | None:
        if route.id and route.id in self._routes:
            return route.id
        for route_id, existing in self._routes.items():
            if existing.name == route.name:
                return route_id
        return None

    def save(self, route: RouteRecord) -> RouteRecord:
        now = utcnow()
        with self._lock:
            existing_id = self._find_id(route)
            for route_id, other in self._routes.items():
                if other.name == route.name and route_id != existing_id:
                    raise RouteConflict(route.name)
            if existing_id is not None:
                previous = self._routes.pop(existing_id)
                saved = route.model_copy(
                    update={"id": route.id or existing_id, "created_at": previous.created_at, "updated_at": now}
                )
            else:
                saved = route.model_copy(
                    update={"id": route.id or new_route_id(route), "created_at": route.created_at or now, "updated_at": now}
                )
            self._routes[saved.id] = saved
        return saved

    def list(self) -> list[RouteRecord]:
        with self._lock:
            return sorted(self._routes.values(), key=route_sort_key)

    def get(self, route_id: str) -> RouteRecord:
        with self._lock:
            route = self._routes.get(route_id)
        if route is None:
            raise NotFoundError("route", route_id)
        return route

    def delete(self, route_id: str) -> None:
        with self._lock:
            if self._routes.pop(route_id, None) is None:
                raise NotFoundError("route", route_id)

    def close(self) -> None:
        with self._lock:
            self._routes.clear()
