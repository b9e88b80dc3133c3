from __future__ import annotations

from sqlalchemy import asc
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from formist.core.errors import NotFoundError, RouteConflict
from formist.db.session import make_engine, make_session_factory
from formist.models.route import NavigationRoute, utcnow
from formist.schemas.routes import RouteRecord
from formist.storage.base import new_route_id


class SqlAlchemyRouteStore:
    def __init__(self, engine: Engine | str):
        self.engine = make_engine(engine) if isinstance(engine, str) else engine
        self._session_factory = make_session_factory(self.engine)
        NavigationRoute.__table__.create(bind=self.engine, checkfirst=True)

    def save(self, route: RouteRecord) -> RouteRecord:
        now = utcnow()
        with self._session_factory() as db:
            row = db.get(NavigationRoute, route.id) if route.id else None
            if row is None:
                row = db.query(NavigationRoute).filter(NavigationRoute.name == route.name).first()
            if row is None:
                row = NavigationRoute(
                    id=route.id or new_route_id(route),
                    created_at=route.created_at or now,
                )
                db.add(row)
            row.name = route.name
            row.path = route.path
            row.title = route.title
            row.description = route.description
            row.icon = route.icon
            row.kind = route.kind
            row.updated_at = now
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise RouteConflict(route.name)
            db.refresh(row)
            return RouteRecord.model_validate(row)

    def list(self) -> list[RouteRecord]:
        with self._session_factory() as db:
            rows = (
                db.query(NavigationRoute)
                .order_by(asc(NavigationRoute.kind), asc(NavigationRoute.title))
                .all()
            )
            return [RouteRecord.model_validate(row) for row in rows]

    def get(self, route_id: str) -> RouteRecord:
        with self._session_factory() as db:
            row = db.get(NavigationRoute, route_id)
            if row is None:
                raise NotFoundError("route", route_id)
            return RouteRecord.model_validate(row)

    def delete(self, route_id: str) -> None:
        with self._session_factory() as db:
            row = db.get(NavigationRoute, route_id)
            if row is None:
                raise NotFoundError("route", route_id)
            db.delete(row)
            db.commit()

    def close(self) -> None:
        self.engine.dispose()
