from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from formist.core.deps import get_route_store
from formist.core.errors import NotFoundError, RouteConflict
from formist.schemas.api import ok_response
from formist.schemas.routes import RouteRecord, RouteUpsert
from formist.storage.base import RouteStore

router = APIRouter()


def _dump(route: RouteRecord) -> dict:
    return route.model_dump(by_alias=True, mode="json")


def _route_or_404(store: RouteStore, route_id: str) -> RouteRecord:
    try:
        return store.get(route_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Route not found")


@router.get("")
@router.get("/")
def list_routes(store: RouteStore = Depends(get_route_store)):
    return ok_response([_dump(route) for route in store.list()])


@router.get("/{route_id}")
def get_route(route_id: str, store: RouteStore = Depends(get_route_store)):
    return ok_response(_dump(_route_or_404(store, route_id)))


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_route(payload: RouteUpsert, store: RouteStore = Depends(get_route_store)):
    try:
        saved = store.save(RouteRecord(**payload.model_dump()))
    except RouteConflict:
        raise HTTPException(status_code=409, detail="Route conflicts with an existing route")
    return ok_response(_dump(saved), message="Route created successfully")


@router.put("/{route_id}")
def update_route(route_id: str, payload: RouteUpsert, store: RouteStore = Depends(get_route_store)):
    current = _route_or_404(store, route_id)
    try:
        saved = store.save(current.model_copy(update=payload.model_dump()))
    except RouteConflict:
        raise HTTPException(status_code=409, detail="Route conflicts with an existing route")
    return ok_response(_dump(saved), message="Route updated successfully")


@router.delete("/{route_id}")
def delete_route(route_id: str, store: RouteStore = Depends(get_route_store)):
    try:
        store.delete(route_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Route not found")
    return ok_response(message="Route deleted successfully")
