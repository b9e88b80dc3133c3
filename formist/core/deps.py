from fastapi import HTTPException, Request
from formist.services.registry import Registry
from formist.storage.base import RouteStore


def get_admin(request: Request):
    return request.app.state.admin


def get_registry(request: Request) -> Registry:
    return request.app.state.admin.registry


def get_route_store(request: Request) -> RouteStore:
    store = request.app.state.admin.store
    if store is None:
        raise HTTPException(status_code=501, detail="Storage not configured")
    return store
