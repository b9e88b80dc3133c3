from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response

from formist.core.deps import get_registry
from formist.core.errors import NotFoundError
from formist.schemas.api import ok_response
from formist.services.registry import Registry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{name}")
def get_page(name: str, request: Request, registry: Registry = Depends(get_registry)):
    try:
        page = registry.get_page(name)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Page not found")

    handler = registry.page_handlers(name).handler
    if handler is None:
        return ok_response({"title": page.title, "content": page.content or ""})

    try:
        result = handler(request)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("page %s: handler failed", name)
        raise HTTPException(status_code=500, detail=f"Page handler error: {exc}")
    if isinstance(result, Response):
        return result
    return ok_response(result)
