from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from formist.core.config import settings
from formist.core.deps import get_registry
from formist.core.errors import CoercionError, FieldError, MalformedPattern, NotFoundError
from formist.schemas.api import FormResponse, ok_response
from formist.schemas.form import FieldType, Form, TableData
from formist.services.registry import Registry
from formist.services.schema_projector import project
from formist.services.validation import validate_form

logger = logging.getLogger(__name__)

router = APIRouter()

_PAGING_PARAMS = {"page", "limit"}


def _form_or_404(registry: Registry, name: str) -> Form:
    try:
        return registry.get_form(name)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Form not found")


@router.get("")
@router.get("/")
def list_forms(registry: Registry = Depends(get_registry)):
    return ok_response({form.name: form.title for form in registry.list_forms()})


@router.get("/{name}")
def get_form(name: str, registry: Registry = Depends(get_registry)):
    form = _form_or_404(registry, name)
    try:
        schema, ui_schema = project(form)
    except (CoercionError, MalformedPattern) as exc:
        raise HTTPException(status_code=500, detail=f"Schema generation error: {exc}")

    response = FormResponse(schema=schema, ui_schema=ui_schema)
    handlers = registry.form_handlers(name)
    if handlers.on_load is not None:
        try:
            response.data = handlers.on_load()
        except Exception as exc:
            logger.exception("form %s: load handler failed", name)
            raise HTTPException(status_code=500, detail=f"Load error: {exc}")
    body = response.model_dump(by_alias=True)
    if body.get("data") is None:
        body.pop("data", None)
    return ok_response(body)


@router.post("/{name}")
def submit_form(name: str, payload: Any = Body(default=None), registry: Registry = Depends(get_registry)):
    form = _form_or_404(registry, name)
    handlers = registry.form_handlers(name)
    if handlers.on_submit is None:
        raise HTTPException(status_code=405, detail="POST is not supported for this form")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")

    try:
        validate_form(form, payload)
    except FieldError as exc:
        raise HTTPException(status_code=400, detail=f"Validation error: {exc.message}")
    except MalformedPattern as exc:
        raise HTTPException(status_code=500, detail=f"Validation rule error: {exc}")

    try:
        result = handlers.on_submit(payload)
    except Exception as exc:
        logger.exception("form %s: submit handler failed", name)
        raise HTTPException(status_code=500, detail=f"Processing error: {exc}")
    return ok_response(result)


@router.get("/{name}/tables/{field_name}")
def get_table_data(
    name: str,
    field_name: str,
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    registry: Registry = Depends(get_registry),
):
    form = _form_or_404(registry, name)
    field = form.field(field_name)
    if field is None or field.type != FieldType.TABLE or field.table_config is None:
        raise HTTPException(status_code=404, detail="Table not found")
    source = registry.form_handlers(name).data_source(field_name)
    if source is None:
        raise HTTPException(status_code=404, detail="Table has no data source")

    page_limit = min(limit or field.table_config.page_size or settings.TABLE_DEFAULT_PAGE_SIZE, settings.TABLE_MAX_PAGE_SIZE)
    filters = {key: value for key, value in request.query_params.items() if key not in _PAGING_PARAMS}
    try:
        result = source(page, page_limit, filters)
    except Exception as exc:
        logger.exception("form %s: data source for table %s failed", name, field_name)
        raise HTTPException(status_code=500, detail=f"Table data error: {exc}")

    try:
        data = result if isinstance(result, TableData) else TableData.model_validate(result)
    except ValidationError as exc:
        logger.warning("form %s: data source for table %s returned malformed data", name, field_name)
        raise HTTPException(status_code=500, detail=f"Table data error: {exc.error_count()} invalid value(s)")
    if not data.columns:
        data = data.model_copy(update={"columns": list(field.table_config.columns)})
    return ok_response(data.model_dump(by_alias=True, mode="json"))
