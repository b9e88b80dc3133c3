from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict


class APIResponse(BaseModel):
    success: bool
    data: Any = None
    error: str | None = None
    message: str | None = None


class ConfigResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    title: str
    auth_enabled: bool
    forms: Dict[str, str]
    pages: Dict[str, str]


class FormResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    schema_: Dict[str, Any] = Field(alias="schema")
    ui_schema: Dict[str, Any]
    data: Any = None


def ok_response(data: Any = None, message: str | None = None) -> Dict[str, Any]:
    body = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    return APIResponse(**body).model_dump(exclude_unset=True)


def error_response(error: str) -> Dict[str, Any]:
    return APIResponse(success=False, error=error).model_dump(exclude_unset=True)
