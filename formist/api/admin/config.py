from fastapi import APIRouter, Depends

from formist.core.deps import get_admin
from formist.schemas.api import ConfigResponse, ok_response

router = APIRouter()


@router.get("/config")
def get_config(admin=Depends(get_admin)):
    registry = admin.registry
    config = ConfigResponse(
        title=admin.title,
        auth_enabled=admin.auth_enabled,
        forms={form.name: form.title for form in registry.list_forms()},
        pages={page.name: page.title for page in registry.list_pages()},
    )
    return ok_response(config.model_dump(by_alias=True))
