from fastapi import APIRouter
from formist.api.admin import config, forms, pages

router = APIRouter()
router.include_router(config.router, tags=["AdminConfig"])
router.include_router(forms.router, prefix="/forms", tags=["AdminForms"])
router.include_router(pages.router, prefix="/pages", tags=["AdminPages"])
