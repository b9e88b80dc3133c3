from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from formist.api.admin.router import router as admin_router
from formist.api.routes import router as routes_router
from formist.core.http_hardening import install_http_hardening
from formist.schemas.api import error_response


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return JSONResponse(error_response(str(exc.detail)), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(error_response("Invalid request data"), status_code=400)


def create_app(admin) -> FastAPI:
    app = FastAPI(title=admin.title, version="0.1.0")
    app.state.admin = admin
    if admin.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=admin.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Accept", "Authorization", "Content-Type", "X-CSRF-Token"],
            expose_headers=["Link"],
            max_age=300,
        )
    install_http_hardening(app)
    _install_error_handlers(app)

    app.include_router(admin_router, prefix=admin.settings.ADMIN_PREFIX)
    app.include_router(routes_router, prefix=f"{admin.settings.API_PREFIX}/routes", tags=["Routes"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
