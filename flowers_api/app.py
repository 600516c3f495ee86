from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from flowers_api.core.config import get_settings
from flowers_api.core.errors import AppError
from flowers_api.core.logs import logger
from flowers_api.routers import entities as entities_router
from flowers_api.routers import invoices as invoices_router
from flowers_api.routers import payments as payments_router
from flowers_api.routers import state as state_router
from flowers_api.routers import statements as statements_router
from flowers_api.services.hydration import AppDataStore, DataHydrator

LOG = logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, no sniffing, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        LOG.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"ok": False, "error": exc.code, "message": exc.message}, status_code=exc.status_code)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    app = FastAPI(title="Flower Export Invoicing API")

    allowed_cors = set()
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(AppError, _app_error_handler)

    # process-wide shared data, populated only by explicit hydration
    app.state.app_data = AppDataStore()
    app.state.hydrator = DataHydrator(app.state.app_data)

    for router in entities_router.routers:
        app.include_router(router)
    app.include_router(statements_router.router)
    app.include_router(invoices_router.router)
    app.include_router(payments_router.router)
    app.include_router(state_router.router)

    @app.get("/health")
    def health():
        return {"ok": True, "storage": settings.storage_backend}

    return app


app = create_app()
