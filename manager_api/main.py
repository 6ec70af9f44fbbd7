"""FastAPI application entrypoint for the Manager API."""

from fastapi import FastAPI

from manager_api.api.auth import router as auth_router
from manager_api.api.users import router as users_router
from manager_api.core.errors import register_error_handlers
from manager_api.db import models as _models  # noqa: F401

app = FastAPI(title="Manager API")
register_error_handlers(app)
app.include_router(auth_router)
app.include_router(users_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check stub endpoint for service readiness."""
    return {"status": "ok"}
