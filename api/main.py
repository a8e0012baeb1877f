"""FastAPI application entrypoint for the job application tracker API."""

from __future__ import annotations

from fastapi import FastAPI

from api.routes.applications import router as applications_router
from api.routes.dashboard import router as dashboard_router
from api.routes.preferences import router as preferences_router
from core.logging_config import configure_logging

configure_logging()

app = FastAPI(
    title="Job Application Tracker",
    version="0.1.0",
    description=(
        "APIs for tracking job applications, scheduling follow-up reminders, "
        "and summarising progress."
    ),
)

app.include_router(applications_router)
app.include_router(preferences_router)
app.include_router(dashboard_router)


@app.get("/health")
def healthcheck() -> dict[str, str]:
    """Simple readiness probe used by deployment tooling."""

    return {"status": "ok"}
