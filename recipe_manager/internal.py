"""Internal application.

A second FastAPI application with jobs meant to be triggered by a scheduler on a
private port; it has no authentication of its own. Run it with
``uvicorn recipe_manager.internal:app --port 8081``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.core.config.config import get_settings
from recipe_manager.deps.db import get_db
from recipe_manager.exceptions.handlers import register_exception_handlers
from recipe_manager.middleware.request_id_middleware import RequestIDMiddleware
from recipe_manager.services.notification_service import send_notifications

settings = get_settings()

router = APIRouter(tags=["internal"])


@router.post(
    "/sendNotifications",
    summary="Send new-recipe notifications",
    description="Mails subscribed users the recipes created since the last run.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(503),
)
def send_notifications_job(db: Annotated[Session, Depends(get_db)]) -> None:
    send_notifications(db)


@router.get("/health", response_class=PlainTextResponse)
async def health() -> PlainTextResponse:
    return PlainTextResponse("ok")


app = FastAPI(
    title="Recipe Manager Internal",
    version="1.0.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
register_exception_handlers(app)
app.add_middleware(RequestIDMiddleware)
app.include_router(router, prefix=settings.internal_path)
