"""Picture route handlers.

Pictures are uploaded first and linked to a recipe when the recipe is saved. Image
bytes are served as JPEG by separate endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.common.id_response import IdResponse
from recipe_manager.api.v1.schemas.response.picture_response import PictureSummary
from recipe_manager.deps.auth import CreatorAuth, RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.picture_service import PictureService

router = APIRouter(prefix="/picture", tags=["picture"])

JPEG_MEDIA_TYPE = "image/jpeg"


def get_picture_service() -> PictureService:
    """Get PictureService instance."""
    return PictureService()


PictureServiceDep = Annotated[PictureService, Depends(get_picture_service)]
DbSession = Annotated[Session, Depends(get_db)]


@router.post(
    "/upload",
    summary="Upload a picture",
    description="""
                Stores the image re-encoded as JPEG together with a square thumbnail.
                The picture belongs to no recipe until a recipe referencing it is
                saved; unclaimed uploads are removed after a day.
                """,
    status_code=status.HTTP_201_CREATED,
    response_model=IdResponse,
    responses=error_responses(401, 403, 422),
)
async def upload_picture(
    file: Annotated[UploadFile, File()],
    service: PictureServiceDep,
    db: DbSession,
    _user: CreatorAuth,
) -> IdResponse:
    raw = await file.read()
    picture = service.upload_picture(db, file.filename, raw)
    return IdResponse(id=picture.id)


@router.get(
    "/byRecipe/{recipe_id}",
    summary="List the pictures of a recipe",
    response_model=list[PictureSummary],
    responses=error_responses(401),
)
def list_pictures(
    recipe_id: int,
    service: PictureServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> list[PictureSummary]:
    return [
        PictureSummary.model_validate(picture)
        for picture in service.list_by_recipe(db, recipe_id)
    ]


@router.get(
    "/thumbnail/{picture_id}",
    summary="Get a picture's thumbnail",
    response_class=Response,
    responses={
        200: {"content": {JPEG_MEDIA_TYPE: {}}},
        **error_responses(401, 404),
    },
)
def get_thumbnail(
    picture_id: int,
    service: PictureServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> Response:
    return Response(
        content=service.get_thumbnail(db, picture_id), media_type=JPEG_MEDIA_TYPE
    )


@router.get(
    "/data/{picture_id}",
    summary="Get a picture",
    response_class=Response,
    responses={
        200: {"content": {JPEG_MEDIA_TYPE: {}}},
        **error_responses(401, 404),
    },
)
def get_data(
    picture_id: int,
    service: PictureServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> Response:
    return Response(
        content=service.get_data(db, picture_id), media_type=JPEG_MEDIA_TYPE
    )
