"""Article routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, status

from app.routes.dependencies import (
    PageParams,
    get_article_form,
    get_article_service,
    get_media_service,
    get_page_params,
)
from app.schemas.article import ArticleOut, MediaUrl
from app.schemas.envelope import MessageResponse, Page, SuccessResponse
from app.schemas.error import ErrorResponse
from app.services.articles import ArticleForm, ArticleService
from app.services.media import MediaService

router = APIRouter(tags=["Articles"])
admin_router = APIRouter(tags=["Articles (Admin)"])

_ARTICLE_FORM_OPENAPI: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "required": ["title", "author", "content"],
                    "properties": {
                        "title": {"type": "string", "minLength": 3, "maxLength": 100},
                        "author": {"type": "string", "minLength": 3, "maxLength": 50},
                        "status": {"type": "string", "enum": ["draft", "published"]},
                        "content": {"type": "string", "description": "JSON document as a string."},
                        "photo_header": {
                            "type": "string",
                            "description": "Header image URL; ignored when photo_header_file is sent.",
                        },
                        "photo_header_file": {"type": "string", "format": "binary"},
                    },
                    "additionalProperties": {
                        "type": "string",
                        "format": "binary",
                        "description": "Inline media as content_files[<key>] or content_file_<key>.",
                    },
                }
            }
        },
    }
}

_WRITE_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}

ArticleId = Annotated[int, Path(alias="id", gt=0)]


@router.get("/articles", response_model=SuccessResponse[Page[ArticleOut]])
def list_published_articles(
    pagination: Annotated[PageParams, Depends(get_page_params)],
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> SuccessResponse[Page[ArticleOut]]:
    articles = service.list_published(page=pagination.page, limit=pagination.limit)
    return SuccessResponse[Page[ArticleOut]](message="articles retrieved", data=articles)


@router.get(
    "/articles/{id}",
    response_model=SuccessResponse[ArticleOut],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_published_article(
    article_id: ArticleId,
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> SuccessResponse[ArticleOut]:
    return SuccessResponse[ArticleOut](message="article retrieved", data=service.get_published(article_id))


@admin_router.get("/articles", response_model=SuccessResponse[Page[ArticleOut]])
def list_all_articles(
    pagination: Annotated[PageParams, Depends(get_page_params)],
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> SuccessResponse[Page[ArticleOut]]:
    articles = service.list_all(page=pagination.page, limit=pagination.limit)
    return SuccessResponse[Page[ArticleOut]](message="articles retrieved", data=articles)


@admin_router.post(
    "/articles",
    response_model=SuccessResponse[ArticleOut],
    status_code=status.HTTP_201_CREATED,
    responses=_WRITE_ERRORS,
    openapi_extra=_ARTICLE_FORM_OPENAPI,
)
def create_article(
    form: Annotated[ArticleForm, Depends(get_article_form)],
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> SuccessResponse[ArticleOut]:
    return SuccessResponse[ArticleOut](message="article created", data=service.create_article(form))


@admin_router.put(
    "/articles/{id}",
    response_model=SuccessResponse[ArticleOut],
    responses={**_WRITE_ERRORS, 404: {"model": ErrorResponse}},
    openapi_extra=_ARTICLE_FORM_OPENAPI,
)
def update_article(
    article_id: ArticleId,
    form: Annotated[ArticleForm, Depends(get_article_form)],
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> SuccessResponse[ArticleOut]:
    return SuccessResponse[ArticleOut](message="article updated", data=service.update_article(article_id, form))


@admin_router.delete(
    "/articles/{id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_article(
    article_id: ArticleId,
    service: Annotated[ArticleService, Depends(get_article_service)],
) -> MessageResponse:
    service.delete_article(article_id)
    return MessageResponse(message="article deleted")


@admin_router.get(
    "/media/signed-url",
    response_model=SuccessResponse[MediaUrl],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_media_signed_url(
    service: Annotated[MediaService, Depends(get_media_service)],
    object_name: Annotated[str, Query(description="Stored object name, e.g. articles/content/...")] = "",
) -> SuccessResponse[MediaUrl]:
    return SuccessResponse[MediaUrl](message="signed url generated", data=service.signed_url(object_name))
