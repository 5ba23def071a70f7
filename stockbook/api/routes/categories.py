"""Category endpoints."""

from fastapi import APIRouter, Depends, Response, status

from stockbook.api.dependencies import get_cat_store
from stockbook.application.dto.requests import (
    CreateCategoryRequest,
    RenameCategoryRequest,
)
from stockbook.application.dto.responses import CategoryListResponse, ErrorResponse
from stockbook.core.exceptions import CategoryNotFoundError, DuplicateCategoryError
from stockbook.core.interfaces import ICategoryStore

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    store: ICategoryStore = Depends(get_cat_store),
) -> CategoryListResponse:
    return CategoryListResponse(categories=await store.get_all())


@router.post(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def add_category(
    request: CreateCategoryRequest,
    store: ICategoryStore = Depends(get_cat_store),
) -> CategoryListResponse:
    if not await store.save(request.name):
        raise DuplicateCategoryError(request.name)
    return CategoryListResponse(categories=await store.get_all())


@router.put(
    "/{name}",
    response_model=CategoryListResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def rename_category(
    name: str,
    request: RenameCategoryRequest,
    store: ICategoryStore = Depends(get_cat_store),
) -> CategoryListResponse:
    """Rename a category. Existing products keep the old string."""
    if not await store.rename(name, request.new_name):
        raise CategoryNotFoundError(name)
    return CategoryListResponse(categories=await store.get_all())


@router.delete(
    "/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_category(
    name: str,
    store: ICategoryStore = Depends(get_cat_store),
) -> Response:
    if name not in await store.get_all():
        raise CategoryNotFoundError(name)
    await store.delete(name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
