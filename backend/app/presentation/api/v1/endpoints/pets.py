"""Pet CRUD endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import UUID4

from app.application.schemas import (
    ApiResponse,
    PaginatedResponse,
    PaginationInfo,
    PetCreate,
    PetResponse,
    PetUpdate,
)
from app.application.services import PetService
from app.config import Settings
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.infrastructure.dependencies import get_app_settings, get_pet_service

router = APIRouter(prefix="/pets", tags=["Pets"])


@router.get(
    "",
    response_model=PaginatedResponse[PetResponse],
    response_model_exclude_none=True,
)
async def list_pets(
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int | None = Query(None, ge=1, description="Page size"),
    search: str | None = Query(None, max_length=100, description="Match name, species, breed or owner"),
    service: PetService = Depends(get_pet_service),
    settings: Settings = Depends(get_app_settings),
) -> PaginatedResponse[PetResponse]:
    """Retrieve a paginated list of pets, newest first, optionally filtered."""
    limit = limit or settings.default_page_size
    if limit > settings.max_page_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"limit must not exceed {settings.max_page_size}",
        )

    result = await service.list_pets(page=page, limit=limit, search=search)
    return PaginatedResponse[PetResponse](
        data=[PetResponse.model_validate(p, from_attributes=True) for p in result.items],
        pagination=PaginationInfo(
            page=result.info.page,
            limit=result.info.limit,
            total=result.info.total,
            total_pages=result.info.total_pages,
        ),
        message=f"Found {result.info.total} pet(s)",
    )


@router.get(
    "/{pet_id}",
    response_model=ApiResponse[PetResponse],
    response_model_exclude_none=True,
)
async def get_pet(
    pet_id: UUID4,
    service: PetService = Depends(get_pet_service),
) -> ApiResponse[PetResponse]:
    """Retrieve a single pet by ID."""
    try:
        pet = await service.get_pet(str(pet_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ApiResponse[PetResponse](
        success=True,
        data=PetResponse.model_validate(pet, from_attributes=True),
    )


@router.post(
    "",
    response_model=ApiResponse[PetResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_pet(
    data: PetCreate,
    service: PetService = Depends(get_pet_service),
) -> ApiResponse[PetResponse]:
    """Register a new pet."""
    try:
        pet = await service.create_pet(data)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ApiResponse[PetResponse](
        success=True,
        data=PetResponse.model_validate(pet, from_attributes=True),
        message="Pet created successfully",
    )


@router.put(
    "/{pet_id}",
    response_model=ApiResponse[PetResponse],
    response_model_exclude_none=True,
)
async def update_pet(
    pet_id: UUID4,
    data: PetUpdate,
    service: PetService = Depends(get_pet_service),
) -> ApiResponse[PetResponse]:
    """Update an existing pet; only the supplied fields change."""
    try:
        pet = await service.update_pet(str(pet_id), data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return ApiResponse[PetResponse](
        success=True,
        data=PetResponse.model_validate(pet, from_attributes=True),
        message="Pet updated successfully",
    )


@router.delete(
    "/{pet_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
async def delete_pet(
    pet_id: UUID4,
    service: PetService = Depends(get_pet_service),
) -> ApiResponse[None]:
    """Delete a pet by ID."""
    try:
        await service.delete_pet(str(pet_id))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ApiResponse[None](success=True, message="Pet deleted successfully")
