from typing import List

from application.converters.tag_converter import TagConverter
from application.rest.schemas.input.tag_input import TagCreate, TagUpdate
from application.rest.schemas.output.common_output import DataResponse, ErrorResponse
from application.rest.schemas.output.tag_output import TagResponse
from domain.services.tag_service import (
    TagAlreadyExistsError,
    TagNotFoundError,
    TagService,
)
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from utils.dependencies import get_db, get_tag_service

router = APIRouter()

NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Tag not found.",
    "content": {
        "application/json": {
            "example": {"error": "Not Found", "message": "Tag with ID abc not found"}
        }
    },
}
CONFLICT_RESPONSE = {
    "model": ErrorResponse,
    "description": "Another tag already uses this name.",
    "content": {
        "application/json": {
            "example": {
                "error": "Conflict",
                "message": "Tag with name 'work' already exists",
            }
        }
    },
}


@router.get(
    path="/tags",
    description="Retrieve all tags with their task counts, sorted by name.",
    response_model=DataResponse[List[TagResponse]],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database connection failed.",
        },
    },
)
async def get_tags(
    db: Session = Depends(get_db), tag_service: TagService = Depends(get_tag_service)
) -> DataResponse[List[TagResponse]]:
    """Get all tags.

    1. Router receives request and fresh DB session
    2. Router delegates to Domain Service, passing session
    3. Results flow back through the converter (Entity -> Pydantic)

    Example:
        >>> tags = await get_tags(db, tag_service)
        >>> print([tag.name for tag in tags.data])
        ['personal', 'work']
    """
    try:
        tag_entities = await tag_service.get_all_tags(db)
        return DataResponse(data=TagConverter.entities_to_responses(tag_entities))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tags",
        ) from e


@router.get(
    path="/tags/{tag_id}",
    description="Retrieve a single tag by id.",
    response_model=DataResponse[TagResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE},
)
async def get_tag(
    tag_id: str,
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> DataResponse[TagResponse]:
    try:
        tag_entity = await tag_service.get_tag_by_id(db, tag_id)
        return DataResponse(data=TagConverter.entity_to_response(tag_entity))
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    path="/tags",
    description="Create a new tag; names are unique.",
    response_model=DataResponse[TagResponse],
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid tag data.",
        },
        status.HTTP_409_CONFLICT: CONFLICT_RESPONSE,
    },
)
async def create_tag(
    tag_create: TagCreate,
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> DataResponse[TagResponse]:
    """Create a new tag with domain business rule validation.

    Args:
        tag_create (TagCreate): Pydantic schema containing tag creation data.
        db (Session): Fresh database session for this request.
        tag_service (TagService): Domain service with injected repository.

    Raises:
        HTTPException: 409 if the name is taken, 400 on invalid data.
    """
    try:
        tag_entity = await tag_service.create_tag(
            db, name=tag_create.name, color=tag_create.color
        )
        return DataResponse(data=TagConverter.entity_to_response(tag_entity))
    except TagAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e


@router.patch(
    path="/tags/{tag_id}",
    description="Rename and/or recolor a tag.",
    response_model=DataResponse[TagResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
        status.HTTP_409_CONFLICT: CONFLICT_RESPONSE,
    },
)
async def update_tag(
    tag_id: str,
    tag_update: TagUpdate,
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> DataResponse[TagResponse]:
    try:
        tag_entity = await tag_service.update_tag(
            db, tag_id, name=tag_update.name, color=tag_update.color
        )
        return DataResponse(data=TagConverter.entity_to_response(tag_entity))
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except TagAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e


@router.delete(
    path="/tags/{tag_id}",
    description="Delete a tag; tasks that used it lose the association.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE},
)
async def delete_tag(
    tag_id: str,
    db: Session = Depends(get_db),
    tag_service: TagService = Depends(get_tag_service),
) -> Response:
    deleted = await tag_service.delete_tag(db, tag_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Tag with ID {tag_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
